"""Board complexity report used when tuning seeds or investigating stuck boards."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from logomatch.constants import MIN_VALID_MOVES
from logomatch.systems.board_ops import count_valid_moves
from logomatch.systems.fingerprint import grid_fingerprint, grid_from_fingerprint
from logomatch.systems.generator import generate_grid


@dataclass(slots=True)
class ComplexityReport:
    seed_requested: int
    # None when the board came from a fingerprint rather than a seed.
    seed_used: Optional[int]
    valid_moves: int
    min_valid_moves: int
    fingerprint: str
    type_counts: Dict[int, int] = field(default_factory=dict)
    degraded: bool = False


def board_complexity(
    seed: int,
    fingerprint: Optional[str] = None,
    *,
    min_moves: int = MIN_VALID_MOVES,
) -> ComplexityReport:
    """Describe the board dealt for ``seed``, or the board encoded by ``fingerprint``."""
    seed_used: Optional[int]
    degraded = False
    if fingerprint:
        grid = grid_from_fingerprint(fingerprint)
        seed_used = None
    else:
        generated = generate_grid(seed, min_moves)
        grid = generated.grid
        seed_used = generated.seed_used
        degraded = generated.degraded
    counts = Counter(tile.id for row in grid for tile in row if tile is not None)
    return ComplexityReport(
        seed_requested=seed,
        seed_used=seed_used,
        valid_moves=count_valid_moves(grid),
        min_valid_moves=min_moves,
        fingerprint=grid_fingerprint(grid),
        type_counts=dict(sorted(counts.items())),
        degraded=degraded,
    )


def format_report(report: ComplexityReport) -> str:
    lines: List[str] = [
        "",
        "--- Board complexity report ---",
        f"Seed requested: {report.seed_requested}",
    ]
    if report.seed_used is None:
        lines.append("Using provided fingerprint (stuck-state board)")
        lines.append("Seed used (board): N/A (custom grid)")
    else:
        lines.append(f"Seed used (board): {report.seed_used}")
    if report.degraded:
        lines.append("WARNING: no seed reached the valid-move floor; best effort board shown")
    lines += [
        "",
        f"Valid moves (swaps that create a match): {report.valid_moves}",
        f"Expected minimum (all seeds): {report.min_valid_moves}",
        "",
        "Tile types on board (id -> count): "
        + ", ".join(f"{type_id}:{count}" for type_id, count in report.type_counts.items()),
        "",
        "Grid fingerprint (tile ids by row):",
        report.fingerprint,
        "",
        "--- End report ---",
        "",
    ]
    return "\n".join(lines)
