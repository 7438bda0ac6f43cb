"""Board complexity checker.

Prints the valid-move count, tile distribution and fingerprint of the board a
seed deals, or of a board pasted from a log as a fingerprint.

Run with: ``python board_complexity_tool.py [seed] ["<fingerprint>"]``
(fingerprint = row1|row2|... e.g. "1719101111|331111717|...")
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

# Ensure src/ is on the import path when run from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from logomatch.complexity import board_complexity, format_report  # type: ignore
from logomatch.constants import MIN_VALID_MOVES  # type: ignore

DEFAULT_SEED = 1661


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report how many valid moves a board offers.")
    parser.add_argument("seed", nargs="?", type=int, default=DEFAULT_SEED)
    parser.add_argument("fingerprint", nargs="?", default=None)
    parser.add_argument("--min-moves", type=int, default=MIN_VALID_MOVES)
    parser.add_argument("-v", "--verbose", action="store_true", help="log generator decisions")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    report = board_complexity(args.seed, args.fingerprint, min_moves=args.min_moves)
    print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
