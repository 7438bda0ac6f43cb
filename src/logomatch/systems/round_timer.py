from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from esper import World

from logomatch.events.bus import EVENT_ROUND_OVER, EVENT_TICK, EventBus
from logomatch.utils.world_state import get_or_create_round_state


@dataclass(frozen=True, slots=True)
class ScoreReport:
    """What the scoring collaborator receives when the clock runs out.

    ``submit`` is False for a zero score; such rounds go straight to the
    leaderboard without posting anything.
    """
    score: int
    matches_made: int
    seed: Optional[int]
    submit: bool


class RoundTimerSystem:
    """Counts the round clock down on each tick and ends the round at zero."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt')
        if dt is None or dt <= 0:
            return
        state = get_or_create_round_state(self.world)
        if state.finished:
            return
        state.time_left = max(0.0, state.time_left - float(dt))
        if state.time_left > 0.0:
            return
        state.finished = True
        report = ScoreReport(
            score=state.score,
            matches_made=state.matches_made,
            seed=state.seed,
            submit=state.score > 0,
        )
        self.event_bus.emit(EVENT_ROUND_OVER, report=report)
