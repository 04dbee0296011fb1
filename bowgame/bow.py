"""Bow state machine: idle -> drawing -> releasing -> idle.

The cycle is driven by elapsed time only. Its draw duration is effectively
the attack speed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from bowgame.projectile_system import shoot_arrow

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.context import CombatParams, SimulationContext


class BowState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    RELEASING = "releasing"


@dataclass
class Bow:
    state: BowState = BowState.IDLE
    timer: float = 0.0  # ms spent in the current state

    def draw_fraction(self, params: "CombatParams") -> float:
        """How far the string is pulled back, 0..1 (render helper)."""
        if self.state is BowState.DRAWING:
            return min(1.0, self.timer / params.draw_duration)
        if self.state is BowState.RELEASING:
            return 1.0 - min(1.0, self.timer / params.release_duration)
        return 0.0


def update_bow(ctx: "SimulationContext", delta: float) -> int:
    """Advance the bow by ``delta`` ms. Returns the number of arrows fired."""
    if ctx.paused_for_upgrade:
        return 0
    bow = ctx.bow
    fired = 0
    if bow.state is BowState.DRAWING:
        bow.timer += delta
        if bow.timer >= ctx.params.draw_duration:
            bow.state = BowState.RELEASING
            bow.timer = 0.0
            fired = shoot_arrow(ctx)
    elif bow.state is BowState.RELEASING:
        bow.timer += delta
        if bow.timer >= ctx.params.release_duration:
            bow.state = BowState.IDLE
            bow.timer = 0.0

    # Idle is momentary unless the row is sliding in.
    if bow.state is BowState.IDLE and not ctx.slide.active:
        bow.state = BowState.DRAWING
        bow.timer = 0.0
    return fired


__all__ = ["BowState", "Bow", "update_bow"]
