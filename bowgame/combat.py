"""Hit resolution and burn damage-over-time.

Two update rules coexist on purpose: arrow motion elsewhere is a fixed step
per frame, while burn damage here is a rate per second scaled by the
frame delta.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bowgame.constants import BULLSEYE_MULT, BURN_DURATION_S, BURN_EPSILON_S, SPLASH_FRACTION

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.context import SimulationContext
    from bowgame.targets import Target


@dataclass
class HitResult:
    target: "Target"
    damage: float
    bullseye: bool
    splash_target: "Target | None" = None
    splash_damage: float = 0.0


def resolve_hit(ctx: "SimulationContext", target: "Target", behind: "Target | None") -> HitResult:
    """Apply one arrow hit to ``target``.

    ``behind`` is the target queued directly after it; it only takes electric
    splash damage (no bullseye, no further chaining).
    """
    params = ctx.params
    bullseye = ctx.rng.chance(params.bullseye_chance)
    dmg = params.damage * BULLSEYE_MULT if bullseye else params.damage
    target.hp -= dmg

    if params.flaming_arrows:
        # Re-hits refresh the timer, they do not stack.
        target.burning = True
        target.burn_remaining = BURN_DURATION_S

    result = HitResult(target=target, damage=dmg, bullseye=bullseye)
    if params.electric_arrows and behind is not None:
        splash = params.damage * SPLASH_FRACTION
        behind.hp -= splash
        result.splash_target = behind
        result.splash_damage = splash
    return result


def apply_burn(ctx: "SimulationContext", delta: float) -> None:
    seconds = delta / 1000
    for target in ctx.targets:
        if not target.burning:
            continue
        target.hp -= ctx.params.flame_damage * seconds
        target.burn_remaining -= seconds
        if target.burn_remaining <= BURN_EPSILON_S:
            target.burning = False
            target.burn_remaining = 0.0


__all__ = ["HitResult", "resolve_hit", "apply_burn"]
