"""Upgrade catalog, random draw and the pause/resume gate.

Every UPGRADE_EVERY_KILLS kills the simulation pauses and offers two
distinct upgrades. The offer is resolved exactly once, either by a manual
selection or by the auto-upgrade countdown, whichever comes first; later
resolutions of the same offer are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Sequence

from bowgame.constants import (
    AUTO_UPGRADE_DELAY,
    CHANCE_STEP,
    DAMAGE_STEP,
    DRAW_DURATION_MIN,
    DRAW_DURATION_STEP,
    FLAME_DAMAGE_STEP,
    UPGRADE_CHOICES,
    UPGRADE_EVERY_KILLS,
)
from bowgame.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.context import CombatParams, SimulationContext
    from bowgame.rng_service import RNGService

log = get_logger("upgrades")


@dataclass(frozen=True)
class Upgrade:
    name: str
    apply: Callable[["CombatParams"], None]


def _draw_speed(p: "CombatParams") -> None:
    p.draw_duration = max(DRAW_DURATION_MIN, p.draw_duration - DRAW_DURATION_STEP)


def _flaming_arrows(p: "CombatParams") -> None:
    p.flaming_arrows = True


def _electric_arrows(p: "CombatParams") -> None:
    p.electric_arrows = True


def _flame_damage(p: "CombatParams") -> None:
    p.flame_damage += FLAME_DAMAGE_STEP


def _bullseye_chance(p: "CombatParams") -> None:
    p.bullseye_chance = min(1.0, p.bullseye_chance + CHANCE_STEP)


def _arrow_damage(p: "CombatParams") -> None:
    p.damage += DAMAGE_STEP


def _double_shot(p: "CombatParams") -> None:
    p.double_shot_chance = min(1.0, p.double_shot_chance + CHANCE_STEP)


UPGRADE_CATALOG: tuple[Upgrade, ...] = (
    Upgrade("Draw Speed", _draw_speed),
    Upgrade("Flaming Arrows", _flaming_arrows),
    Upgrade("Electric Arrows", _electric_arrows),
    Upgrade("Flame Damage", _flame_damage),
    Upgrade("Bullseye Chance", _bullseye_chance),
    Upgrade("Arrow Damage", _arrow_damage),
    Upgrade("Double Shot", _double_shot),
)


def draw_upgrades(rng: "RNGService", catalog: Sequence[Upgrade] = UPGRADE_CATALOG, n: int = UPGRADE_CHOICES) -> List[Upgrade]:
    """Pick up to ``n`` distinct upgrades, removing each pick from the pool."""
    pool = list(catalog)
    chosen: List[Upgrade] = []
    while len(chosen) < n and pool:
        chosen.append(pool.pop(rng.randrange(len(pool))))
    return chosen


@dataclass
class UpgradeOffer:
    choices: List[Upgrade] = field(default_factory=list)
    auto_index: int | None = None  # set when the countdown path is armed
    auto_remaining: float = 0.0  # ms until the countdown resolves
    chosen: Upgrade | None = None

    @property
    def resolved(self) -> bool:
        return self.chosen is not None

    @property
    def names(self) -> List[str]:
        return [u.name for u in self.choices]

    def resolve(self, index: int, params: "CombatParams") -> bool:
        """Apply choice ``index`` unless the offer was already resolved."""
        if self.chosen is not None:
            return False
        upgrade = self.choices[index]
        self.chosen = upgrade
        upgrade.apply(params)
        return True


def trigger_upgrade(ctx: "SimulationContext") -> UpgradeOffer:
    ctx.paused_for_upgrade = True
    offer = UpgradeOffer(choices=draw_upgrades(ctx.rng, ctx.catalog))
    if ctx.auto_upgrade and offer.choices:
        offer.auto_index = ctx.rng.randrange(len(offer.choices))
        offer.auto_remaining = AUTO_UPGRADE_DELAY
    ctx.upgrade_offer = offer
    log.info(f"upgrade offered after {ctx.counters.kills} kills:", ", ".join(offer.names))
    return offer


def check_upgrade(ctx: "SimulationContext") -> bool:
    """Open an upgrade offer when the kill count is a positive multiple."""
    kills = ctx.counters.kills
    if kills > 0 and kills % UPGRADE_EVERY_KILLS == 0:
        trigger_upgrade(ctx)
        return True
    return False


def select_upgrade(ctx: "SimulationContext", index: int, auto: bool = False) -> bool:
    """Resolve the current offer with choice ``index`` and resume play.

    Returns False, with no effect, when there is no offer or it was already
    resolved. An out-of-range index raises IndexError.
    """
    offer = ctx.upgrade_offer
    if offer is None:
        log.warn("upgrade selected with no offer pending")
        return False
    if not offer.resolve(index, ctx.params):
        log.debug("upgrade offer already resolved; selection ignored")
        return False
    name = offer.chosen.name
    ctx.last_message = f"Auto: {name} upgraded!" if auto else f"{name} upgraded!"
    ctx.paused_for_upgrade = False
    log.info(ctx.last_message)
    return True


def update_auto_upgrade(ctx: "SimulationContext", delta: float) -> bool:
    """Count down an armed auto-upgrade; resolves it when the delay elapses."""
    offer = ctx.upgrade_offer
    if offer is None or offer.resolved or offer.auto_index is None:
        return False
    offer.auto_remaining -= delta
    if offer.auto_remaining > 0:
        return False
    return select_upgrade(ctx, offer.auto_index, auto=True)


__all__ = [
    "Upgrade",
    "UPGRADE_CATALOG",
    "UpgradeOffer",
    "draw_upgrades",
    "trigger_upgrade",
    "check_upgrade",
    "select_upgrade",
    "update_auto_upgrade",
]
