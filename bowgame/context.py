"""Mutable simulation context.

Every piece of per-run state lives on one ``SimulationContext`` which the
frame loop passes explicitly to each component function. Nothing here is
module-global, so several independent simulations can coexist (tests rely
on this).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from bowgame.bow import Bow
from bowgame.constants import (
    DEFAULT_BULLSEYE_CHANCE,
    DEFAULT_DAMAGE,
    DEFAULT_DOUBLE_SHOT_CHANCE,
    DEFAULT_DRAW_DURATION,
    DEFAULT_FLAME_DAMAGE,
    DEFAULT_RELEASE_DURATION,
)
from bowgame.projectile_system import ProjectileSystem
from bowgame.rng_service import RNGService
from bowgame.targets import SlideState, TargetQueue, spawn_initial_targets
from bowgame.upgrades import UPGRADE_CATALOG, Upgrade, UpgradeOffer


@dataclass
class CombatParams:
    """Tunable combat values. Only upgrades mutate these during play."""

    damage: float = DEFAULT_DAMAGE
    flame_damage: float = DEFAULT_FLAME_DAMAGE
    bullseye_chance: float = DEFAULT_BULLSEYE_CHANCE
    double_shot_chance: float = DEFAULT_DOUBLE_SHOT_CHANCE
    flaming_arrows: bool = False
    electric_arrows: bool = False
    draw_duration: float = DEFAULT_DRAW_DURATION
    release_duration: float = DEFAULT_RELEASE_DURATION


@dataclass
class SessionCounters:
    kills: int = 0
    total_targets: int = 0  # targets ever created; drives the boss rule
    elapsed_ms: float = 0.0


@dataclass
class SimulationContext:
    rng: RNGService
    params: CombatParams = field(default_factory=CombatParams)
    counters: SessionCounters = field(default_factory=SessionCounters)
    bow: Bow = field(default_factory=Bow)
    projectiles: ProjectileSystem = field(default_factory=ProjectileSystem)
    targets: TargetQueue = field(default_factory=TargetQueue)
    slide: SlideState = field(default_factory=SlideState)
    catalog: Sequence[Upgrade] = UPGRADE_CATALOG
    upgrade_offer: UpgradeOffer | None = None
    paused_for_upgrade: bool = False
    auto_upgrade: bool = False
    last_message: str = ""


def new_context(
    rng: RNGService | None = None,
    params: CombatParams | None = None,
    auto_upgrade: bool = False,
    catalog: Sequence[Upgrade] | None = None,
    populate: bool = True,
) -> SimulationContext:
    """Build a fresh context; ``populate`` spawns the initial row of targets."""
    ctx = SimulationContext(
        rng=rng if rng is not None else RNGService.get(),
        params=params if params is not None else CombatParams(),
        auto_upgrade=auto_upgrade,
        catalog=tuple(catalog) if catalog is not None else UPGRADE_CATALOG,
    )
    if populate:
        spawn_initial_targets(ctx)
    return ctx


__all__ = ["CombatParams", "SessionCounters", "SimulationContext", "new_context"]
