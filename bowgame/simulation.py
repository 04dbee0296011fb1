"""Per-frame simulation loop.

``Simulation.step(now_ms)`` runs one frame in a fixed order:

1. Clock: delta since the previous frame.
2. Auto-upgrade countdown (runs even while paused, it is what unpauses).
3. Bow state machine (may spawn arrows).
4. Projectiles: movement and hit resolution.
5. Targets: slide-in, burn, front death, upgrade trigger.

The render adapter only ever sees ``snapshot()``; the two external inputs
are ``select_upgrade`` and ``toggle_auto_upgrade``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from bowgame.bow import BowState, update_bow
from bowgame.clock import SimulationClock
from bowgame.context import CombatParams, SimulationContext, new_context
from bowgame.logger import get_logger
from bowgame.rng_service import RNGService
from bowgame.targets import update_targets
from bowgame.upgrades import select_upgrade, update_auto_upgrade

log = get_logger("simulation")


@dataclass(frozen=True)
class TargetView:
    x: float
    y: float
    width: float
    height: float
    hp: float
    max_hp: float
    is_boss: bool
    burning: bool


@dataclass(frozen=True)
class ProjectileView:
    x: float
    y: float
    variant: str  # "flaming" | "electric" | "plain"


@dataclass(frozen=True)
class SimulationSnapshot:
    bow_state: BowState
    draw_fraction: float
    projectiles: Tuple[ProjectileView, ...]
    targets: Tuple[TargetView, ...]
    elapsed_ms: float
    kills: int
    params: CombatParams
    paused_for_upgrade: bool
    pending_choices: Tuple[str, ...]
    auto_upgrade: bool
    message: str
    arrow_variant: str


@dataclass
class FrameSummary:
    delta: float
    fired: int = 0
    hits: int = 0
    killed: bool = False
    upgrade_triggered: bool = False
    upgrade_resolved: bool = False


def arrow_variant(params: CombatParams) -> str:
    if params.flaming_arrows:
        return "flaming"
    if params.electric_arrows:
        return "electric"
    return "plain"


class Simulation:
    def __init__(
        self,
        ctx: SimulationContext | None = None,
        start_ms: float = 0.0,
        rng: RNGService | None = None,
        auto_upgrade: bool = False,
    ) -> None:
        self.ctx = ctx if ctx is not None else new_context(rng=rng, auto_upgrade=auto_upgrade)
        self.clock = SimulationClock(start_ms)
        log.debug(f"simulation started ({len(self.ctx.targets)} targets)")

    def step(self, now_ms: float) -> FrameSummary:
        ctx = self.ctx
        delta = self.clock.tick(now_ms)
        ctx.counters.elapsed_ms = self.clock.elapsed_ms
        summary = FrameSummary(delta=delta)

        summary.upgrade_resolved = update_auto_upgrade(ctx, delta)
        summary.fired = update_bow(ctx, delta)
        summary.hits = len(ctx.projectiles.update(ctx)["hits"])
        offer_before = ctx.upgrade_offer
        summary.killed = update_targets(ctx, delta)
        summary.upgrade_triggered = ctx.upgrade_offer is not offer_before
        return summary

    # --- External inputs ---------------------------------------------------
    def select_upgrade(self, index: int) -> bool:
        return select_upgrade(self.ctx, index)

    def toggle_auto_upgrade(self) -> bool:
        self.ctx.auto_upgrade = not self.ctx.auto_upgrade
        log.info(f"auto upgrade {'on' if self.ctx.auto_upgrade else 'off'}")
        return self.ctx.auto_upgrade

    # --- Render adapter contract -------------------------------------------
    def pending_choices(self) -> List[str]:
        offer = self.ctx.upgrade_offer
        if offer is None or offer.resolved:
            return []
        return offer.names

    def snapshot(self) -> SimulationSnapshot:
        ctx = self.ctx
        variant = arrow_variant(ctx.params)
        return SimulationSnapshot(
            bow_state=ctx.bow.state,
            draw_fraction=ctx.bow.draw_fraction(ctx.params),
            projectiles=tuple(ProjectileView(p.x, p.y, variant) for p in ctx.projectiles),
            targets=tuple(
                TargetView(t.x, t.y, t.width, t.height, t.hp, t.max_hp, t.is_boss, t.burning) for t in ctx.targets
            ),
            elapsed_ms=ctx.counters.elapsed_ms,
            kills=ctx.counters.kills,
            params=replace(ctx.params),
            paused_for_upgrade=ctx.paused_for_upgrade,
            pending_choices=tuple(self.pending_choices()),
            auto_upgrade=ctx.auto_upgrade,
            message=ctx.last_message,
            arrow_variant=variant,
        )


__all__ = [
    "Simulation",
    "SimulationSnapshot",
    "TargetView",
    "ProjectileView",
    "FrameSummary",
    "arrow_variant",
]
