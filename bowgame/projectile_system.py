"""ProjectileSystem.

Owns every arrow in flight: spawning on release, per-frame movement,
collision against the target queue and removal.

Projectile record fields:
    x, y: position (world pixels)
    vx, vy: velocity in pixels per *frame* (not scaled by delta)
    hit: set once the arrow has struck a target this frame

Public API:
    spawn(x, y, vx, vy) -> Projectile
    update(ctx) -> summary dict
    iter() / len() for rendering

Collision Rules:
  * Targets are scanned in queue order; the first rectangle containing the
    arrow point takes the hit and the scan stops (one target per arrow).
  * A hit arrow is consumed.
  * Arrows at x >= WORLD_WIDTH, or with y outside (0, WORLD_HEIGHT), are
    discarded.

The system does not draw anything; the renderer reads the active
projectiles through the simulation snapshot.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List

from bowgame.combat import resolve_hit
from bowgame.constants import ARROW_SPEED, BOW_X, BOW_Y, WORLD_HEIGHT, WORLD_WIDTH
from bowgame.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.context import SimulationContext

log = get_logger("projectiles")


@dataclass
class Projectile:
    x: float
    y: float
    vx: float
    vy: float
    hit: bool = False

    def in_bounds(self) -> bool:
        return self.x < WORLD_WIDTH and 0 < self.y < WORLD_HEIGHT


class ProjectileSystem:
    def __init__(self) -> None:
        self._projectiles: List[Projectile] = []

    # --- Collection Protocol -------------------------------------------------
    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._projectiles)

    def __iter__(self) -> Iterator[Projectile]:  # pragma: no cover - trivial
        return iter(self._projectiles)

    # --- API -----------------------------------------------------------------
    def spawn(self, x: float, y: float, vx: float, vy: float) -> Projectile:
        proj = Projectile(x=x, y=y, vx=vx, vy=vy)
        self._projectiles.append(proj)
        return proj

    # --- Simulation ----------------------------------------------------------
    def update(self, ctx: "SimulationContext"):
        """Advance all projectiles one frame and resolve hits.

        Frozen while an upgrade choice is pending or the target row is
        sliding. Returns a summary dict for instrumentation / tests.
        """
        hits = []
        if ctx.paused_for_upgrade or ctx.slide.active:
            return {"hits": hits, "removed": 0, "active": len(self._projectiles)}

        for proj in self._projectiles:
            proj.x += proj.vx
            proj.y += proj.vy

        for proj in self._projectiles:
            for i, target in enumerate(ctx.targets):
                if target.contains(proj.x, proj.y):
                    hits.append(resolve_hit(ctx, target, ctx.targets.behind(i)))
                    proj.hit = True
                    break

        before = len(self._projectiles)
        self._projectiles = [p for p in self._projectiles if not p.hit and p.in_bounds()]
        return {
            "hits": hits,
            "removed": before - len(self._projectiles),
            "active": len(self._projectiles),
        }


def shoot_arrow(ctx: "SimulationContext") -> int:
    """Spawn one arrow (two on a double-shot roll) aimed at the front target.

    Returns the number of arrows spawned. No target, or a target sitting
    exactly on the bow, means no shot.
    """
    target = ctx.targets.front
    if target is None:
        return 0
    dx = target.x - BOW_X
    dy = target.y - BOW_Y
    dist = math.hypot(dx, dy)
    if dist == 0:
        log.debug("target on bow position; shot skipped")
        return 0
    vx = dx / dist * ARROW_SPEED
    vy = dy / dist * ARROW_SPEED
    ctx.projectiles.spawn(BOW_X, BOW_Y, vx, vy)
    if ctx.rng.chance(ctx.params.double_shot_chance):
        ctx.projectiles.spawn(BOW_X, BOW_Y, vx, vy)
        return 2
    return 1


__all__ = ["Projectile", "ProjectileSystem", "shoot_arrow"]
