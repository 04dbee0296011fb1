"""Target queue lifecycle.

The queue is a FIFO: the front target is the one the bow aims at, kills
pop from the front and replacements are pushed at the back, one spacing
beyond the current last target. After each kill the whole row slides left
by one spacing; no combat happens while it moves.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Iterator

from bowgame.combat import apply_burn
from bowgame.constants import (
    BOSS_EVERY,
    BOSS_HP_MULT,
    BOSS_SIZE_MULT,
    SLIDE_DISTANCE,
    SLIDE_DURATION,
    TARGET_FIRST_X,
    TARGET_HEIGHT,
    TARGET_HP,
    TARGET_INITIAL_COUNT,
    TARGET_SPACING,
    TARGET_WIDTH,
    TARGET_Y,
)
from bowgame.logger import get_logger
from bowgame.upgrades import check_upgrade

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.context import SimulationContext

log = get_logger("targets")


@dataclass
class Target:
    x: float  # left edge
    y: float  # vertical centre
    hp: float
    max_hp: float
    width: float
    height: float
    is_boss: bool = False
    burning: bool = False
    burn_remaining: float = 0.0  # seconds

    def contains(self, px: float, py: float) -> bool:
        half_h = self.height / 2
        return self.x <= px <= self.x + self.width and self.y - half_h <= py <= self.y + half_h


class TargetQueue:
    def __init__(self) -> None:
        self._targets: Deque[Target] = deque()

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __getitem__(self, index: int) -> Target:
        return self._targets[index]

    @property
    def front(self) -> Target | None:
        return self._targets[0] if self._targets else None

    @property
    def last(self) -> Target | None:
        return self._targets[-1] if self._targets else None

    def behind(self, index: int) -> Target | None:
        """Target directly after position ``index``, if any."""
        nxt = index + 1
        return self._targets[nxt] if nxt < len(self._targets) else None

    def push(self, target: Target) -> None:
        self._targets.append(target)

    def pop_front(self) -> Target:
        return self._targets.popleft()

    def clear(self) -> None:
        self._targets.clear()


@dataclass
class SlideState:
    active: bool = False
    progress: float = 0.0


def create_target(ctx: "SimulationContext", x: float) -> Target:
    """Create the next target; every BOSS_EVERY-th one ever created is a boss."""
    ctx.counters.total_targets += 1
    is_boss = ctx.counters.total_targets % BOSS_EVERY == 0
    if is_boss:
        hp = TARGET_HP * BOSS_HP_MULT
        width, height = TARGET_WIDTH * BOSS_SIZE_MULT, TARGET_HEIGHT * BOSS_SIZE_MULT
        log.debug(f"boss spawned (target #{ctx.counters.total_targets}) at x={x}")
    else:
        hp = TARGET_HP
        width, height = TARGET_WIDTH, TARGET_HEIGHT
    return Target(x=x, y=TARGET_Y, hp=hp, max_hp=hp, width=width, height=height, is_boss=is_boss)


def spawn_initial_targets(ctx: "SimulationContext") -> None:
    for i in range(TARGET_INITIAL_COUNT):
        ctx.targets.push(create_target(ctx, TARGET_FIRST_X + i * TARGET_SPACING))


def advance_slide(ctx: "SimulationContext", delta: float) -> None:
    slide = ctx.slide
    step = delta * SLIDE_DISTANCE / SLIDE_DURATION
    remaining = SLIDE_DISTANCE - slide.progress
    finished = step >= remaining
    if finished:
        step = remaining
    for target in ctx.targets:
        target.x -= step
    if finished:
        slide.active = False
        slide.progress = 0.0
    else:
        slide.progress += step


def check_front_death(ctx: "SimulationContext") -> bool:
    """Retire the front target if it is dead. Only the front is checked."""
    front = ctx.targets.front
    if front is None or front.hp > 0:
        return False
    ctx.counters.kills += 1
    ctx.targets.pop_front()
    last = ctx.targets.last
    last_x = last.x if last is not None else TARGET_FIRST_X
    ctx.targets.push(create_target(ctx, last_x + TARGET_SPACING))
    log.debug(f"kill #{ctx.counters.kills} ({'boss' if front.is_boss else 'standard'})")
    check_upgrade(ctx)
    ctx.slide.active = True
    return True


def update_targets(ctx: "SimulationContext", delta: float) -> bool:
    """Advance slide, burn and death for one frame. Returns True on a kill."""
    if ctx.paused_for_upgrade:
        return False
    if ctx.slide.active:
        advance_slide(ctx, delta)
        return False
    apply_burn(ctx, delta)
    return check_front_death(ctx)


__all__ = [
    "Target",
    "TargetQueue",
    "SlideState",
    "create_target",
    "spawn_initial_targets",
    "advance_slide",
    "check_front_death",
    "update_targets",
]
