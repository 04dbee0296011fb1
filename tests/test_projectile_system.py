import pytest

from bowgame.constants import ARROW_SPEED, BOW_X, BOW_Y, WORLD_HEIGHT, WORLD_WIDTH
from bowgame.projectile_system import ProjectileSystem, shoot_arrow
from bowgame.targets import Target


def fly_until_settled(ctx, max_frames=200):
    for _ in range(max_frames):
        ctx.projectiles.update(ctx)
        if len(ctx.projectiles) == 0:
            return
    raise AssertionError("arrow never resolved")


def test_shot_aims_at_front_target(make_ctx):
    ctx = make_ctx()
    assert shoot_arrow(ctx) == 1
    (arrow,) = list(ctx.projectiles)
    assert (arrow.x, arrow.y) == (BOW_X, BOW_Y)
    # Front target is level with the bow
    assert arrow.vx == pytest.approx(ARROW_SPEED)
    assert arrow.vy == pytest.approx(0.0)


def test_shot_direction_is_unit_times_speed(make_ctx):
    ctx = make_ctx(populate=False)
    ctx.targets.push(Target(x=BOW_X + 30, y=BOW_Y + 40, hp=50, max_hp=50, width=40, height=80))
    shoot_arrow(ctx)
    (arrow,) = list(ctx.projectiles)
    assert arrow.vx == pytest.approx(0.6 * ARROW_SPEED)
    assert arrow.vy == pytest.approx(0.8 * ARROW_SPEED)


def test_no_target_no_shot(make_ctx):
    ctx = make_ctx(populate=False)
    assert shoot_arrow(ctx) == 0
    assert len(ctx.projectiles) == 0


def test_target_on_bow_position_skips_shot(make_ctx):
    ctx = make_ctx(populate=False)
    ctx.targets.push(Target(x=BOW_X, y=BOW_Y, hp=50, max_hp=50, width=40, height=80))
    assert shoot_arrow(ctx) == 0
    assert len(ctx.projectiles) == 0


def test_double_shot_certain_spawns_two_identical(make_ctx):
    ctx = make_ctx(double_shot_chance=1.0)
    assert shoot_arrow(ctx) == 2
    a, b = list(ctx.projectiles)
    assert (a.x, a.y, a.vx, a.vy) == (b.x, b.y, b.vx, b.vy)


def test_double_shot_never_at_zero(make_ctx):
    ctx = make_ctx(double_shot_chance=0.0)
    for _ in range(50):
        assert shoot_arrow(ctx) == 1


def test_fresh_start_single_arrow_hits_front_for_base_damage(make_ctx):
    ctx = make_ctx(damage=10, bullseye_chance=0.0)
    assert [t.x for t in ctx.targets] == [500, 600, 700, 800, 900]
    front = ctx.targets.front
    assert not front.is_boss and front.hp == 50
    shoot_arrow(ctx)
    fly_until_settled(ctx)
    assert front.hp == 40
    assert [t.hp for t in list(ctx.targets)[1:4]] == [50, 50, 50]


def test_arrow_hits_only_one_target(make_ctx):
    ctx = make_ctx(populate=False, damage=5, bullseye_chance=0.0)
    # Two overlapping targets: only the first in queue order is hit
    first = Target(x=200, y=BOW_Y, hp=50, max_hp=50, width=40, height=80)
    second = Target(x=200, y=BOW_Y, hp=50, max_hp=50, width=40, height=80)
    ctx.targets.push(first)
    ctx.targets.push(second)
    ctx.projectiles.spawn(195, BOW_Y, 10, 0)
    summary = ctx.projectiles.update(ctx)
    assert len(summary["hits"]) == 1
    assert first.hp == 45 and second.hp == 50
    assert summary["active"] == 0


def test_arrow_leaving_bounds_is_removed(make_ctx):
    ctx = make_ctx(populate=False)
    ctx.projectiles.spawn(WORLD_WIDTH - 5, BOW_Y, 10, 0)
    ctx.projectiles.spawn(300, 5, 0, -10)
    ctx.projectiles.spawn(300, WORLD_HEIGHT - 5, 0, 10)
    ctx.projectiles.spawn(300, BOW_Y, 1, 0)
    summary = ctx.projectiles.update(ctx)
    assert summary["removed"] == 3
    assert summary["active"] == 1


def test_moves_by_constant_step_per_frame(make_ctx):
    ctx = make_ctx(populate=False)
    arrow = ctx.projectiles.spawn(100, 100, 3, 4)
    ctx.projectiles.update(ctx)
    ctx.projectiles.update(ctx)
    assert (arrow.x, arrow.y) == (106, 108)


@pytest.mark.parametrize("flag", ["paused_for_upgrade", "slide"])
def test_projectiles_frozen_while_paused_or_sliding(make_ctx, flag):
    ctx = make_ctx()
    if flag == "slide":
        ctx.slide.active = True
    else:
        ctx.paused_for_upgrade = True
    arrow = ctx.projectiles.spawn(495, BOW_Y, 10, 0)
    hp_before = [t.hp for t in ctx.targets]
    for _ in range(5):
        summary = ctx.projectiles.update(ctx)
        assert summary["hits"] == []
    assert (arrow.x, arrow.y) == (495, BOW_Y)
    assert [t.hp for t in ctx.targets] == hp_before


def test_projectile_system_starts_empty():
    ps = ProjectileSystem()
    assert len(ps) == 0
    assert list(ps) == []
