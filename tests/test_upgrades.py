import pytest

from bowgame.constants import AUTO_UPGRADE_DELAY
from bowgame.context import CombatParams
from bowgame.rng_service import RNGService
from bowgame.upgrades import (
    UPGRADE_CATALOG,
    Upgrade,
    check_upgrade,
    draw_upgrades,
    select_upgrade,
    trigger_upgrade,
    update_auto_upgrade,
)


def _counting_upgrade(name="Counter"):
    def bump(p):
        p.damage += 1

    return Upgrade(name, bump)


def test_catalog_has_seven_named_upgrades():
    assert [u.name for u in UPGRADE_CATALOG] == [
        "Draw Speed",
        "Flaming Arrows",
        "Electric Arrows",
        "Flame Damage",
        "Bullseye Chance",
        "Arrow Damage",
        "Double Shot",
    ]


def test_draw_returns_two_distinct_entries():
    for seed in range(100):
        chosen = draw_upgrades(RNGService(seed))
        assert len(chosen) == 2
        assert chosen[0] is not chosen[1]
        assert all(u in UPGRADE_CATALOG for u in chosen)


def test_draw_from_single_entry_catalog_returns_one():
    only = _counting_upgrade()
    assert draw_upgrades(RNGService(1), [only]) == [only]


def test_draw_from_empty_catalog_returns_nothing():
    assert draw_upgrades(RNGService(1), []) == []


def test_draw_does_not_mutate_catalog():
    catalog = list(UPGRADE_CATALOG)
    draw_upgrades(RNGService(3), catalog)
    assert catalog == list(UPGRADE_CATALOG)


@pytest.mark.parametrize(
    "name,before,field,after",
    [
        ("Draw Speed", {"draw_duration": 1000}, "draw_duration", 850),
        ("Draw Speed", {"draw_duration": 250}, "draw_duration", 200),
        ("Draw Speed", {"draw_duration": 200}, "draw_duration", 200),
        ("Flaming Arrows", {}, "flaming_arrows", True),
        ("Electric Arrows", {}, "electric_arrows", True),
        ("Flame Damage", {"flame_damage": 1.0}, "flame_damage", 1.5),
        ("Bullseye Chance", {"bullseye_chance": 0.2}, "bullseye_chance", 0.25),
        ("Bullseye Chance", {"bullseye_chance": 0.98}, "bullseye_chance", 1.0),
        ("Arrow Damage", {"damage": 10}, "damage", 12),
        ("Double Shot", {"double_shot_chance": 0.0}, "double_shot_chance", 0.05),
        ("Double Shot", {"double_shot_chance": 1.0}, "double_shot_chance", 1.0),
    ],
)
def test_upgrade_effects_and_clamps(name, before, field, after):
    upgrade = next(u for u in UPGRADE_CATALOG if u.name == name)
    params = CombatParams(**before)
    upgrade.apply(params)
    assert getattr(params, field) == pytest.approx(after)


@pytest.mark.parametrize("kills,expected", [(0, False), (1, False), (4, False), (5, True), (10, True), (11, False)])
def test_trigger_on_positive_multiple_of_five(make_ctx, kills, expected):
    ctx = make_ctx()
    ctx.counters.kills = kills
    assert check_upgrade(ctx) is expected
    assert ctx.paused_for_upgrade is expected
    assert (ctx.upgrade_offer is not None) is expected


def test_manual_selection_applies_once_and_resumes(make_ctx):
    ctx = make_ctx(damage=10)
    ctx.catalog = (_counting_upgrade("A"), _counting_upgrade("B"))
    ctx.counters.kills = 5
    trigger_upgrade(ctx)
    assert ctx.paused_for_upgrade
    assert select_upgrade(ctx, 1) is True
    assert ctx.params.damage == 11
    assert not ctx.paused_for_upgrade
    assert ctx.last_message == f"{ctx.upgrade_offer.chosen.name} upgraded!"
    # Second resolution of the same offer is ignored
    assert select_upgrade(ctx, 0) is False
    assert ctx.params.damage == 11


def test_select_without_offer_is_noop(make_ctx):
    ctx = make_ctx()
    assert select_upgrade(ctx, 0) is False
    assert not ctx.paused_for_upgrade


def test_select_out_of_range_raises(make_ctx):
    ctx = make_ctx()
    trigger_upgrade(ctx)
    with pytest.raises(IndexError):
        select_upgrade(ctx, 5)
    assert ctx.paused_for_upgrade


def test_auto_upgrade_resolves_after_delay(make_ctx):
    ctx = make_ctx()
    ctx.auto_upgrade = True
    offer = trigger_upgrade(ctx)
    assert offer.auto_index in (0, 1)
    assert update_auto_upgrade(ctx, AUTO_UPGRADE_DELAY - 1) is False
    assert ctx.paused_for_upgrade
    assert update_auto_upgrade(ctx, 1) is True
    assert not ctx.paused_for_upgrade
    assert offer.chosen is offer.choices[offer.auto_index]
    assert ctx.last_message == f"Auto: {offer.chosen.name} upgraded!"


def test_auto_disabled_never_resolves(make_ctx):
    ctx = make_ctx()
    offer = trigger_upgrade(ctx)
    assert offer.auto_index is None
    assert update_auto_upgrade(ctx, 10 * AUTO_UPGRADE_DELAY) is False
    assert ctx.paused_for_upgrade


def test_manual_then_auto_timer_applies_only_once(make_ctx):
    ctx = make_ctx(damage=10)
    ctx.catalog = (_counting_upgrade("A"), _counting_upgrade("B"))
    ctx.auto_upgrade = True
    trigger_upgrade(ctx)
    assert select_upgrade(ctx, 0) is True
    assert update_auto_upgrade(ctx, AUTO_UPGRADE_DELAY * 2) is False
    assert ctx.params.damage == 11
    assert not ctx.last_message.startswith("Auto:")


def test_auto_then_manual_applies_only_once(make_ctx):
    ctx = make_ctx(damage=10)
    ctx.catalog = (_counting_upgrade("A"), _counting_upgrade("B"))
    ctx.auto_upgrade = True
    trigger_upgrade(ctx)
    assert update_auto_upgrade(ctx, AUTO_UPGRADE_DELAY) is True
    assert select_upgrade(ctx, 0) is False
    assert select_upgrade(ctx, 1) is False
    assert ctx.params.damage == 11


def test_single_entry_catalog_offer(make_ctx):
    ctx = make_ctx()
    ctx.catalog = (_counting_upgrade("Only"),)
    ctx.auto_upgrade = True
    offer = trigger_upgrade(ctx)
    assert offer.names == ["Only"]
    assert offer.auto_index == 0
