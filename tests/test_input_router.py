import pygame

from bowgame.input_router import InputRouter


def key(k, event_type=pygame.KEYDOWN):
    return pygame.event.Event(event_type, {"key": k})


def test_game_actions_from_default_bindings():
    pygame.init()
    router = InputRouter()
    actions = router.process([key(pygame.K_a), key(pygame.K_ESCAPE)], "GameState")
    assert actions == ["auto_toggle", "quit"]


def test_upgrade_choice_keys():
    pygame.init()
    router = InputRouter()
    actions = router.process([key(pygame.K_2), key(pygame.K_1), key(pygame.K_2)], "UpgradeState")
    # Order preserved, duplicates collapsed
    assert actions == ["upgrade_1", "upgrade_0"]


def test_choice_keys_ignored_outside_upgrade_state():
    pygame.init()
    router = InputRouter()
    assert router.process([key(pygame.K_1)], "GameState") == []
    assert router.process([key(pygame.K_a, pygame.KEYUP)], "GameState") == []
    assert router.process([key(pygame.K_a)], "Unknown") == []


def test_custom_bindings():
    pygame.init()
    router = InputRouter({"GameState": {"auto_toggle": [pygame.K_t]}})
    assert router.process([key(pygame.K_t)], "GameState") == ["auto_toggle"]
    assert router.process([key(pygame.K_a)], "GameState") == []
