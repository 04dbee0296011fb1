import os

import pygame

from bowgame.logger import get_logger

log = get_logger("settings")

_TRUE_VALUES = ("1", "true", "yes", "on")


class Settings:
    """Runtime configuration.

    Nothing is persisted: every value starts from its default and may be
    overridden through ``BOWGAME_*`` environment variables when the object
    is built (or when ``load_environment`` is called again).
    """

    FPS_MIN = 1
    FPS_MAX = 240

    def __init__(self):
        self._auto_upgrade = False
        self._seed = None
        self._fps = 60
        self.window_size = (1000, 480)  # world 1000x400 plus the HUD band
        # Key bindings (pygame key integers) per state name
        self.key_bindings = {
            "GameState": {
                "auto_toggle": [pygame.K_a],
                "quit": [pygame.K_ESCAPE],
            },
            "UpgradeState": {
                "upgrade_0": [pygame.K_1, pygame.K_KP1],
                "upgrade_1": [pygame.K_2, pygame.K_KP2],
                "auto_toggle": [pygame.K_a],
                "quit": [pygame.K_ESCAPE],
            },
        }
        self.load_environment()

    @property
    def auto_upgrade(self) -> bool:
        return self._auto_upgrade

    @auto_upgrade.setter
    def auto_upgrade(self, value) -> None:
        self._auto_upgrade = bool(value)

    @property
    def seed(self) -> int | None:
        return self._seed

    @seed.setter
    def seed(self, value) -> None:
        self._seed = None if value is None else int(value)

    @property
    def fps(self) -> int:
        return self._fps

    @fps.setter
    def fps(self, value) -> None:
        self._fps = max(self.FPS_MIN, min(self.FPS_MAX, int(value)))

    def load_environment(self, environ=None):
        """Apply ``BOWGAME_*`` overrides from ``environ`` (default: os.environ)."""
        env = os.environ if environ is None else environ
        raw_auto = env.get("BOWGAME_AUTO_UPGRADE")
        if raw_auto is not None:
            self.auto_upgrade = raw_auto.strip().lower() in _TRUE_VALUES
        for key, attr in (("BOWGAME_SEED", "seed"), ("BOWGAME_FPS", "fps")):
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                setattr(self, attr, raw)
            except ValueError as e:
                log.warn(f"Ignoring invalid {key}={raw!r}", e)


settings = Settings()
