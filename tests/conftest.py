import os
import sys
from pathlib import Path

# Ensure repository root is on sys.path for module imports (bowgame, app)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless mode: no window, no audio device
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest  # noqa: E402

from bowgame.context import CombatParams, new_context  # noqa: E402
from bowgame.rng_service import RNGService  # noqa: E402


@pytest.fixture
def make_ctx():
    """Factory for fresh contexts with a private seeded RNG and param overrides."""

    def _make(seed=1234, populate=True, **params):
        return new_context(rng=RNGService(seed), params=CombatParams(**params), populate=populate)

    return _make
