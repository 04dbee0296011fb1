"""Gameplay and tuning constants.

Time values are milliseconds unless the name ends in ``_S`` (seconds).
Distances are pixels in world space.
"""

# World / layout
WORLD_WIDTH = 1000  # horizontal bound; arrows at x >= this are discarded
WORLD_HEIGHT = 400  # vertical bound; arrows outside (0, this) are discarded
BOW_X = 120
BOW_Y = WORLD_HEIGHT / 2
BOW_HEIGHT = 150  # limb tip to limb tip (render only)
BOW_STRING_PULL_MAX = 30  # string offset at full draw (render only)

# Projectiles
ARROW_SPEED = 10  # pixels per frame, not scaled by delta
ARROW_LENGTH = 15  # render only

# Targets
TARGET_FIRST_X = 500  # x of the first target and fallback when the queue empties
TARGET_SPACING = 100
TARGET_INITIAL_COUNT = 5
TARGET_Y = WORLD_HEIGHT / 2
TARGET_HP = 50
TARGET_WIDTH = 40
TARGET_HEIGHT = 80
BOSS_EVERY = 5  # every Nth created target is a boss
BOSS_HP_MULT = 3
BOSS_SIZE_MULT = 1.5

# Slide-in after a kill
SLIDE_DISTANCE = 100  # equals TARGET_SPACING so the queue closes the gap
SLIDE_DURATION = 300  # ms to cover SLIDE_DISTANCE

# Combat
BULLSEYE_MULT = 2
SPLASH_FRACTION = 0.25  # electric splash share of base damage
BURN_DURATION_S = 3.0
# Per-frame float subtraction leaves residue this small after the full duration.
BURN_EPSILON_S = 1e-9

# Default combat parameters
DEFAULT_DAMAGE = 10
DEFAULT_FLAME_DAMAGE = 1.0  # hp per second while burning
DEFAULT_BULLSEYE_CHANCE = 0.2
DEFAULT_DOUBLE_SHOT_CHANCE = 0.0
DEFAULT_DRAW_DURATION = 1000
DEFAULT_RELEASE_DURATION = 200

# Upgrades
UPGRADE_EVERY_KILLS = 5
UPGRADE_CHOICES = 2
AUTO_UPGRADE_DELAY = 1000
DRAW_DURATION_MIN = 200
DRAW_DURATION_STEP = 150
FLAME_DAMAGE_STEP = 0.5
CHANCE_STEP = 0.05
DAMAGE_STEP = 2

__all__ = [name for name in globals().keys() if name.isupper()]
