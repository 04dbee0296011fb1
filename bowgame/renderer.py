"""Frame rendering.

Draws a ``SimulationSnapshot`` with plain pygame primitives. Nothing here
mutates simulation state.

Layer Order (bottom -> top):
1. Clear
2. HUD band (info line, auto-upgrade label, last status message)
3. World: bow, string, nocked arrow, targets, arrows in flight
4. Upgrade panel (only while a choice is pending)

World coordinates are offset by ``HUD_HEIGHT`` so the HUD never overlaps
the targets.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pygame

from bowgame.bow import BowState
from bowgame.constants import ARROW_LENGTH, BOW_HEIGHT, BOW_STRING_PULL_MAX, BOW_X, BOW_Y
from bowgame.hud import auto_toggle_label, format_info
from bowgame.logger import get_logger

_log = get_logger("renderer")

HUD_HEIGHT = 80
BUTTON_SIZE = (220, 44)
BUTTON_GAP = 30

BACKGROUND = (20, 20, 28)
BOW_COLOR = (139, 69, 19)
STRING_COLOR = (128, 128, 128)
TARGET_COLOR = (255, 0, 0)
BOSS_COLOR = (170, 0, 0)
BURNING_COLOR = (255, 165, 0)
BULLSEYE_COLOR = (255, 255, 0)
HP_BACK_COLOR = (128, 128, 128)
HP_FILL_COLOR = (0, 255, 0)
TEXT_COLOR = (235, 235, 235)
PANEL_COLOR = (0, 0, 0, 170)
BUTTON_COLOR = (60, 60, 90)
BUTTON_BORDER = (200, 200, 255)

ARROW_COLORS = {
    "flaming": (255, 165, 0),
    "electric": (0, 255, 255),
    "plain": (255, 255, 255),
}


def upgrade_button_rects(surface_size: Tuple[int, int], count: int) -> List[pygame.Rect]:
    """Screen rects of the upgrade buttons, laid out in a centred row."""
    width, height = surface_size
    bw, bh = BUTTON_SIZE
    total = count * bw + max(0, count - 1) * BUTTON_GAP
    left = (width - total) // 2
    top = height // 2
    return [pygame.Rect(left + i * (bw + BUTTON_GAP), top, bw, bh) for i in range(count)]


def button_at(surface_size: Tuple[int, int], count: int, pos: Tuple[int, int]) -> Optional[int]:
    for i, rect in enumerate(upgrade_button_rects(surface_size, count)):
        if rect.collidepoint(pos):
            return i
    return None


class Renderer:
    """Usage:
    r = Renderer()
    r.render(surface, sim.snapshot())
    """

    def __init__(self, font_size: int = 22) -> None:
        self.font_size = font_size
        self._font: pygame.font.Font | None = None

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self.font_size)
            _log.debug(f"default font loaded at size {self.font_size}")
        return self._font

    def render(self, surface: pygame.Surface, snapshot, capture_sequence: Optional[List[str]] = None) -> None:
        seq = capture_sequence
        surface.fill(BACKGROUND)
        if seq is not None:
            seq.append("clear")
        self.render_hud(surface, snapshot)
        if seq is not None:
            seq.append("hud")
        self.render_bow(surface, snapshot)
        self.render_targets(surface, snapshot.targets)
        self.render_arrows(surface, snapshot)
        if seq is not None:
            seq.append("world")
        if snapshot.pending_choices:
            self.render_upgrade_panel(surface, snapshot.pending_choices)
            if seq is not None:
                seq.append("upgrade_panel")

    # --- Layers --------------------------------------------------------
    def _text(self, surface: pygame.Surface, text: str, pos: Tuple[int, int], center: bool = False) -> None:
        img = self.font.render(text, True, TEXT_COLOR)
        rect = img.get_rect(center=pos) if center else img.get_rect(topleft=pos)
        surface.blit(img, rect)

    def render_hud(self, surface: pygame.Surface, snapshot) -> None:
        self._text(surface, format_info(snapshot), (10, 8))
        self._text(surface, auto_toggle_label(snapshot.auto_upgrade) + "  [A]", (10, 32))
        if snapshot.message:
            self._text(surface, snapshot.message, (10, 56))

    def render_bow(self, surface: pygame.Surface, snapshot) -> None:
        cx, cy = BOW_X, BOW_Y + HUD_HEIGHT
        top = (cx, cy - BOW_HEIGHT / 2)
        bottom = (cx, cy + BOW_HEIGHT / 2)
        pull = snapshot.draw_fraction * BOW_STRING_PULL_MAX
        # Limbs approximated by two segments through the grip.
        pygame.draw.lines(surface, BOW_COLOR, False, [top, (cx - 20, cy), bottom], 10)
        pygame.draw.lines(surface, STRING_COLOR, False, [top, (cx - pull, cy), bottom], 2)
        if snapshot.bow_state is not BowState.IDLE:
            color = ARROW_COLORS[snapshot.arrow_variant]
            pygame.draw.rect(surface, color, pygame.Rect(cx - pull - ARROW_LENGTH, cy - 2, ARROW_LENGTH, 4))

    def render_targets(self, surface: pygame.Surface, targets: Sequence) -> None:
        for t in targets:
            top = t.y + HUD_HEIGHT - t.height / 2
            if t.is_boss:
                color = BOSS_COLOR
            elif t.burning:
                color = BURNING_COLOR
            else:
                color = TARGET_COLOR
            pygame.draw.rect(surface, color, pygame.Rect(t.x, top, t.width, t.height))
            pygame.draw.rect(
                surface, BULLSEYE_COLOR, pygame.Rect(t.x + t.width / 3, t.y + HUD_HEIGHT - 10, t.width / 3, 20)
            )
            bar_y = top + t.height + 5
            pygame.draw.rect(surface, HP_BACK_COLOR, pygame.Rect(t.x, bar_y, t.width, 5))
            fill = t.width * max(0.0, t.hp) / t.max_hp
            if fill > 0:
                pygame.draw.rect(surface, HP_FILL_COLOR, pygame.Rect(t.x, bar_y, fill, 5))

    def render_arrows(self, surface: pygame.Surface, snapshot) -> None:
        for a in snapshot.projectiles:
            pygame.draw.rect(surface, ARROW_COLORS[a.variant], pygame.Rect(a.x, a.y + HUD_HEIGHT - 2, ARROW_LENGTH, 4))

    def render_upgrade_panel(self, surface: pygame.Surface, names: Sequence[str]) -> None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill(PANEL_COLOR)
        surface.blit(overlay, (0, 0))
        width, height = surface.get_size()
        self._text(surface, "Choose an Upgrade", (width // 2, height // 2 - 40), center=True)
        for i, rect in enumerate(upgrade_button_rects((width, height), len(names))):
            pygame.draw.rect(surface, BUTTON_COLOR, rect)
            pygame.draw.rect(surface, BUTTON_BORDER, rect, 2)
            self._text(surface, f"{i + 1}. {names[i]}", rect.center, center=True)


__all__ = ["Renderer", "upgrade_button_rects", "button_at", "HUD_HEIGHT"]
