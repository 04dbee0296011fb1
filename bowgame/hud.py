"""HUD text formatting.

Pure string builders over a ``SimulationSnapshot`` so they can be tested
without pygame fonts. Drawing the text is the renderer's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bowgame.clock import format_time

if TYPE_CHECKING:  # pragma: no cover
    from bowgame.simulation import SimulationSnapshot


def format_target_hp(snapshot: "SimulationSnapshot") -> str:
    if not snapshot.targets:
        return ""
    front = snapshot.targets[0]
    return f"Target HP: {max(0, round(front.hp))} / {front.max_hp:g}"


def format_info(snapshot: "SimulationSnapshot") -> str:
    p = snapshot.params
    parts = [
        f"Time: {format_time(snapshot.elapsed_ms)}",
        f"Kills: {snapshot.kills}",
        f"Draw Speed: {p.draw_duration / 1000:.2f}s",
        f"Damage: {p.damage:g}",
        f"Bullseye: {p.bullseye_chance * 100:.0f}%",
        f"Flame: {p.flame_damage:.1f}/s",
        f"Electric: {'ON' if p.electric_arrows else 'OFF'}",
    ]
    hp_text = format_target_hp(snapshot)
    if hp_text:
        parts.append(hp_text)
    return " | ".join(parts)


def auto_toggle_label(enabled: bool) -> str:
    return f"Auto Upgrade: {'ON' if enabled else 'OFF'}"


__all__ = ["format_info", "format_target_hp", "auto_toggle_label"]
