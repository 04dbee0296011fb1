"""Frame clock: turns consecutive frame timestamps into deltas.

No fixed timestep. Each frame simply gets the wall-clock gap since the
previous one, so simulation fidelity follows the display cadence.
"""

from __future__ import annotations


class SimulationClock:
    def __init__(self, start_ms: float = 0.0) -> None:
        self.start_ms = start_ms
        self.last_ms = start_ms
        self.elapsed_ms = 0.0

    def tick(self, now_ms: float) -> float:
        """Record a frame at ``now_ms`` and return the delta since the last one."""
        delta = max(0.0, now_ms - self.last_ms)
        self.last_ms = now_ms
        self.elapsed_ms = max(0.0, now_ms - self.start_ms)
        return delta

    def reset(self, start_ms: float) -> None:
        self.start_ms = start_ms
        self.last_ms = start_ms
        self.elapsed_ms = 0.0


def format_time(ms: float) -> str:
    """Format elapsed milliseconds as MM:SS."""
    total_seconds = int(ms // 1000)
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    return f"{minutes:02}:{seconds:02}"


__all__ = ["SimulationClock", "format_time"]
