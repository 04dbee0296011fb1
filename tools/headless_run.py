#!/usr/bin/env python3
"""
Headless simulation run.

Usage:
    python3 tools/headless_run.py [seconds] [seed] [auto]

Plays the simulation without a window at a fixed 60 fps frame interval
for the given number of simulated seconds (default 300). Upgrade offers
are answered with a random choice, or left to the auto-upgrade countdown
when ``auto`` is given. Prints a short balance / throughput report.
"""

import os
import sys
import time

# Ensure we can import bowgame from root
current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(current_dir)
sys.path.insert(0, root_dir)

from bowgame.rng_service import RNGService  # noqa: E402
from bowgame.simulation import Simulation  # noqa: E402

FRAME_MS = 1000 / 60


def run(seconds: float, seed, auto: bool):
    rng = RNGService(seed)
    sim = Simulation(rng=rng, auto_upgrade=auto)
    frames = round(seconds * 1000 / FRAME_MS)
    offers = 0
    arrows = 0
    hits = 0
    now = 0.0
    start = time.perf_counter()
    for _ in range(frames):
        now += FRAME_MS
        summary = sim.step(now)
        arrows += summary.fired
        hits += summary.hits
        if summary.upgrade_triggered:
            offers += 1
            if not auto:
                sim.select_upgrade(rng.randrange(len(sim.pending_choices())))
    wall = time.perf_counter() - start
    return sim, frames, offers, arrows, hits, wall


def main():
    seconds = float(sys.argv[1]) if len(sys.argv) > 1 else 300.0
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None
    auto = len(sys.argv) > 3 and sys.argv[3] == "auto"

    sim, frames, offers, arrows, hits, wall = run(seconds, seed, auto)
    ctx = sim.ctx
    p = ctx.params

    print("\n" + "=" * 40)
    print(" HEADLESS RUN")
    print("=" * 40)
    print(f"Simulated: {seconds:.0f}s ({frames} frames), seed {seed!r}, auto {auto}")
    print(f"Kills:     {ctx.counters.kills} (bosses seen {ctx.counters.total_targets // 5})")
    print(f"Upgrades:  {offers}")
    print(f"Arrows:    {arrows} fired, {hits} hits")
    print("-" * 20)
    print("Final parameters:")
    print(f"  Damage:       {p.damage}")
    print(f"  Draw:         {p.draw_duration:.0f} ms")
    print(f"  Bullseye:     {p.bullseye_chance * 100:.0f}%")
    print(f"  Double shot:  {p.double_shot_chance * 100:.0f}%")
    print(f"  Flame:        {p.flame_damage:.1f}/s ({'on' if p.flaming_arrows else 'off'})")
    print(f"  Electric:     {'on' if p.electric_arrows else 'off'}")
    print("-" * 20)
    print(f"Throughput: {frames / wall:.0f} frames/sec" if wall > 0 else "Throughput: n/a")
    print("=" * 40 + "\n")


if __name__ == "__main__":
    main()
