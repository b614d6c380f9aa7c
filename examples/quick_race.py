#!/usr/bin/env python3
"""Quick race example: one player against three AI opponents.

Runs a single race through the frame scheduler on a simulated 60 Hz
display, then a small Monte Carlo batch.

Usage:
    python examples/quick_race.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from derbysim.analysis import MonteCarloRunner, summarize_race
from derbysim.logging import configure_logging
from derbysim.models import RaceConfig, build_lineup
from derbysim.output import ConsoleOutput
from derbysim.simulation import ManualFrameHost, RaceScheduler, RaceSimulator


def main():
    configure_logging()

    print("Photo Finish Derby - Quick Example")
    print("=" * 50)

    config = RaceConfig()
    racers = build_lineup(player_name="Player 1", rng=np.random.default_rng(42))
    labels = {r.id: r.display_name for r in racers}

    snapshots = []
    host = ManualFrameHost()
    scheduler = RaceScheduler(RaceSimulator(racers, config), host, on_progress=snapshots.append)
    scheduler.start()
    frames = host.run()

    print(f"Race took {frames} frames, {len(snapshots)} progress updates")
    ConsoleOutput.print_standings(snapshots[len(snapshots) // 2], labels)

    result = scheduler.result
    ConsoleOutput.print_race_results(result, labels)
    ConsoleOutput.print_race_summary(summarize_race(result), labels)

    print("\nRunning Monte Carlo simulation (100 two-horse races)...")
    runner = MonteCarloRunner(num_racers=2, config=RaceConfig(race_distance=100.0), seed=123)
    ConsoleOutput.print_monte_carlo_summary(runner.run_quick(num_simulations=100))

    return 0


if __name__ == "__main__":
    sys.exit(main())
