"""Command-line interface.

Usage:
    derbysim [--config FILE] [--distance M] [--verbose] COMMAND ...
    derbysim race [--name NAME] [--opponents N] [--seed SEED] [--realtime]
    derbysim montecarlo [--runs N] [--racers N] [--seed SEED] [--no-parallel]
"""

import argparse
import asyncio
import logging
import sys

import numpy as np

from derbysim.analysis import MonteCarloRunner, summarize_race
from derbysim.logging import configure_logging
from derbysim.models import RaceConfig, RacerDescriptor, build_lineup
from derbysim.output import ConsoleOutput
from derbysim.simulation import (
    AsyncioFrameHost,
    ManualFrameHost,
    ProgressSnapshot,
    RaceError,
    RaceResult,
    RaceScheduler,
    RaceSimulator,
)

logger = logging.getLogger(__name__)


def _load_config(args: argparse.Namespace) -> RaceConfig:
    config = RaceConfig.from_toml(args.config) if args.config else RaceConfig()
    if args.distance is not None:
        config = RaceConfig.model_validate({**config.model_dump(), "race_distance": args.distance})
    return config


def _run_scheduled(
    racers: list[RacerDescriptor],
    config: RaceConfig,
    realtime: bool,
    fps: float,
) -> RaceResult | None:
    """Run one race through the frame scheduler, printing standings."""
    labels = {r.id: r.display_name for r in racers}

    def on_progress(snapshot: ProgressSnapshot) -> None:
        ConsoleOutput.print_standings(snapshot, labels)

    simulator = RaceSimulator(racers, config)

    if realtime:
        async def race() -> RaceResult | None:
            scheduler = RaceScheduler(simulator, AsyncioFrameHost(fps=fps), on_progress=on_progress)
            scheduler.start()
            try:
                return await scheduler.wait()
            finally:
                scheduler.cancel()

        return asyncio.run(race())

    host = ManualFrameHost(frame_interval_ms=1000 / fps)
    scheduler = RaceScheduler(simulator, host, on_progress=on_progress)
    scheduler.start()
    host.run()
    return scheduler.result


def cmd_race(args: argparse.Namespace) -> int:
    config = _load_config(args)
    rng = np.random.default_rng(args.seed)
    racers = build_lineup(player_name=args.name, opponents=args.opponents, rng=rng)
    labels = {r.id: r.display_name for r in racers}

    print("Photo Finish Derby")
    print("=" * 40)
    print(f"Distance: {config.race_distance:.0f} m")
    print(f"Racers:   {len(racers)}")

    result = _run_scheduled(racers, config, realtime=args.realtime, fps=args.fps)
    if result is None:
        print("Race cancelled")
        return 1

    ConsoleOutput.print_race_results(result, labels)
    ConsoleOutput.print_race_summary(summarize_race(result), labels)
    return 0


def cmd_montecarlo(args: argparse.Namespace) -> int:
    config = _load_config(args)

    print("Derby Monte Carlo Simulation")
    print("=" * 40)
    print(f"Races:    {args.runs}")
    print(f"Racers:   {args.racers}")
    print(f"Parallel: {args.parallel}")

    runner = MonteCarloRunner(num_racers=args.racers, config=config, seed=args.seed)
    results = runner.run(num_simulations=args.runs, parallel=args.parallel)
    ConsoleOutput.print_monte_carlo_summary(results)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="derbysim", description="Noise-driven derby race simulator")
    parser.add_argument("--config", help="TOML file with race constants")
    parser.add_argument("--distance", type=float, help="Override race distance in meters")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    race = subparsers.add_parser("race", help="Run a single race")
    race.add_argument("--name", default="Player 1", help="Player name (default: Player 1)")
    race.add_argument("--opponents", type=int, default=3, help="Number of AI opponents (default: 3)")
    race.add_argument("--seed", type=int, help="Seed for racer noise fields")
    race.add_argument("--fps", type=float, default=60.0, help="Frame rate (default: 60)")
    race.add_argument("--realtime", action="store_true", help="Run at wall-clock speed on asyncio")
    race.set_defaults(func=cmd_race)

    montecarlo = subparsers.add_parser("montecarlo", help="Run many races and aggregate results")
    montecarlo.add_argument("--runs", "-n", type=int, default=200, help="Number of races (default: 200)")
    montecarlo.add_argument("--racers", type=int, default=2, help="Racers per race (default: 2)")
    montecarlo.add_argument("--seed", type=int, default=42, help="Base seed (default: 42)")
    montecarlo.add_argument(
        "--no-parallel",
        action="store_false",
        dest="parallel",
        help="Disable parallel processing",
    )
    montecarlo.set_defaults(func=cmd_montecarlo)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return args.func(args)
    except (ValueError, RaceError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
