"""Console output formatting."""

from collections.abc import Mapping

from derbysim.analysis.montecarlo import SimulationResults
from derbysim.analysis.summary import RaceSummary
from derbysim.simulation.race import ProgressSnapshot, RaceResult


def _format_ms(ms: float) -> str:
    return f"{ms / 1000:.3f}s"


class ConsoleOutput:
    """Formats race output for console display.

    ``labels`` maps racer ids to display names; unknown ids print as-is.
    """

    @staticmethod
    def print_standings(snapshot: ProgressSnapshot, labels: Mapping[str, str] | None = None) -> None:
        """Print current standings from a progress snapshot.

        Args:
            snapshot: Progress snapshot
            labels: Display names by racer id
        """
        labels = labels or {}
        print(f"\n[{_format_ms(snapshot.elapsed_ms)}] STANDINGS")
        for rank, racer_id in enumerate(snapshot.standings(), 1):
            percent = snapshot.distance_percent[racer_id]
            bar = "#" * int(percent / 4)
            print(
                f"{rank:<3} "
                f"{labels.get(racer_id, racer_id):<32} "
                f"{int(percent):3d}% "
                f"{snapshot.speeds[racer_id]:5.1f} m/s "
                f"{bar}"
            )

    @staticmethod
    def print_race_results(result: RaceResult, labels: Mapping[str, str] | None = None) -> None:
        """Print final race results.

        Args:
            result: Completed race result
            labels: Display names by racer id
        """
        labels = labels or {}
        print("\n" + "=" * 60)
        print("RACE RESULTS")
        print("=" * 60)
        print(f"{'Pos':<4} {'Racer':<32} {'Time/Gap':<12}")
        print("-" * 60)

        for position, racer_id in enumerate(result.rankings(), 1):
            if position == 1:
                time_str = _format_ms(result.finish_times[racer_id])
            else:
                time_str = "+" + _format_ms(result.gap_to_winner(racer_id))
            print(f"{position:<4} {labels.get(racer_id, racer_id):<32} {time_str:<12}")

        print("=" * 60)
        print(f"Winner: {labels.get(result.winner, result.winner)}")

    @staticmethod
    def print_race_summary(summary: RaceSummary, labels: Mapping[str, str] | None = None) -> None:
        """Print per-racer speed statistics and highlights.

        Args:
            summary: Race summary
            labels: Display names by racer id
        """
        labels = labels or {}
        print("\nRACE SUMMARY:")
        print("-" * 60)
        print(f"{'Racer':<32} {'Max':>8} {'Avg':>8} {'Min':>8}")
        for racer_id, stats in summary.stats.items():
            print(
                f"{labels.get(racer_id, racer_id):<32} "
                f"{stats.max_speed:8.1f} "
                f"{stats.avg_speed:8.1f} "
                f"{stats.min_speed:8.1f}"
            )

        if summary.top_speed is not None:
            top = summary.top_speed
            print(f"\n  Top Speed:      {labels.get(top.racer_id, top.racer_id)} ({top.max_speed:.1f} m/s)")
        if summary.slowest_moment is not None:
            slow = summary.slowest_moment
            print(f"  Slowest Moment: {labels.get(slow.racer_id, slow.racer_id)} ({slow.min_speed:.1f} m/s)")

    @staticmethod
    def print_monte_carlo_summary(results: SimulationResults) -> None:
        """Print Monte Carlo simulation summary.

        Args:
            results: Aggregated simulation results
        """
        print("\n" + "=" * 60)
        print("MONTE CARLO SIMULATION RESULTS")
        print(f"({results.num_simulations} races)")
        print("=" * 60)

        print("\nWIN PROBABILITIES:")
        print("-" * 50)
        for racer_id, prob in results.get_win_probabilities().items():
            stats = results.racer_stats[racer_id]
            bar = "#" * int(prob / 2)
            print(f"{racer_id:<12} {prob:5.1f}%  avg {_format_ms(stats.mean_finish_time):>9} {bar}")

        print("\nNOISE VS RESULT:")
        print("-" * 50)
        print(f"  Highest mean noise won: {results.noisiest_racer_win_rate() * 100:.1f}% of races")
        for rank, mean_time in enumerate(results.mean_finish_time_by_noise_rank(), 1):
            print(f"  Noise rank {rank}: avg finish {_format_ms(mean_time)}")

        print("=" * 60)
