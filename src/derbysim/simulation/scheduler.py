"""Per-frame race scheduling."""

import asyncio
import logging
from collections.abc import Callable

from derbysim.simulation.frames import FrameHost
from derbysim.simulation.race import ProgressSnapshot, RaceResult, RaceSimulator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressSnapshot], None]
CompletionCallback = Callable[[RaceResult], None]


class RaceScheduler:
    """Drives a RaceSimulator from a frame host, one tick per frame.

    Each frame runs exactly one fixed-step tick regardless of how much wall
    time has passed, then broadcasts a progress snapshot if the broadcast
    interval has elapsed, then either reports completion or requests the
    next frame. Cancellation is checked before every reschedule and never
    interrupts a tick in progress.
    """

    def __init__(
        self,
        simulator: RaceSimulator,
        host: FrameHost,
        on_progress: ProgressCallback | None = None,
        on_complete: CompletionCallback | None = None,
    ):
        """Initialize the scheduler.

        Args:
            simulator: Race to drive; the scheduler is its only caller
            host: Frame callback source
            on_progress: Receives throttled progress snapshots
            on_complete: Receives the final result exactly once
        """
        self.simulator = simulator
        self.host = host
        self.on_progress = on_progress
        self.on_complete = on_complete

        self._handle: int | None = None
        self._started = False
        self._cancelled = False
        self._start_ms: float | None = None
        self._last_broadcast_ms = 0.0
        self._result: RaceResult | None = None
        self._error: BaseException | None = None
        self._finished = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._started and not self._finished.is_set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def result(self) -> RaceResult | None:
        """Final result, or None until the race completes."""
        return self._result

    def start(self) -> None:
        """Request the first frame.

        Raises:
            RuntimeError: The scheduler was already started or was cancelled
        """
        if self._cancelled:
            raise RuntimeError("Scheduler was cancelled")
        if self._started:
            raise RuntimeError("Scheduler already started")
        self._started = True
        logger.info("Race scheduled with %d racer(s)", len(self.simulator.racer_ids))
        self._handle = self.host.request_frame(self._on_frame)

    def cancel(self) -> None:
        """Stop before the next frame. A tick already running completes."""
        if self._cancelled or self._finished.is_set():
            return
        self._cancelled = True
        if self._handle is not None:
            self.host.cancel_frame(self._handle)
            self._handle = None
        logger.info("Race cancelled after %d ticks", self.simulator.ticks)
        self._finished.set()

    async def wait(self) -> RaceResult | None:
        """Wait until the race completes or is cancelled.

        Returns:
            The result, or None if cancelled

        Raises:
            The exception that stopped the race, if an observer failed
        """
        await self._finished.wait()
        if self._error is not None:
            raise self._error
        return self._result

    def _on_frame(self, timestamp_ms: float) -> None:
        self._handle = None
        if self._cancelled:
            return

        if self._start_ms is None:
            # First frame only marks the start line
            self._start_ms = timestamp_ms
            self._reschedule()
            return

        try:
            self._advance(timestamp_ms - self._start_ms)
        except BaseException as exc:
            # Stop for good and hand the error to anyone awaiting wait()
            self._error = exc
            self._finished.set()
            raise

    def _advance(self, elapsed_ms: float) -> None:
        self.simulator.tick(elapsed_ms)

        if elapsed_ms - self._last_broadcast_ms >= self.simulator.config.broadcast_interval_ms:
            self._last_broadcast_ms = elapsed_ms
            snapshot = self.simulator.snapshot()
            logger.debug("Progress at %.0f ms: %s", snapshot.elapsed_ms, dict(snapshot.distance_percent))
            if self.on_progress is not None:
                self.on_progress(snapshot)

        if self.simulator.completed:
            self._result = self.simulator.result()
            if self.on_complete is not None:
                self.on_complete(self._result)
            self._finished.set()
            return

        self._reschedule()

    def _reschedule(self) -> None:
        if self._cancelled:
            return
        self._handle = self.host.request_frame(self._on_frame)
