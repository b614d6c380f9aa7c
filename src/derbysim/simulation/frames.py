"""Frame hosts: the per-frame callback sources that drive a scheduler.

A frame host mirrors a display's animation-frame API. ``request_frame``
registers a callback for the next frame and returns a handle;
``cancel_frame`` withdraws it. When the frame fires the callback receives the
frame timestamp in milliseconds.
"""

import asyncio
import itertools
from collections.abc import Callable
from typing import Protocol

import numpy as np

FrameCallback = Callable[[float], None]


class FrameHost(Protocol):
    """Anything that can call back once per frame."""

    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class ManualFrameHost:
    """Deterministic frame source advanced explicitly by the caller.

    Used for headless races and tests. Optional jitter perturbs each frame
    interval to emulate an uneven host frame rate.
    """

    def __init__(
        self,
        frame_interval_ms: float = 1000 / 60,
        jitter_ms: float = 0.0,
        rng: np.random.Generator | None = None,
        start_ms: float = 0.0,
    ):
        """Initialize the frame source.

        Args:
            frame_interval_ms: Nominal time between frames
            jitter_ms: Maximum deviation from the nominal interval
            rng: Random number generator for jitter
            start_ms: Timestamp of the clock before the first frame
        """
        self.frame_interval_ms = frame_interval_ms
        self.jitter_ms = jitter_ms
        self.rng = rng if rng is not None else np.random.default_rng()
        self.now_ms = start_ms
        self.frames = 0
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def advance(self) -> bool:
        """Fire the next frame.

        Callbacks requested while the frame is running wait for the following
        frame.

        Returns:
            False if nothing was waiting for a frame
        """
        if not self._pending:
            return False

        interval = self.frame_interval_ms
        if self.jitter_ms:
            interval += self.rng.uniform(-self.jitter_ms, self.jitter_ms)
        self.now_ms += max(0.0, interval)
        self.frames += 1

        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self.now_ms)
        return True

    def run(self, max_frames: int | None = None) -> int:
        """Fire frames until nothing is pending.

        Args:
            max_frames: Stop after this many frames (None = no limit)

        Returns:
            Number of frames fired
        """
        fired = 0
        while max_frames is None or fired < max_frames:
            if not self.advance():
                break
            fired += 1
        return fired


class AsyncioFrameHost:
    """Real-time frame source on an asyncio event loop."""

    def __init__(self, fps: float = 60.0, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize the frame source.

        Args:
            fps: Target frames per second
            loop: Event loop (the running loop if None)
        """
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.frame_interval = 1.0 / fps
        self._loop = loop
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._handles = itertools.count(1)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._timers[handle] = self.loop.call_later(self.frame_interval, self._fire, handle, callback)
        return handle

    def cancel_frame(self, handle: int) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.cancel()

    def _fire(self, handle: int, callback: FrameCallback) -> None:
        self._timers.pop(handle, None)
        callback(self.loop.time() * 1000)
