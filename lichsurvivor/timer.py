"""A pausable millisecond timer used to pace frames."""

import time
from typing import Callable, Optional


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class FrameTimer:
    """Measures elapsed milliseconds since start, excluding paused time."""

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._start_tick = 0
        self._paused_tick = 0
        self._paused = False
        self._started = False

    def start(self) -> None:
        self._started = True
        self._paused = False
        self._start_tick = self._clock()

    def stop(self) -> None:
        self._paused = False
        self._started = False

    def pause(self) -> None:
        if self._started and not self._paused:
            self._paused = True
            self._paused_tick = self._clock() - self._start_tick

    def unpause(self) -> None:
        if self._paused:
            self._paused = False
            self._start_tick = self._clock() - self._paused_tick
            self._paused_tick = 0

    def get_ticks(self) -> int:
        """Milliseconds counted so far, or 0 when not started."""
        if not self._started:
            return 0
        if self._paused:
            return self._paused_tick
        return self._clock() - self._start_tick

    def is_started(self) -> bool:
        return self._started

    def is_paused(self) -> bool:
        return self._paused