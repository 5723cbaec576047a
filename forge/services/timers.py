"""Cooperative session and rest clocks.

Each timer owns at most one asyncio task that calls tick() every
tick_interval seconds. tick() is public so callers (and tests) can drive the
clock by hand. Timers are async context managers; leaving the context cancels
and awaits the task.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


def format_clock(seconds: float) -> str:
    """M:SS below an hour, H:MM:SS above."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class _TickingTimer(ABC):
    def __init__(self, tick_interval: float = 1.0):
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self.tick_interval = tick_interval
        self._task: asyncio.Task | None = None

    @abstractmethod
    def tick(self) -> None:
        """Advance the clock by one tick_interval."""

    def _keep_ticking(self) -> bool:
        return True

    async def _run(self) -> None:
        while self._keep_ticking():
            await asyncio.sleep(self.tick_interval)
            self.tick()

    def _spawn(self) -> None:
        self._cancel_task()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    @property
    def has_task(self) -> bool:
        return self._task is not None and not self._task.done()

    async def close(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class SessionTimer(_TickingTimer):
    """Elapsed workout time. Frozen while paused; stop() is idempotent."""

    def __init__(self, tick_interval: float = 1.0):
        super().__init__(tick_interval)
        self.elapsed = 0.0
        self.is_running = False
        self.is_paused = False

    def start(self, elapsed: float = 0.0) -> None:
        """Begin counting from `elapsed` seconds (non-zero when reattaching to a running workout)."""
        self.elapsed = max(0.0, elapsed)
        self.is_running = True
        self.is_paused = False
        self._spawn()

    def pause(self) -> None:
        if self.is_running:
            self.is_paused = True

    def resume(self) -> None:
        if self.is_running:
            self.is_paused = False

    def stop(self) -> None:
        self.is_running = False
        self.is_paused = False
        self._cancel_task()

    def tick(self) -> None:
        if self.is_running and not self.is_paused:
            self.elapsed += self.tick_interval

    def _keep_ticking(self) -> bool:
        return self.is_running

    @property
    def formatted(self) -> str:
        return format_clock(self.elapsed)


class RestTimer(_TickingTimer):
    """Countdown between sets. Reaching zero stops it; cancel() zeroes it immediately."""

    def __init__(
        self,
        default_duration: float = 90,
        presets: tuple[int, ...] = (30, 60, 90, 120, 180),
        tick_interval: float = 1.0,
    ):
        super().__init__(tick_interval)
        self.default_duration = default_duration
        self.presets = tuple(presets)
        self.duration = 0.0
        self.remaining = 0.0
        self.is_active = False

    def start(self, duration: float | None = None) -> None:
        """(Re)start the countdown; any countdown already running is replaced."""
        seconds = self.default_duration if duration is None else duration
        self._cancel_task()
        if seconds <= 0:
            self.duration = 0.0
            self.remaining = 0.0
            self.is_active = False
            return
        self.duration = float(seconds)
        self.remaining = float(seconds)
        self.is_active = True
        self._spawn()

    def cancel(self) -> None:
        self.remaining = 0.0
        self.is_active = False
        self._cancel_task()

    def tick(self) -> None:
        if not self.is_active:
            return
        self.remaining = max(0.0, self.remaining - self.tick_interval)
        if self.remaining == 0:
            self.is_active = False
            self._cancel_task()
            logger.debug("Rest timer finished after %.0fs", self.duration)

    def _keep_ticking(self) -> bool:
        return self.is_active

    @property
    def progress(self) -> float:
        """Fraction of the countdown already elapsed, 0..1."""
        if self.duration <= 0:
            return 0.0
        return 1 - self.remaining / self.duration

    @property
    def formatted(self) -> str:
        return format_clock(self.remaining)
