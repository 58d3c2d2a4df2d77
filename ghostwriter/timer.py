"""
Countdown Timer

Enforces the human's time limit. Remaining time is recomputed from the
instant the run started on every tick rather than decremented per tick, so
a late or skipped tick never accumulates drift.
"""

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .config import DEFAULT_TIMER_SECONDS
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TimerState:
    duration_seconds: int
    remaining_seconds: int
    running: bool


class CountdownTimer:
    """
    Cancellable, restartable countdown on the running asyncio loop.

    The expiry callback fires exactly once per start -> expiry cycle.
    stop() before expiry suppresses it; start() while running is a no-op.
    """

    def __init__(
        self,
        duration_seconds: int = DEFAULT_TIMER_SECONDS,
        on_expire: Optional[Callable[[], None]] = None,
        on_tick: Optional[Callable[["TimerState"], None]] = None,
        tick_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic
    ):
        self.duration = duration_seconds
        self.remaining = duration_seconds
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.tick_interval = tick_interval
        self._clock = clock
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> TimerState:
        return TimerState(
            duration_seconds=self.duration,
            remaining_seconds=self.remaining,
            running=self._running
        )

    def set_duration(self, seconds: int) -> None:
        self.duration = seconds
        self.remaining = seconds
        self._update_display()

    def start(self) -> None:
        if self._running:
            return

        self._running = True
        start_time = self._clock()
        initial_remaining = self.remaining
        self._task = asyncio.get_running_loop().create_task(
            self._run(start_time, initial_remaining)
        )
        logger.debug(f"Timer started with {initial_remaining}s remaining")

    def stop(self) -> None:
        if not self._running:
            return

        self._running = False
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    def reset(self) -> None:
        self.stop()
        self.remaining = self.duration
        self._update_display()

    def is_active(self) -> bool:
        return self._running

    def format_remaining(self) -> str:
        minutes, seconds = divmod(self.remaining, 60)
        return f"{minutes:02d}:{seconds:02d}"

    async def _run(self, start_time: float, initial_remaining: int) -> None:
        while self._running:
            await asyncio.sleep(self.tick_interval)
            elapsed = math.floor(self._clock() - start_time)
            self.remaining = max(0, initial_remaining - elapsed)
            self._update_display()

            if self.remaining <= 0:
                self.stop()
                logger.info("Timer expired")
                if self.on_expire:
                    self.on_expire()
                return

    def _update_display(self) -> None:
        if self.on_tick:
            self.on_tick(self.state)
