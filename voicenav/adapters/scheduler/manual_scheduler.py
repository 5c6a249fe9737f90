"""Deterministic scheduler for tests and simulations.

Time only moves when ``advance`` is called, so timeouts can be tested
without sleeping.

Example:
    scheduler = ManualScheduler()
    scheduler.call_later(15, on_timeout)
    scheduler.advance(15)  # on_timeout runs here
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass
class ManualTimer:
    """Pending callback registered on a ManualScheduler."""

    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """SchedulerPort with a virtual clock."""

    current_time: float = 0.0
    _timers: List[ManualTimer] = field(default_factory=list, repr=False)

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(due=self.current_time + delay_seconds, callback=callback)
        self._timers.append(timer)
        return timer

    def now(self) -> float:
        return self.current_time

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every timer that became due.

        Returns:
            Number of callbacks that ran.
        """
        self.current_time += seconds
        due = sorted(
            (
                t
                for t in self._timers
                if not t.cancelled and not t.fired and t.due <= self.current_time
            ),
            key=lambda t: t.due,
        )
        for timer in due:
            timer.fired = True
            timer.callback()
        self._timers = [t for t in self._timers if not t.fired and not t.cancelled]
        return len(due)

    @property
    def pending(self) -> int:
        """Number of timers that have neither fired nor been cancelled."""
        return sum(1 for t in self._timers if not t.cancelled and not t.fired)
