"""Scheduler port - One-shot timers.

The voice channel arms its manual-fallback timeout through this port so
that tests can drive time explicitly instead of sleeping.
"""

from __future__ import annotations

from typing import Callable, Protocol


class TimerHandle(Protocol):
    """Handle returned by ``SchedulerPort.call_later``."""

    def cancel(self) -> None:
        """Cancel the timer. No effect if it already fired."""
        ...


class SchedulerPort(Protocol):
    """Port for scheduling delayed callbacks.

    Implementations:
    - adapters/scheduler/threading_scheduler.py (ThreadingScheduler)
    - adapters/scheduler/manual_scheduler.py (ManualScheduler) - Testing
    """

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_seconds``.

        Args:
            delay_seconds: Delay before the callback fires.
            callback: Function to call.

        Returns:
            A handle that can cancel the timer.
        """
        ...

    def now(self) -> float:
        """Return the scheduler's monotonic clock in seconds."""
        ...
