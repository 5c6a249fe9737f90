"""Scheduler adapters - Implementations of SchedulerPort.

Available implementations:
- ThreadingScheduler: Real timers on daemon threads - Production
- ManualScheduler: Virtual clock advanced explicitly - Testing
"""

from .manual_scheduler import ManualScheduler
from .threading_scheduler import ThreadingScheduler

__all__ = ["ThreadingScheduler", "ManualScheduler"]
