"""Arrival adapters - Implementations of ArrivalSourcePort.

Available implementations:
- SimulatedArrivalSource: Randomized arrivals until a live feed exists
"""

from .simulated import SimulatedArrivalSource

__all__ = ["SimulatedArrivalSource"]
