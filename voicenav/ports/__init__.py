"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .arrivals import ArrivalSourcePort
from .catalog import TransitCatalogPort
from .location import LocationProviderPort
from .recognizer import (
    ErrorCallback,
    MicrophonePermissionPort,
    ResultCallback,
    SpeechRecognizerPort,
)
from .scheduler import SchedulerPort, TimerHandle
from .speech import SpeechOutputPort

__all__ = [
    # Reference data
    "TransitCatalogPort",
    "ArrivalSourcePort",
    # Location
    "LocationProviderPort",
    # Voice
    "SpeechRecognizerPort",
    "MicrophonePermissionPort",
    "ResultCallback",
    "ErrorCallback",
    "SpeechOutputPort",
    # Timing
    "SchedulerPort",
    "TimerHandle",
]
