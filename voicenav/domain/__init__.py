"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CatalogError,
    ChannelBusyError,
    ConfigurationError,
    LocationError,
    RecognizerError,
    RouteNotFoundError,
    SessionStateError,
    VoiceNavError,
)
from .models import (
    Arrival,
    CandidateNotInSet,
    ChannelState,
    Confirmed,
    Direction,
    LocationFix,
    MatchOutcome,
    NoCandidateExtracted,
    ProximitySet,
    RecognitionResult,
    Reliability,
    Route,
    Stop,
    VoiceSessionState,
    canonical_route_id,
)

__all__ = [
    # Models
    "Direction",
    "Reliability",
    "Route",
    "Stop",
    "LocationFix",
    "ProximitySet",
    "RecognitionResult",
    "Confirmed",
    "NoCandidateExtracted",
    "CandidateNotInSet",
    "MatchOutcome",
    "Arrival",
    "ChannelState",
    "VoiceSessionState",
    "canonical_route_id",
    # Errors
    "VoiceNavError",
    "CatalogError",
    "RouteNotFoundError",
    "LocationError",
    "RecognizerError",
    "ChannelBusyError",
    "SessionStateError",
    "ConfigurationError",
]
