"""Services layer - Application orchestration.

This module contains the application services that drive a voice
session through the ports:

Available services:
- ProximityResolver: Nearby stops and routes for a location fix
- RouteMatcher: Validates a route candidate against the active set
- VoiceInputChannel: One recognized utterance per open, with manual fallback
- ArrivalAnnouncer: Speaks the next arrivals for a confirmed route
- SessionController: Orchestrates one voice-command session
"""

from .arrival_announcer import ArrivalAnnouncer
from .proximity_resolver import ProximityResolver
from .route_matcher import RouteMatcher
from .session_controller import SessionController, VoiceSession
from .voice_channel import (
    PermissionCache,
    VoiceInputChannel,
    get_permission_cache,
    reset_permission_cache,
)

__all__ = [
    "ProximityResolver",
    "RouteMatcher",
    "VoiceInputChannel",
    "PermissionCache",
    "get_permission_cache",
    "reset_permission_cache",
    "ArrivalAnnouncer",
    "SessionController",
    "VoiceSession",
]
