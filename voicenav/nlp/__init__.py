"""Natural language processing components for VoiceNav.

This subpackage turns recognized speech into route candidates and offers
suggestions when a candidate is not among the nearby routes.
"""

from .command_extractor import (
    DEFAULT_PATTERNS,
    SPOKEN_ROUTE_PHRASES,
    CommandExtractor,
    RegexPattern,
    RoutePattern,
    SpokenPhrasePattern,
    extract_route_id,
)
from .route_suggestions import suggest_routes

__all__ = [
    "CommandExtractor",
    "RoutePattern",
    "SpokenPhrasePattern",
    "RegexPattern",
    "DEFAULT_PATTERNS",
    "SPOKEN_ROUTE_PHRASES",
    "extract_route_id",
    "suggest_routes",
]
