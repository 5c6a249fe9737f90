"""Typed domain errors for VoiceNav.

Degraded paths (permission denial, missing recognizer, no-match outcomes,
malformed location data) are handled inside the services and never reach
callers as exceptions. The errors below cover the remaining cases: bad
data files, caller misuse and failures of external engines.

All errors inherit from VoiceNavError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class VoiceNavError(Exception):
    """Base error for the VoiceNav domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class CatalogError(VoiceNavError):
    """Transit catalog loading or data integrity error.

    Attributes:
        file_path: Path to the catalog data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class RouteNotFoundError(VoiceNavError):
    """Route identifier not present in the catalog.

    Attributes:
        route_id: The identifier that was looked up
    """

    route_id: str = ""


@dataclass
class LocationError(VoiceNavError):
    """Location acquisition failed.

    Attributes:
        query: Place query or provider description
    """

    query: str = ""


@dataclass
class RecognizerError(VoiceNavError):
    """Speech recognizer could not be started or failed mid-listen.

    Attributes:
        code: Short machine-readable error code (e.g. 'no-speech')
    """

    code: str = ""


@dataclass
class ChannelBusyError(VoiceNavError):
    """``open`` was called while the voice channel was still active.

    Attributes:
        state: Name of the channel state at the time of the call
    """

    state: str = ""


@dataclass
class SessionStateError(VoiceNavError):
    """Session operation not allowed in the current session state.

    Attributes:
        state: Name of the session state at the time of the call
    """

    state: str = ""


@dataclass
class ConfigurationError(VoiceNavError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
