"""Immutable domain models for the VoiceNav transit assistant.

All models are frozen dataclasses with slots for memory efficiency.
These models have no external dependencies and represent the core
business concepts of the application: routes, stops, location fixes,
recognition results and the outcome of matching speech to a route.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union


class Direction(Enum):
    """Direction a route runs in, as published by the operator."""

    OUTBOUND = "Outbound"
    INBOUND = "Inbound"
    BOTH = "Both"
    CIRCULAR = "Circular"

    @classmethod
    def parse(cls, value: str) -> Direction:
        """Parse a direction label case-insensitively."""
        cleaned = value.strip().lower()
        for member in cls:
            if member.value.lower() == cleaned:
                return member
        raise ValueError(f"Unknown route direction: {value!r}")


class Reliability(Enum):
    """Punctuality of a predicted arrival."""

    ON_TIME = "On Time"
    DELAYED = "Delayed"
    EARLY = "Early"


class ChannelState(Enum):
    """Lifecycle of a VoiceInputChannel.

    DELIVERED, CANCELLED and TIMED_OUT are terminal for one ``open`` call;
    ``close`` always returns the channel to IDLE.
    """

    IDLE = auto()
    AWAITING_PERMISSION = auto()
    LISTENING = auto()
    MANUAL_FALLBACK_ARMED = auto()
    DELIVERED = auto()
    CANCELLED = auto()
    TIMED_OUT = auto()

    @property
    def is_active(self) -> bool:
        return self in (
            ChannelState.AWAITING_PERMISSION,
            ChannelState.LISTENING,
            ChannelState.MANUAL_FALLBACK_ARMED,
        )


class VoiceSessionState(Enum):
    """Lifecycle of one voice-command session."""

    IDLE = auto()
    AWAITING_PERMISSION = auto()
    LISTENING = auto()
    MANUAL_FALLBACK_ARMED = auto()
    AWAITING_RETRY = auto()
    MATCHED = auto()
    CANCELLED = auto()
    TIMED_OUT = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (
            VoiceSessionState.MATCHED,
            VoiceSessionState.CANCELLED,
            VoiceSessionState.TIMED_OUT,
        )


def canonical_route_id(identifier: str) -> str:
    """Return the case-insensitive comparison key for a route identifier."""
    return identifier.strip().casefold()


@dataclass(frozen=True, slots=True)
class Route:
    """A transit line with a stable identifier.

    Attributes:
        identifier: Route identifier as published (e.g. 'T581')
        name: Display name
        description: Human-readable description (e.g. 'KL Sentral ↔ Gombak')
        direction: Direction the route runs in
        is_express: Whether this is an express service
    """

    identifier: str
    name: str
    description: str
    direction: Direction = Direction.BOTH
    is_express: bool = False

    @property
    def key(self) -> str:
        """Canonical, case-insensitive form of the identifier."""
        return canonical_route_id(self.identifier)

    @property
    def destination(self) -> str:
        """Destination part of the description, or the direction label."""
        _, sep, tail = self.description.partition("↔")
        if sep and tail.strip():
            return tail.strip()
        return self.direction.value


@dataclass(frozen=True, slots=True)
class Stop:
    """A fixed geographic point served by one or more routes.

    Attributes:
        identifier: Unique stop identifier (e.g. 'KLS001')
        name: Human-readable stop name
        latitude: WGS84 latitude in degrees
        longitude: WGS84 longitude in degrees
        route_ids: Identifiers of the routes serving this stop, in order
    """

    identifier: str
    name: str
    latitude: float
    longitude: float
    route_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class LocationFix:
    """A single geolocation reading."""

    latitude: float
    longitude: float
    accuracy_meters: Optional[float] = None
    timestamp: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class ProximitySet:
    """Stops and routes relevant to the user's current location.

    Created fresh every time proximity is computed; a refresh supersedes
    the previous set instead of mutating it.

    Attributes:
        stops: Nearby stops, nearest first
        routes: Routes serving those stops, nearest stop's routes first
        location_label: Human-readable current location
        is_fallback: True when built without a usable fix or nearby stop
        distances_meters: Distance to each stop, parallel to ``stops``
    """

    stops: tuple[Stop, ...]
    routes: tuple[Route, ...]
    location_label: str
    is_fallback: bool = False
    distances_meters: tuple[float, ...] = field(default_factory=tuple)

    @property
    def route_ids(self) -> tuple[str, ...]:
        return tuple(route.identifier for route in self.routes)

    @property
    def nearest_stop(self) -> Optional[Stop]:
        return self.stops[0] if self.stops else None

    @property
    def is_empty(self) -> bool:
        return len(self.routes) == 0

    def find_route(self, identifier: str) -> Optional[Route]:
        """Find a route of this set by identifier, ignoring case."""
        key = canonical_route_id(identifier)
        for route in self.routes:
            if route.key == key:
                return route
        return None


@dataclass(frozen=True, slots=True)
class RecognitionResult:
    """One piece of recognized speech.

    Attributes:
        text: Raw recognized text
        confidence: Recognizer confidence between 0.0 and 1.0
        simulated: True when injected through the manual fallback
    """

    text: str
    confidence: float
    simulated: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be between 0 and 1, got {self.confidence}"
            )


@dataclass(frozen=True, slots=True)
class Confirmed:
    """The candidate matched a route of the active set."""

    route: Route
    raw_text: str = ""

    @property
    def is_confirmed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NoCandidateExtracted:
    """Nothing resembling a route identifier was found in the text."""

    raw_text: str

    @property
    def is_confirmed(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class CandidateNotInSet:
    """A route identifier was heard but it is not a nearby route."""

    candidate_id: str
    raw_text: str

    @property
    def is_confirmed(self) -> bool:
        return False


MatchOutcome = Union[Confirmed, NoCandidateExtracted, CandidateNotInSet]


@dataclass(frozen=True, slots=True)
class Arrival:
    """A predicted bus arrival for a route.

    Attributes:
        route_id: Identifier of the route
        route_name: Display name of the route
        arrival_minutes: Minutes until the bus arrives
        platform: Platform number at the stop
        direction: Direction of travel for this trip
        bus_number: Vehicle identifier
        reliability: Punctuality of the prediction
    """

    route_id: str
    route_name: str
    arrival_minutes: int
    platform: int
    direction: Direction
    bus_number: str
    reliability: Reliability = Reliability.ON_TIME
