"""Arrival announcer - Speaks live times for a confirmed route."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.models import Arrival, Reliability, Route
from ..ports.arrivals import ArrivalSourcePort
from ..ports.speech import SpeechOutputPort


@dataclass
class ArrivalAnnouncer:
    """Looks up arrivals for a route and reads the next bus aloud.

    Lookup failures are spoken and logged, never raised: by the time a
    route is confirmed the rider is waiting for audio feedback.

    Attributes:
        arrivals: Arrival predictions
        speech: Speech output
    """

    arrivals: ArrivalSourcePort
    speech: SpeechOutputPort

    tracked_routes: List[str] = field(default_factory=list)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def announce(self, route: Route) -> Optional[Arrival]:
        """Announce the next arrival for a route.

        Args:
            route: The confirmed route.

        Returns:
            The announced next arrival, or None if nothing was found.
        """
        self.speech.speak(f"Getting live times for route {route.identifier}...")

        try:
            arrivals = list(self.arrivals.get_arrivals(route.identifier))
        except Exception:
            self._logger.exception(
                "Arrival lookup failed",
                extra={"route_id": route.identifier},
            )
            self.speech.speak(
                f"Error getting bus times for route {route.identifier}. Please try again."
            )
            return None

        if not arrivals:
            self.speech.speak(
                f"No buses currently scheduled for route {route.identifier}. "
                "Please try again later."
            )
            return None

        self.start_tracking(route)

        next_bus = arrivals[0]
        self.speech.speak(self.describe(route, next_bus), rate=1.0, pitch=1.1)
        if len(arrivals) > 1:
            self.speech.speak(
                f"Following bus in {arrivals[1].arrival_minutes} minutes."
            )
        return next_bus

    def describe(self, route: Route, arrival: Arrival) -> str:
        """Build the spoken sentence for the next arrival."""
        reliability = (
            ""
            if arrival.reliability is Reliability.ON_TIME
            else f" {arrival.reliability.value.lower()}"
        )
        return (
            f"Route {route.identifier} to {route.destination}. "
            f"Next bus arrives in {arrival.arrival_minutes} minutes "
            f"at platform {arrival.platform}{reliability}. "
            f"Bus number {arrival.bus_number}. Tracking started."
        )

    def start_tracking(self, route: Route) -> None:
        if route.identifier not in self.tracked_routes:
            self.tracked_routes.append(route.identifier)
        self._logger.info("Started tracking route", extra={"route_id": route.identifier})
