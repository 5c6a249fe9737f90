"""Tests for the spoken arrival announcement."""

import pytest

from voicenav.domain import Arrival, Direction, Reliability
from voicenav.services import ArrivalAnnouncer


class FixedArrivals:
    def __init__(self, arrivals=(), error=None):
        self.arrivals = list(arrivals)
        self.error = error

    def get_arrivals(self, route_id):
        if self.error is not None:
            raise self.error
        return self.arrivals


def _arrival(minutes, reliability=Reliability.ON_TIME, platform=2):
    return Arrival(
        route_id="581",
        route_name="581",
        arrival_minutes=minutes,
        platform=platform,
        direction=Direction.INBOUND,
        bus_number="581-07",
        reliability=reliability,
    )


@pytest.fixture
def route_581(catalog):
    return catalog.get_route("581")


def test_next_and_following_bus(route_581, speech):
    announcer = ArrivalAnnouncer(FixedArrivals([_arrival(5), _arrival(20)]), speech)

    announced = announcer.announce(route_581)

    assert announced.arrival_minutes == 5
    assert speech.history == [
        "Getting live times for route 581...",
        "Route 581 to Gombak. Next bus arrives in 5 minutes at platform 2. "
        "Bus number 581-07. Tracking started.",
        "Following bus in 20 minutes.",
    ]
    assert announcer.tracked_routes == ["581"]


@pytest.mark.parametrize(
    "reliability, suffix",
    [(Reliability.DELAYED, " delayed"), (Reliability.EARLY, " early")],
)
def test_reliability_is_spoken(route_581, speech, reliability, suffix):
    announcer = ArrivalAnnouncer(FixedArrivals([_arrival(3, reliability)]), speech)

    announcer.announce(route_581)

    assert f"at platform 2{suffix}. Bus number" in speech.last


def test_no_arrivals(route_581, speech):
    announcer = ArrivalAnnouncer(FixedArrivals([]), speech)

    assert announcer.announce(route_581) is None
    assert speech.last == "No buses currently scheduled for route 581. Please try again later."
    assert announcer.tracked_routes == []


def test_lookup_error_is_spoken_not_raised(route_581, speech):
    announcer = ArrivalAnnouncer(FixedArrivals(error=ConnectionError("feed down")), speech)

    assert announcer.announce(route_581) is None
    assert speech.last == "Error getting bus times for route 581. Please try again."


def test_circular_route_destination(catalog, speech):
    announcer = ArrivalAnnouncer(FixedArrivals([_arrival(4)]), speech)

    announcer.announce(catalog.get_route("B101"))

    assert speech.history[1].startswith("Route B101 to Circular.")
