"""Tests for matching route candidates against the active set."""

import pytest

from voicenav.domain import CandidateNotInSet, Confirmed, NoCandidateExtracted, ProximitySet
from voicenav.services import RouteMatcher


@pytest.fixture
def active_set(catalog):
    routes = tuple(catalog.get_route(route_id) for route_id in ("581", "T581", "U84"))
    return ProximitySet(stops=(), routes=routes, location_label="KL Sentral")


def test_confirmed_returns_catalog_record(catalog, active_set):
    outcome = RouteMatcher(catalog).match("581", "route 581", active_set)

    assert isinstance(outcome, Confirmed)
    assert outcome.is_confirmed
    assert outcome.route == catalog.get_route("581")
    assert outcome.raw_text == "route 581"


def test_match_ignores_case(catalog, active_set):
    outcome = RouteMatcher(catalog).match("t581", "t581", active_set)

    assert isinstance(outcome, Confirmed)
    assert outcome.route.identifier == "T581"


def test_no_candidate(catalog, active_set):
    outcome = RouteMatcher(catalog).match(None, "hello", active_set)

    assert outcome == NoCandidateExtracted(raw_text="hello")
    assert not outcome.is_confirmed


def test_known_route_outside_active_set(catalog, active_set):
    outcome = RouteMatcher(catalog).match("400", "route 400", active_set)

    assert outcome == CandidateNotInSet(candidate_id="400", raw_text="route 400")


def test_no_partial_matching(catalog, active_set):
    outcome = RouteMatcher(catalog).match("58", "five eight", active_set)

    assert isinstance(outcome, CandidateNotInSet)
