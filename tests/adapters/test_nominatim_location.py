"""Tests for the Nominatim location provider with a mocked geocoder."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from geopy.exc import GeocoderTimedOut

from voicenav.adapters.location import NominatimLocationProvider
from voicenav.config import LocationConfig


@pytest.fixture
def geocoder():
    return MagicMock()


@pytest.fixture
def provider(geocoder):
    provider = NominatimLocationProvider(LocationConfig(provider="nominatim", place="KL Sentral"))
    provider._geolocator = geocoder
    return provider


def test_place_is_geocoded_once(provider, geocoder):
    geocoder.geocode.return_value = SimpleNamespace(latitude=3.1347, longitude=101.6841)

    fix = provider.get_fix()
    again = provider.get_fix()

    assert (fix.latitude, fix.longitude) == (3.1347, 101.6841)
    assert again is fix
    geocoder.geocode.assert_called_once_with("KL Sentral")


def test_refresh_geocodes_again(provider, geocoder):
    geocoder.geocode.return_value = SimpleNamespace(latitude=3.1347, longitude=101.6841)
    provider.get_fix()

    provider.refresh()
    provider.get_fix()

    assert geocoder.geocode.call_count == 2


def test_unknown_place_means_no_fix(provider, geocoder):
    geocoder.geocode.return_value = None

    assert provider.get_fix() is None


def test_service_error_means_no_fix(provider, geocoder):
    geocoder.geocode.side_effect = GeocoderTimedOut("timed out")

    assert provider.get_fix() is None


def test_no_place_configured(geocoder):
    provider = NominatimLocationProvider(LocationConfig(provider="nominatim"))
    provider._geolocator = geocoder

    assert provider.get_fix() is None
    geocoder.geocode.assert_not_called()
