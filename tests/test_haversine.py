import pytest

from voicenav.geo import haversine_meters


def test_zero_distance():
    assert haversine_meters(3.1347, 101.6841, 3.1347, 101.6841) == 0.0


def test_one_degree_of_latitude():
    assert haversine_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_194.9, rel=1e-4)


def test_symmetric():
    there = haversine_meters(3.1347, 101.6841, 3.1478, 101.7108)
    back = haversine_meters(3.1478, 101.7108, 3.1347, 101.6841)

    assert there == pytest.approx(back)
    assert 3_000 < there < 3_600
