import pytest

from routeplanner.models.domain import Coordinate
from routeplanner.services.geospatial import eta_minutes, haversine_meters, meters_to_miles

LAS_VEGAS = Coordinate(lat=36.1699, lon=-115.1398)
HENDERSON = Coordinate(lat=36.0395, lon=-114.9817)


def test_haversine_is_symmetric_and_zero_on_identity():
    assert haversine_meters(LAS_VEGAS, HENDERSON) == pytest.approx(haversine_meters(HENDERSON, LAS_VEGAS))
    assert haversine_meters(LAS_VEGAS, LAS_VEGAS) == 0.0


def test_haversine_known_distance():
    # one degree of latitude on a 6371 km sphere
    distance = haversine_meters(Coordinate(lat=0.0, lon=0.0), Coordinate(lat=1.0, lon=0.0))
    assert distance == pytest.approx(111194.9, rel=1e-4)


def test_haversine_antipodes_do_not_overflow():
    distance = haversine_meters(Coordinate(lat=0.0, lon=0.0), Coordinate(lat=0.0, lon=180.0))
    assert distance == pytest.approx(3.141592653589793 * 6371000.0)


def test_meters_to_miles():
    assert meters_to_miles(1609.34) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, 1), (20, 1), (89, 1), (90, 2), (150, 3), (600, 10)],
)
def test_eta_minutes_never_zero(seconds, expected):
    assert eta_minutes(seconds) == expected


def test_coordinate_validation():
    assert LAS_VEGAS.is_valid()
    assert not Coordinate(lat=91.0, lon=0.0).is_valid()
    assert not Coordinate(lat=0.0, lon=float("nan")).is_valid()
