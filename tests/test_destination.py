import pytest

from routeplanner.models.domain import Coordinate, ResolvedStop
from routeplanner.services.routing.destination import select_destination, suggest_destination


def _stop(stop_id: str, straight: float, driving: float | None = None) -> ResolvedStop:
    return ResolvedStop(
        id=stop_id,
        query=stop_id,
        coordinate=Coordinate(lat=36.1, lon=-115.1),
        resolution_source="ors",
        straight_line_meters=straight,
        driving_meters=driving,
    )


def test_farthest_by_driving_distance_wins():
    stops = [_stop("a", 9000.0, 1000.0), _stop("b", 100.0, 5000.0)]
    assert suggest_destination(stops) == "b"


def test_straight_line_used_when_driving_missing():
    stops = [_stop("a", 3000.0), _stop("b", 100.0, 2000.0)]
    assert suggest_destination(stops) == "a"


def test_ties_keep_first_in_input_order():
    stops = [_stop("x", 100.0), _stop("y", 500.0), _stop("z", 500.0)]
    assert suggest_destination(stops) == "y"


def test_requested_destination_takes_precedence():
    stops = [_stop("a", 100.0), _stop("b", 900.0)]
    assert select_destination(stops, "a") == "a"
    assert select_destination(stops, "  a ") == "a"


def test_unknown_requested_destination_falls_back_to_suggestion():
    stops = [_stop("a", 100.0), _stop("b", 900.0)]
    assert select_destination(stops, "missing") == "b"
    assert select_destination(stops, None) == "b"


def test_no_stops_is_an_error():
    with pytest.raises(ValueError):
        suggest_destination([])
