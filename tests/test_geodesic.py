import pytest
from pyproj import Geod
from shapely.geometry import Point

from engine import geodesic_bearing, geodesic_bearing_distance


def test_bearing_due_north():
    bearing, distance = geodesic_bearing_distance((9.0, 47.0), (9.0, 48.0))
    assert bearing == pytest.approx(0.0, abs=1e-9)
    assert distance == pytest.approx(111_200, rel=1e-2)


def test_bearing_matches_forward_problem():
    lon, lat, _ = Geod(ellps="WGS84").fwd(8.5, 47.4, 45.0, 10_000)
    bearing, distance = geodesic_bearing_distance(Point(8.5, 47.4), Point(lon, lat))
    assert bearing == pytest.approx(45.0, abs=1e-6)
    assert distance == pytest.approx(10_000, abs=1e-3)


def test_bearing_west_is_negative():
    assert geodesic_bearing((9.0, 0.0), (8.0, 0.0)) == pytest.approx(-90.0, abs=1e-9)
    assert geodesic_bearing((9.0, 0.0), (10.0, 0.0)) == pytest.approx(90.0, abs=1e-9)


def test_bearing_accepts_points_and_pairs():
    assert geodesic_bearing(Point(9, 47), Point(10, 47)) == geodesic_bearing((9, 47), (10, 47))
