import math

import pytest
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
)

from converter import convert_geometry, convert_point, to_shapely
from geomgraph.coordinate import Coordinate
from geomgraph.errors import InvalidGeometryError
from geomgraph.precision import Precision


def test_convert_polygon_with_hole():
    polygon = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)], [[(4, 4), (6, 4), (6, 6), (4, 6)]])
    geom = convert_geometry(polygon)
    assert geom.kind == "Polygon"
    assert geom.dimension == 2
    assert len(geom.polygons) == 1
    part = geom.polygons[0]
    assert part.shell[0] == part.shell[-1]
    assert len(part.holes) == 1


def test_convert_collection_flattens_components():
    collection = GeometryCollection([
        Point(5, 5),
        LineString([(0, 0), (1, 1)]),
        MultiPolygon([Polygon([(0, 0), (1, 0), (1, 1)]), Polygon([(2, 2), (3, 2), (3, 3)])]),
    ])
    geom = convert_geometry(collection)
    assert geom.kind == "GeometryCollection"
    assert geom.points == [Coordinate(5.0, 5.0)]
    assert len(geom.lines) == 1
    assert len(geom.polygons) == 2


def test_linear_ring_is_a_line():
    geom = convert_geometry(LinearRing([(0, 0), (1, 0), (1, 1)]))
    assert geom.dimension == 1
    assert geom.lines[0][0] == geom.lines[0][-1]
    assert geom.linear_boundary() == []


def test_repeated_points_are_removed():
    geom = convert_geometry(LineString([(0, 0), (0, 0), (1, 1), (1, 1), (2, 2)]))
    assert geom.lines[0] == [Coordinate(0.0, 0.0), Coordinate(1.0, 1.0), Coordinate(2.0, 2.0)]


def test_geojson_mapping():
    geom = convert_geometry({"type": "LineString", "coordinates": [[0, 0], [3, 4]]})
    assert geom.kind == "LineString"
    assert geom.lines[0][-1] == Coordinate(3.0, 4.0)


def test_empty_geometry():
    geom = convert_geometry(Polygon())
    assert geom.is_empty()
    assert geom.dimension == -1


def test_float32_rounding():
    geom = convert_geometry(Point(0.1, 0.2), Precision("float32"))
    assert geom.points[0].x == 0.10000000149011612
    assert geom.points[0].x != 0.1


def test_non_finite_coordinates():
    with pytest.raises(InvalidGeometryError):
        convert_point((math.nan, 1.0))
    with pytest.raises(InvalidGeometryError):
        convert_point((1.0, math.inf))
    with pytest.raises(InvalidGeometryError):
        convert_geometry(LineString([(0, 0), (math.nan, 1)]))


def test_zero_length_line():
    with pytest.raises(InvalidGeometryError):
        convert_geometry(LineString([(1, 1), (1, 1)]))


def test_degenerate_rings():
    with pytest.raises(InvalidGeometryError):
        convert_geometry(Polygon([(0, 0), (1, 0), (1, 0), (0, 0)]))
    with pytest.raises(InvalidGeometryError):
        convert_geometry(Polygon([(0, 0), (1, 1), (2, 2)]))


def test_invalid_geometry_is_a_value_error():
    with pytest.raises(ValueError):
        convert_geometry(LineString([(1, 1), (1, 1)]))


def test_unsupported_input():
    with pytest.raises(ValueError):
        convert_geometry(42)
    with pytest.raises(ValueError):
        to_shapely("POINT (1 1)")


def test_convert_point():
    assert convert_point(Point(1, 2)) == Coordinate(1.0, 2.0)
    assert convert_point((3, 4)) == Coordinate(3.0, 4.0)
    with pytest.raises(InvalidGeometryError):
        convert_point(Point())


def test_reprojection_lv95_to_wgs84():
    # Bern, LV95 origin
    geom = convert_geometry(Point(2600000, 1200000), source_crs=2056)
    lon, lat = geom.points[0].x, geom.points[0].y
    assert lon == pytest.approx(7.44, abs=0.01)
    assert lat == pytest.approx(46.95, abs=0.01)


def test_same_crs_is_unchanged():
    geom = convert_geometry(Point(7.5, 47.0), source_crs="EPSG:4326")
    assert geom.points[0] == Coordinate(7.5, 47.0)
