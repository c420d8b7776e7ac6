import pytest

from engine import IntersectionMatrix
from engine.intersection_matrix import validate_pattern
from geomgraph.errors import TopologyError
from geomgraph.label import Label, Location


def test_from_string_and_str():
    im = IntersectionMatrix.from_string("212101212")
    assert str(im) == "212101212"
    assert im.get(Location.INTERIOR, Location.INTERIOR) == 2
    assert im.get(Location.BOUNDARY, Location.BOUNDARY) == 0
    assert str(IntersectionMatrix.from_string("ff0fff212")) == "FF0FFF212"
    assert str(IntersectionMatrix()) == "FFFFFFFFF"


@pytest.mark.parametrize("value", ["21210121", "2121012120", "T12101212", "*12101212"])
def test_from_string_rejects_invalid(value):
    with pytest.raises(ValueError):
        IntersectionMatrix.from_string(value)


def test_set_at_least():
    im = IntersectionMatrix()
    im.set_at_least(Location.INTERIOR, Location.EXTERIOR, 1)
    im.set_at_least(Location.INTERIOR, Location.EXTERIOR, 0)
    assert im.get(Location.INTERIOR, Location.EXTERIOR) == 1
    im.set_at_least_if_valid(Location.NONE, Location.EXTERIOR, 2)
    assert str(im) == "FF1FFFFFF"


def test_set_at_least_from_string():
    im = IntersectionMatrix.from_string("F0FFFFFF2")
    im.set_at_least_from_string("1F*FFT*F1")
    assert str(im) == "10FFFFFF2"


def test_transpose():
    im = IntersectionMatrix.from_string("0FFFFF212")
    assert str(im.transpose()) == "0F2FF1FF2"
    assert im.transpose().transpose() == im


def test_matches():
    im = IntersectionMatrix.from_string("0FFFFF212")
    assert im.matches("T*F**F***")
    assert im.matches("0********")
    assert im.matches("t*f**f***")
    assert not im.matches("1********")
    assert not im.matches("F********")


@pytest.mark.parametrize("pattern", ["T*F**F**", "T*F**F***F", "T*F**F**X", None])
def test_invalid_pattern(pattern):
    with pytest.raises(ValueError):
        validate_pattern(pattern)


def test_dimensions_from_matrix():
    im = IntersectionMatrix.from_string("0FFFFF212")
    assert im.dimension_a == 0
    assert im.dimension_b == 2
    assert IntersectionMatrix.from_string("FFFFFF212").dimension_a == -1


def test_predicates_point_in_polygon():
    im = IntersectionMatrix.from_string("0FFFFF212")
    assert im.is_within() and im.is_covered_by() and im.is_intersects()
    assert not im.is_contains()
    assert not im.is_touches()
    assert not im.is_crosses()
    assert im.transpose().is_contains() and im.transpose().is_covers()


def test_predicates_crossing_lines():
    im = IntersectionMatrix.from_string("0F1FF0102")
    assert im.is_crosses()
    assert not im.is_overlaps()
    assert not im.is_touches()


def test_predicates_polygons():
    overlap = IntersectionMatrix.from_string("212101212")
    assert overlap.is_overlaps()
    assert not overlap.is_crosses()

    touch = IntersectionMatrix.from_string("FF2F11212")
    assert touch.is_touches()
    assert not touch.is_overlaps()
    assert touch.is_intersects()

    equal = IntersectionMatrix.from_string("2FFF1FFF2")
    assert equal.is_equal_topo()
    assert equal.is_within() and equal.is_contains()


def test_predicates_points():
    # touches is undefined for two points
    same = IntersectionMatrix.from_string("0FFFFFFF2")
    assert same.is_equal_topo()
    assert not same.is_touches()

    apart = IntersectionMatrix.from_string("FF0FFF0F2")
    assert apart.is_disjoint()
    assert not apart.is_touches()


def test_update_from_label():
    # shell edge of A running through the interior of B
    label = Label.for_area(0, Location.BOUNDARY, Location.EXTERIOR, Location.INTERIOR)
    label.set_all_locations(1, Location.INTERIOR)
    im = IntersectionMatrix()
    im.update_from_label(label)
    assert str(im) == "2FF1FF2FF"


def test_update_from_line_label():
    label = Label.for_on(0, Location.INTERIOR)
    label.set_location(1, Location.EXTERIOR)
    im = IntersectionMatrix()
    im.update_from_label(label)
    assert str(im) == "FF1FFFFFF"


def test_update_from_unresolved_label():
    with pytest.raises(TopologyError):
        IntersectionMatrix().update_from_label(Label.for_on(0, Location.INTERIOR))

    label = Label.for_area(0, Location.BOUNDARY, Location.NONE, Location.INTERIOR)
    label.set_all_locations(1, Location.EXTERIOR)
    with pytest.raises(TopologyError):
        IntersectionMatrix().update_from_label(label)
