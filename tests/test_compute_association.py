from shapely.geometry import LineString, Point, Polygon

from spatial_association_analysis.compute_association import PREDICATES, compute_all, read_geometries

GEOMETRIES = {
    "square": Polygon([(0, 0), (2, 0), (2, 2), (0, 2)]),
    "neighbour": Polygon([(2, 0), (4, 0), (4, 2), (2, 2)]),
    "centre": Point(1, 1),
    "diagonal": LineString([(0, 0), (2, 2)]),
}


def test_compute_all_matrices():
    de9im, predicates = compute_all(GEOMETRIES)
    names = list(GEOMETRIES)

    assert list(de9im.index) == names
    assert list(de9im.columns) == names
    assert set(predicates) == set(PREDICATES)

    assert de9im.loc["square", "neighbour"] == "FF2F11212"
    assert de9im.loc["centre", "square"] == "0FFFFF212"
    assert de9im.loc["square", "centre"] == "0F2FF1FF2"
    assert de9im.loc["square", "square"] == "2FFF1FFF2"

    assert bool(predicates["touches"].loc["square", "neighbour"])
    assert bool(predicates["within"].loc["centre", "square"])
    assert bool(predicates["contains"].loc["square", "centre"])
    assert not bool(predicates["within"].loc["square", "centre"])
    assert bool(predicates["intersects"].loc["diagonal", "centre"])
    assert bool(predicates["disjoint"].loc["centre", "neighbour"])
    for name in names:
        assert bool(predicates["equals"].loc[name, name])


def test_compute_all_writes_csv(tmp_path):
    compute_all(GEOMETRIES, output_dir=str(tmp_path))
    assert (tmp_path / "de9im_matrix.csv").exists()
    for key in PREDICATES:
        assert (tmp_path / f"{key}_matrix.csv").exists()


def test_read_geometries(tmp_path):
    path = tmp_path / "geometries.txt"
    path.write_text(
        "# name;WKT\n"
        "square; POLYGON ((0 0, 2 0, 2 2, 0 2, 0 0))\n"
        "\n"
        "centre;POINT (1 1)\n"
    )
    geometries = read_geometries(str(path))
    assert list(geometries) == ["square", "centre"]
    assert geometries["centre"].equals(Point(1, 1))
