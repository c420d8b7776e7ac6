import pytest
from pydantic import ValidationError

from engine.config import CONFIG_PATH, RelateConfig, load_config
from geomgraph.edge_set_intersector import IndexedEdgeSetIntersector, SimpleEdgeSetIntersector


def test_defaults():
    config = RelateConfig()
    assert config.edge_set_intersector == "indexed"
    assert config.precision == "float64"
    assert config.snap_factor == 4.0
    assert config.verbose is False
    assert isinstance(config.make_edge_set_intersector(), IndexedEdgeSetIntersector)
    assert isinstance(RelateConfig(edge_set_intersector="simple").make_edge_set_intersector(),
                      SimpleEdgeSetIntersector)


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "missing.yaml") == RelateConfig()


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("relate:\n  edge_set_intersector: simple\n  precision: float32\n  verbose: true\n")
    config = load_config(path)
    assert config.edge_set_intersector == "simple"
    assert config.precision == "float32"
    assert config.verbose is True
    assert config.snap_factor == 4.0
    assert config.make_precision().dtype_name == "float32"


def test_file_without_relate_section(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("other:\n  key: 1\n")
    assert load_config(path) == RelateConfig()


@pytest.mark.parametrize("settings", [
    {"edge_set_intersector": "rtree"},
    {"precision": "float16"},
    {"snap_factor": -1.0},
])
def test_invalid_settings(settings):
    with pytest.raises(ValidationError):
        RelateConfig(**settings)


def test_project_config_loads():
    assert CONFIG_PATH.exists()
    assert isinstance(load_config(), RelateConfig)
