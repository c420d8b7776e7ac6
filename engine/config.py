"""
Configuration of the relate engine.

Settings live in the ``relate:`` section of ``config.yaml`` at the project
root. Missing file or missing keys fall back to the defaults below.
"""

from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field

from geomgraph.edge_set_intersector import EdgeSetIntersector, create_edge_set_intersector
from geomgraph.precision import Precision

CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"


class RelateConfig(BaseModel):
    """Validated relate settings."""
    edge_set_intersector: Literal["indexed", "simple"] = "indexed"
    precision: Literal["float64", "float32"] = "float64"
    snap_factor: float = Field(default=4.0, ge=0.0)
    verbose: bool = False

    def make_precision(self) -> Precision:
        return Precision(self.precision, self.snap_factor)

    def make_edge_set_intersector(self) -> EdgeSetIntersector:
        return create_edge_set_intersector(self.edge_set_intersector)


DEFAULT_CONFIG = RelateConfig()


def load_config(path: Optional[Union[str, Path]] = None) -> RelateConfig:
    """
    Read the ``relate:`` section of a YAML config file.

    Args:
        path: Config file (default: config.yaml in the project root)

    Returns:
        RelateConfig; the defaults if the file does not exist

    Raises:
        pydantic.ValidationError: If a setting has an invalid value
    """
    path = Path(path) if path is not None else CONFIG_PATH
    if not path.exists():
        return RelateConfig()
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return RelateConfig(**(data.get("relate") or {}))
