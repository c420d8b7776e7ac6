"""
Spatial Association Analysis: pairwise DE-9IM relations of named geometries.

Computes for every combination of named geometries:
  - DE-9IM   : intersection matrix string (row geometry = A, column = B)
  - Predicates: one boolean matrix per named predicate

Each unordered pair is related once; the reverse direction is the transposed
matrix. The diagonal holds the relation of each geometry with itself.

Usage:
    python -m spatial_association_analysis.compute_association geometries.txt [output_dir]

    # input file: one "name;WKT" per line
    # or as a module:
    from spatial_association_analysis.compute_association import compute_all
    de9im, predicates = compute_all({"a": polygon_a, "b": polygon_b})
"""

import sys
import time
from itertools import combinations
from pathlib import Path
from typing import Callable, Mapping, Optional

import numpy as np
import pandas as pd
from shapely import wkt

# Repo root must be importable when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from engine import IntersectionMatrix, RelateConfig, relate
from engine.predicates import GeometryInput, prepare_geometry


PREDICATES: dict[str, Callable[[IntersectionMatrix], bool]] = {
    "intersects": IntersectionMatrix.is_intersects,
    "disjoint": IntersectionMatrix.is_disjoint,
    "contains": IntersectionMatrix.is_contains,
    "within": IntersectionMatrix.is_within,
    "covers": IntersectionMatrix.is_covers,
    "covered_by": IntersectionMatrix.is_covered_by,
    "touches": IntersectionMatrix.is_touches,
    "crosses": IntersectionMatrix.is_crosses,
    "overlaps": IntersectionMatrix.is_overlaps,
    "equals": IntersectionMatrix.is_equal_topo,
}


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

def read_geometries(path: str) -> dict[str, GeometryInput]:
    """Read "name;WKT" lines; blank lines and lines starting with # are skipped."""
    geometries: dict[str, GeometryInput] = {}
    with open(path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name, sep, text = line.partition(";")
            if not sep:
                raise ValueError(f"{path}:{line_no}: expected 'name;WKT', got {line!r}")
            geometries[name.strip()] = wkt.loads(text)
    return geometries


# ---------------------------------------------------------------------------
# Main computation
# ---------------------------------------------------------------------------

def compute_all(
    geometries: Mapping[str, GeometryInput],
    config: Optional[RelateConfig] = None,
    output_dir: str | None = None,
) -> tuple[pd.DataFrame, dict[str, pd.DataFrame]]:
    """Relate all pairs of named geometries.

    Args:
        geometries: Mapping of name to geometry (shapely, GeoJSON-like or RelateGeometry)
        config: Relate settings (default: built-in defaults)
        output_dir: Optional directory to save the matrices as CSV

    Returns:
        Tuple of (de9im_df, predicate_dfs): the DE-9IM strings and a boolean
        DataFrame per predicate name, all indexed by name on both axes

    Raises:
        InvalidGeometryError: If a geometry is degenerate
    """
    config = config or RelateConfig()
    names = list(geometries)
    n = len(names)
    print(f"Found: {n} geometries → {n*(n-1)//2} pairs")

    # ------------------------------------------------------------------
    # 1. Convert once per geometry
    # ------------------------------------------------------------------
    prepared = {name: prepare_geometry(geometries[name], config) for name in names}

    # ------------------------------------------------------------------
    # 2. Relations: diagonal and unordered pairs
    # ------------------------------------------------------------------
    matrices: dict[tuple[str, str], IntersectionMatrix] = {}
    for name in names:
        matrices[(name, name)] = relate(prepared[name], prepared[name], config)

    pairs = list(combinations(names, 2))
    n_pairs = len(pairs)
    print(f"\nComputing relations ({n_pairs} pairs)...")
    t0 = time.time()
    for i, (name_a, name_b) in enumerate(pairs):
        im = relate(prepared[name_a], prepared[name_b], config)
        matrices[(name_a, name_b)] = im
        matrices[(name_b, name_a)] = im.transpose()

        # progress every 100 pairs
        if (i + 1) % 100 == 0 or (i + 1) == n_pairs:
            elapsed = time.time() - t0
            rate = (i + 1) / elapsed if elapsed > 0 else 0
            remaining = (n_pairs - i - 1) / rate if rate > 0 else 0
            print(f"  {i+1}/{n_pairs} ({elapsed:.0f}s, ~{remaining:.0f}s remaining)")

    # ------------------------------------------------------------------
    # 3. Build matrices
    # ------------------------------------------------------------------
    idx = {name: i for i, name in enumerate(names)}
    de9im_matrix = np.full((n, n), "", dtype=object)
    predicate_matrices = {key: np.zeros((n, n), dtype=bool) for key in PREDICATES}

    for (name_a, name_b), im in matrices.items():
        i, j = idx[name_a], idx[name_b]
        de9im_matrix[i, j] = str(im)
        for key, predicate in PREDICATES.items():
            predicate_matrices[key][i, j] = predicate(im)

    # ------------------------------------------------------------------
    # 4. As DataFrames
    # ------------------------------------------------------------------
    de9im_df = pd.DataFrame(de9im_matrix, index=names, columns=names)
    predicate_dfs = {
        key: pd.DataFrame(matrix, index=names, columns=names)
        for key, matrix in predicate_matrices.items()
    }

    # ------------------------------------------------------------------
    # 5. Optionally save
    # ------------------------------------------------------------------
    if output_dir:
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        de9im_df.to_csv(out / "de9im_matrix.csv")
        for key, df in predicate_dfs.items():
            df.to_csv(out / f"{key}_matrix.csv")
        print(f"\nMatrices saved to {out}/")

    print(f"\nDone: {n}×{n} matrices computed.")
    return de9im_df, predicate_dfs


# ---------------------------------------------------------------------------
# CLI Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python -m spatial_association_analysis.compute_association <geometries.txt> [output_dir]")
        sys.exit(1)
    source = sys.argv[1]
    out = sys.argv[2] if len(sys.argv) > 2 else "data/association_results"
    compute_all(read_geometries(source), output_dir=out)
