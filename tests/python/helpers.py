"""
Test utilities for nesnorm tests.

Builders for small score vectors and tables, and a writer that stores them
in an HDF5 file the way the command line tool expects.
"""
from __future__ import annotations

from pathlib import Path

import numpy as np

import nesnorm


LABELS = ["KEGG_GLYCOLYSIS", "REACTOME_APOPTOSIS", "HALLMARK_HYPOXIA"]

# Rows are stored in a different order than LABELS, and with one extra row
TABLE_LABELS = ["HALLMARK_HYPOXIA", "UNUSED_SET", "KEGG_GLYCOLYSIS", "REACTOME_APOPTOSIS"]
TABLE_VALUES = np.array(
    [
        [0.4, -0.2, 0.6, -0.6, 0.2],
        [9.0, 9.0, -9.0, -9.0, 0.0],
        [1.0, 2.0, 3.0, -1.0, -2.0],
        [0.5, 0.0, -0.3, -0.9, 1.5],
    ]
)
REAL_VALUES = np.array([2.0, -0.6, 0.3])

ANNOT = {"chip": "HG_U133A", "nperm": 5}


def make_vector(
    values: np.ndarray = REAL_VALUES,
    labels: list[str] = LABELS,
    name: str = "es",
) -> nesnorm.LabeledScoreVector:
    """Build a real-score vector."""
    return nesnorm.LabeledScoreVector(name, list(labels), np.array(values))


def make_table(
    values: np.ndarray = TABLE_VALUES,
    labels: list[str] = TABLE_LABELS,
    name: str = "rnd_es",
) -> nesnorm.ScoreTable:
    """Build a permutation-score table."""
    columns = [f"perm_{ix}" for ix in range(values.shape[1])]
    return nesnorm.ScoreTable(name, list(labels), np.array(values), columns, dict(ANNOT))


def random_inputs(
    items: int,
    permutations: int,
    seed: int = 0,
) -> tuple[nesnorm.LabeledScoreVector, nesnorm.ScoreTable]:
    """Random real and permutation scores centred on zero."""
    rng = np.random.default_rng(seed)
    labels = [f"SET_{ix}" for ix in range(items)]
    real = make_vector(rng.normal(size=items), labels)
    table = make_table(rng.normal(size=(items, permutations)), labels)
    return real, table


def write_inputs(
    path: Path,
    real: nesnorm.LabeledScoreVector,
    table: nesnorm.ScoreTable,
) -> None:
    """Store the inputs under the groups `real` and `rnd`."""
    real.save("real", str(path))
    table.save("rnd", str(path))
