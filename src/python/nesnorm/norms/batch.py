"""Normalization of every item of a dataset.

The real-score vector decides which rows of the permutation table are
normalized and in what order; rows of the table without a real score are
ignored.
"""

from __future__ import annotations

from typing import Union

import dask.array as da
import numpy as np

from ..config import Opts
from ..data import LabeledScoreVector, NormalizationOutcome, ScoreTable
from .schemes import NormScheme, apply_norm

__all__ = [
    "normalize",
]


def _select_rows(
    real: LabeledScoreVector,
    table: ScoreTable,
) -> np.ndarray:

    # Raises MissingRow for the first label without a row
    rows = np.array([table.index(label) for label in real.labels], dtype=np.intp)
    return table.values[rows]


def _apply_block(
    block: np.ndarray,
    scheme: NormScheme,
) -> np.ndarray:

    # The real scores travel in the last column of the block
    result = apply_norm(scheme, block[:, -1], block[:, :-1])
    return np.column_stack([result.rnd, result.real])


def _normalize_chunked(
    scheme: NormScheme,
    real: np.ndarray,
    rnd: np.ndarray,
    chunks: int,
) -> tuple[np.ndarray, np.ndarray]:

    stacked = np.column_stack([rnd, real])
    blocks = da.from_array(stacked, chunks=(chunks, -1))
    out = blocks.map_blocks(
        _apply_block,
        scheme,
        dtype=stacked.dtype,
        meta=np.empty((0, 0), dtype=stacked.dtype),
    ).compute()

    return out[:, -1], out[:, :-1]


def _normalize_whole(
    scheme: NormScheme,
    real: np.ndarray,
    rnd: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:

    result = apply_norm(scheme, real, rnd)
    return np.asarray(result.real), np.asarray(result.rnd)


def normalize(
    name: Union[str, NormScheme],
    real: LabeledScoreVector,
    table: ScoreTable,
    opts: Union[Opts, None] = None,
) -> NormalizationOutcome:
    """Normalize the real and permutation scores of every item.

    Args:
        name: Name of the normalization scheme
        real: Real score of each item, in output order
        table: Permutation scores, with a row for every label of `real`
        opts: Output naming and chunking options

    Returns:
        NormalizationOutcome whose row `r` belongs to the label at
        position `r` of `real`

    Raises:
        InvalidArgument: If the scheme name is missing
        UnknownStrategy: If no scheme has this name
        MissingRow: If a label of `real` has no row in `table`
    """

    if opts is None:
        opts = Opts()

    scheme = NormScheme.from_name(name)

    # Both are fresh copies, so the outcome never aliases the inputs

    rnd = _select_rows(real, table)
    dtype = np.result_type(real.values, rnd)
    rnd = rnd.astype(dtype, copy=False)
    values = real.values.astype(dtype)

    if opts.chunks is not None and len(real) > 0:
        real_norm, rnd_norm = _normalize_chunked(scheme, values, rnd, opts.chunks)
    else:
        real_norm, rnd_norm = _normalize_whole(scheme, values, rnd)

    labels = list(real.labels)

    return NormalizationOutcome(
        LabeledScoreVector(real.name + opts.suffix, labels, real_norm),
        ScoreTable(
            opts.table,
            labels,
            rnd_norm,
            list(table.columns),
            dict(table.annot),
        ),
    )
