"""Normalization schemes for real and permutation scores.

This module provides the methods used to rescale an observed score and its
permutation scores onto a common scale before significance estimation.

Normalization Schemes:
    NONE: No normalization, scores are passed through
    MEANDIV: Divide by the mean of the positive or negative permutation
        scores, depending on the sign of each value (default)

Every scheme works along the last axis, so a single item (scalar real
score, 1-D permutation row) and a block of items (1-D real scores, 2-D
permutation rows) go through the same code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

import numpy as np

from ..data import as_float
from ..errors import InvalidArgument, UnknownStrategy

__all__ = [
    "NormScheme",
    "NormResult",
    "PartitionStats",
    "apply_norm",
    "get_norm",
    "list_names",
]


class NormScheme(Enum):
    """Normalization scheme for real and permutation scores."""

    NONE = "None"
    MEANDIV = "meandiv"

    @classmethod
    def from_name(cls, name: Any) -> NormScheme:
        """Determine normalization scheme from its name."""

        if isinstance(name, cls):
            return name
        if not isinstance(name, str) or not name:
            raise InvalidArgument("A normalization strategy name is required.")

        for scheme in cls:
            if scheme.value == name:
                return scheme

        raise UnknownStrategy(name, list_names())


@dataclass(frozen=True)
class PartitionStats:
    """Per-item statistics of the positive and non-positive permutation scores."""

    n_pos: np.ndarray
    n_neg: np.ndarray
    mean_pos: np.ndarray
    mean_neg: np.ndarray
    std_pos: np.ndarray
    std_neg: np.ndarray


@dataclass(frozen=True)
class NormResult:
    """Normalized real score(s) and permutation score(s)."""

    real: Any
    rnd: np.ndarray
    stats: Union[PartitionStats, None] = None


def _norm_none(
    real: Any,
    rnd: np.ndarray,
) -> NormResult:
    """No normalization."""
    return NormResult(real, rnd)


def _partition_mean(
    values: np.ndarray,
    mask: np.ndarray,
    count: np.ndarray,
) -> np.ndarray:

    total = np.where(mask, values, 0).sum(axis=-1)
    return total / count


def _partition_std(
    values: np.ndarray,
    mask: np.ndarray,
    mean: np.ndarray,
    count: np.ndarray,
) -> np.ndarray:

    # Sample standard deviation, NaN below two members
    dev = np.where(mask, values - np.expand_dims(mean, -1), 0)
    return np.sqrt((dev * dev).sum(axis=-1) / np.maximum(count - 1, 0))


def _norm_meandiv(
    real: Any,
    rnd: np.ndarray,
) -> NormResult:
    """Mean division, positive and negative scores handled separately.

    Positive permutation scores are divided by the mean of the positive
    permutation scores; all others (zero included) by the absolute mean of
    the non-positive ones. The real score is divided according to its own
    sign. An empty partition has a NaN mean, and a zero mean gives
    Infinity or NaN; both propagate into the output unchanged.
    """

    pos = rnd > 0
    neg = ~pos

    n_pos = pos.sum(axis=-1)
    n_neg = neg.sum(axis=-1)

    # Keep the working precision of the scores
    c_pos = np.asarray(n_pos, dtype=rnd.dtype)
    c_neg = np.asarray(n_neg, dtype=rnd.dtype)

    with np.errstate(divide="ignore", invalid="ignore"):

        mean_pos = _partition_mean(rnd, pos, c_pos)
        mean_neg = _partition_mean(rnd, neg, c_neg)

        std_pos = _partition_std(rnd, pos, mean_pos, c_pos)
        std_neg = _partition_std(rnd, neg, mean_neg, c_neg)

        div_pos = np.expand_dims(mean_pos, -1)
        div_neg = np.expand_dims(np.abs(mean_neg), -1)
        rnd_norm = rnd / np.where(pos, div_pos, div_neg)

        real_norm = real / np.where(real > 0, mean_pos, np.abs(mean_neg))

    stats = PartitionStats(n_pos, n_neg, mean_pos, mean_neg, std_pos, std_neg)
    return NormResult(real_norm, rnd_norm, stats)


_SCHEMES: dict[NormScheme, Callable[[Any, np.ndarray], NormResult]] = {
    NormScheme.NONE: _norm_none,
    NormScheme.MEANDIV: _norm_meandiv,
}


def list_names() -> list[str]:
    """Names of the available normalization schemes."""
    return [scheme.value for scheme in NormScheme]


def apply_norm(
    scheme: NormScheme,
    real: Any,
    rnd: Any,
) -> NormResult:
    """Apply an already resolved scheme."""

    rnd = as_float(rnd)
    if scheme is NormScheme.NONE:
        return _SCHEMES[scheme](real, rnd)

    if rnd.ndim < 1:
        raise InvalidArgument("Permutation scores must have at least one dimension.")

    real = np.asarray(real, dtype=rnd.dtype)
    if real.shape != rnd.shape[:-1]:
        raise InvalidArgument(
            f"Real scores of shape {real.shape} do not match "
            f"permutation scores of shape {rnd.shape}."
        )
    return _SCHEMES[scheme](real, rnd)


def get_norm(
    name: Union[str, NormScheme],
    real: Any,
    rnd: Any,
) -> NormResult:
    """Normalize a real score and its permutation scores.

    Args:
        name: Name of the normalization scheme, see `list_names`
        real: Real score (or 1-D array of real scores)
        rnd: Permutation scores (1-D, or 2-D with one row per real score)

    Returns:
        NormResult with the normalized real score(s) and permutation scores

    Raises:
        InvalidArgument: If the name is missing or the shapes disagree
        UnknownStrategy: If no scheme has this name
    """

    return apply_norm(NormScheme.from_name(name), real, rnd)
