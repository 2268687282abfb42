"""Normalization module for nesnorm score tables.

This module provides the normalization schemes, the registry that resolves
them by name, and the batch driver that applies one to every item of a
dataset.
"""

from .schemes import NormResult, NormScheme, PartitionStats, get_norm, list_names
from .batch import normalize

__all__ = [
    "NormResult",
    "NormScheme",
    "PartitionStats",
    "get_norm",
    "list_names",
    "normalize",
]
