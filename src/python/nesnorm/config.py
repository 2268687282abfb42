from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "Opts",
]


@dataclass
class Opts:
    """Options for a batch normalization.

    Attributes:
        suffix: Appended to the name of the real-score vector
        table: Name given to the normalized permutation table
        chunks: Rows per dask block, or None to normalize in one pass
    """

    suffix: str = "_norm"
    table: str = "norm"
    chunks: Union[int, None] = None

    def __post_init__(self) -> None:

        if self.chunks is not None and self.chunks < 1:
            raise ValueError(f"The chunk size must be positive, got {self.chunks}.")
