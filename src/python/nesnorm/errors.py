"""Exceptions raised by nesnorm.

All of them signal caller-side mistakes. Numeric degeneracies (empty
partitions, division by zero, NaN inputs) are never raised; they propagate
as NaN or Infinity in the normalized values.
"""

from __future__ import annotations

__all__ = [
    "InvalidArgument",
    "UnknownStrategy",
    "MissingRow",
]


class InvalidArgument(ValueError):
    """A missing strategy name or a malformed vector/table."""


class UnknownStrategy(InvalidArgument):
    """The strategy name is not in the registry."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(
            f"Unknown normalization strategy: {name}. "
            f"Use one of {', '.join(repr(k) for k in known)}."
        )


class MissingRow(KeyError):
    """A label of the real-score vector has no row in the score table."""

    def __init__(self, label: str, table: str = "") -> None:
        self.label = label
        self.table = table
        super().__init__(label)

    def __str__(self) -> str:
        if self.table:
            return f"No row for label {self.label!r} in table {self.table!r}."
        return f"No row for label {self.label!r}."
