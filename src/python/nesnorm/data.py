"""Labelled score containers.

A `LabeledScoreVector` holds the real (observed) score of each tested item,
and a `ScoreTable` holds the permutation scores of each item, one row per
label. Both can be written to and read back from an HDF5 group.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

import h5py
import numpy as np

from .errors import InvalidArgument, MissingRow

__all__ = [
    "Datasets",
    "LabeledScoreVector",
    "ScoreTable",
    "NormalizationOutcome",
    "as_float",
]


# Datasets and attributes in an HDF5 group

@dataclass
class Datasets:
    LABELS = "labels"
    VALUES = "values"
    COLUMNS = "columns"
    ANNOT = "annot"
    NAME = "name"


def as_float(values: Any) -> np.ndarray:
    """View `values` as a floating point array.

    Floating arrays are returned as they are (no copy, dtype kept); anything
    else is converted to float64.
    """

    arr = np.asarray(values)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)
    return arr


def _check_labels(labels: list[str], what: str) -> dict[str, int]:

    index: dict[str, int] = {}
    for ix, label in enumerate(labels):
        if label in index:
            raise InvalidArgument(f"Duplicate label {label!r} in {what}.")
        index[label] = ix
    return index


def _encode(strings: list[str]) -> np.ndarray:
    return np.array([s.encode("utf-8") for s in strings], dtype=bytes)


def _decode(dataset: h5py.Dataset) -> list[str]:
    return [s.decode("utf-8") if isinstance(s, bytes) else str(s) for s in dataset[()]]


def _replace_group(file: h5py.File, group: str) -> Union[h5py.File, h5py.Group]:

    if not group:
        return file
    if group in file:
        del file[group]
    return file.create_group(group)


def _check_annot(annot: dict, table: str) -> None:

    # HDF5 attributes hold strings, numbers and numeric arrays only
    for key, value in annot.items():
        if not isinstance(key, str):
            raise InvalidArgument(
                f"Annotation keys of table {table!r} must be strings, got {key!r}."
            )
        arr = np.asarray(value)
        if arr.dtype.kind in "biufcS" or (arr.dtype.kind == "U" and arr.ndim == 0):
            continue
        raise InvalidArgument(
            f"Annotation {key!r} of table {table!r} cannot be stored in HDF5: "
            f"{type(value).__name__} values are not supported."
        )


def _get_group(file: h5py.File, group: str) -> Union[h5py.File, h5py.Group]:

    if not group:
        return file
    if group not in file:
        raise KeyError(f"The group {group} does not exist in {file.filename}.")
    return file[group]


class LabeledScoreVector:
    """One score per label, in a significant order."""

    def __init__(
        self: LabeledScoreVector,
        name: str,
        labels: list[str],
        values: Any,
    ) -> None:

        values = as_float(values)
        labels = list(labels)

        if values.ndim != 1:
            raise InvalidArgument(
                f"The values of vector {name!r} must be 1-D, got shape {values.shape}."
            )
        if len(labels) != values.shape[0]:
            raise InvalidArgument(
                f"Vector {name!r} has {len(labels)} labels but {values.shape[0]} values."
            )

        self.name = name
        self.labels = labels
        self.values = values
        self._index = _check_labels(labels, f"vector {name!r}")

    def __len__(self: LabeledScoreVector) -> int:
        return len(self.labels)

    def __iter__(self: LabeledScoreVector) -> Iterator[tuple[str, float]]:
        return iter(zip(self.labels, self.values))

    def __contains__(self: LabeledScoreVector, label: str) -> bool:
        return label in self._index

    def __repr__(self: LabeledScoreVector) -> str:
        return f"LabeledScoreVector(name={self.name!r}, size={len(self)})"

    def score(
        self: LabeledScoreVector,
        label: str,
    ) -> float:

        if label not in self._index:
            raise KeyError(f"No score for label {label!r} in vector {self.name!r}.")
        return self.values[self._index[label]]

    def save(
        self: LabeledScoreVector,
        group: str,
        file: str,
    ) -> None:

        with h5py.File(file, "a") as f:
            grp = _replace_group(f, group)
            grp.create_dataset(Datasets.LABELS, data=_encode(self.labels))
            grp.create_dataset(Datasets.VALUES, data=self.values)
            grp.attrs[Datasets.NAME] = self.name

    @classmethod
    def load(
        cls,
        group: str,
        file: h5py.File,
    ) -> LabeledScoreVector:
        """Load a LabeledScoreVector from a group of an open HDF5 file."""

        grp = _get_group(file, group)
        name = grp.attrs.get(Datasets.NAME, group)
        return cls(
            str(name),
            _decode(grp[Datasets.LABELS]),
            np.array(grp[Datasets.VALUES]),
        )


class ScoreTable:
    """Permutation scores, one row per label and one column per permutation.

    The table may hold more rows than a given normalization needs; rows are
    always looked up by label. `annot` is opaque metadata carried through
    normalization untouched.
    """

    def __init__(
        self: ScoreTable,
        name: str,
        labels: list[str],
        values: Any,
        columns: Union[list[str], None] = None,
        annot: Union[dict, None] = None,
    ) -> None:

        values = as_float(values)
        labels = list(labels)

        if values.ndim != 2:
            raise InvalidArgument(
                f"The values of table {name!r} must be 2-D, got shape {values.shape}."
            )
        if len(labels) != values.shape[0]:
            raise InvalidArgument(
                f"Table {name!r} has {len(labels)} labels but {values.shape[0]} rows."
            )

        if columns is None:
            columns = [str(ix) for ix in range(values.shape[1])]
        columns = list(columns)
        if len(columns) != values.shape[1]:
            raise InvalidArgument(
                f"Table {name!r} has {len(columns)} column names but {values.shape[1]} columns."
            )

        self.name = name
        self.labels = labels
        self.values = values
        self.columns = columns
        self.annot = annot if annot is not None else {}
        self._index = _check_labels(labels, f"table {name!r}")

    def __len__(self: ScoreTable) -> int:
        return len(self.labels)

    def __contains__(self: ScoreTable, label: str) -> bool:
        return label in self._index

    def __repr__(self: ScoreTable) -> str:
        return (
            f"ScoreTable(name={self.name!r}, rows={self.values.shape[0]}, "
            f"columns={self.values.shape[1]})"
        )

    @property
    def shape(self: ScoreTable) -> tuple[int, int]:
        return self.values.shape

    def index(
        self: ScoreTable,
        label: str,
    ) -> int:

        if label not in self._index:
            raise MissingRow(label, self.name)
        return self._index[label]

    def row(
        self: ScoreTable,
        label: str,
    ) -> np.ndarray:

        return self.values[self.index(label)]

    def save(
        self: ScoreTable,
        group: str,
        file: str,
    ) -> None:

        _check_annot(self.annot, self.name)

        with h5py.File(file, "a") as f:
            grp = _replace_group(f, group)
            grp.create_dataset(Datasets.LABELS, data=_encode(self.labels))
            grp.create_dataset(Datasets.COLUMNS, data=_encode(self.columns))
            grp.create_dataset(Datasets.VALUES, data=self.values)
            grp.attrs[Datasets.NAME] = self.name
            annot = grp.create_group(Datasets.ANNOT)
            for key, value in self.annot.items():
                annot.attrs[key] = value

    @classmethod
    def load(
        cls,
        group: str,
        file: h5py.File,
    ) -> ScoreTable:
        """Load a ScoreTable from a group of an open HDF5 file."""

        grp = _get_group(file, group)
        name = grp.attrs.get(Datasets.NAME, group)
        columns = _decode(grp[Datasets.COLUMNS]) if Datasets.COLUMNS in grp else None
        annot = dict(grp[Datasets.ANNOT].attrs) if Datasets.ANNOT in grp else {}

        return cls(
            str(name),
            _decode(grp[Datasets.LABELS]),
            np.array(grp[Datasets.VALUES]),
            columns,
            annot,
        )


@dataclass(frozen=True)
class NormalizationOutcome:
    """Normalized real scores and the matching normalized permutation table.

    Position `r` of `real` and row `r` of `table` refer to the same label.
    """

    real: LabeledScoreVector
    table: ScoreTable

    def __len__(self) -> int:
        return len(self.real)

    def save(
        self,
        group: str,
        file: str,
    ) -> None:

        # Nothing is written unless the whole outcome can be stored
        _check_annot(self.table.annot, self.table.name)

        prefix = group + "/" if group else ""
        self.real.save(prefix + "real", file)
        self.table.save(prefix + "rnd", file)
