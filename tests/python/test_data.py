"""
Tests for the score containers and their HDF5 storage.
"""
from __future__ import annotations

from pathlib import Path

import h5py
import numpy as np
import pytest

import nesnorm
from helpers import ANNOT, LABELS, REAL_VALUES, TABLE_LABELS, make_table, make_vector


class TestLabeledScoreVector:
    """Validation and lookups of real-score vectors."""

    def test_lookup(self, real):
        """Scores are found by label."""
        assert real.score("REACTOME_APOPTOSIS") == pytest.approx(-0.6)
        assert "KEGG_GLYCOLYSIS" in real
        assert "UNUSED_SET" not in real

    def test_iteration(self, real):
        """Iteration yields (label, score) pairs in order."""
        pairs = list(real)
        assert [label for label, _ in pairs] == LABELS
        np.testing.assert_allclose([value for _, value in pairs], REAL_VALUES)

    def test_missing_label(self, real):
        """Looking up an absent label raises a plain KeyError."""
        with pytest.raises(KeyError) as info:
            real.score("UNUSED_SET")
        assert not isinstance(info.value, nesnorm.MissingRow)

    def test_duplicate_labels(self):
        """Labels must be unique."""
        with pytest.raises(nesnorm.InvalidArgument):
            make_vector(np.array([1.0, 2.0]), ["A", "A"])

    def test_length_mismatch(self):
        """Every label needs exactly one value."""
        with pytest.raises(nesnorm.InvalidArgument):
            make_vector(np.array([1.0, 2.0]), ["A"])

    def test_not_1d(self):
        """Values must form a vector."""
        with pytest.raises(nesnorm.InvalidArgument):
            make_vector(np.ones((2, 2)), ["A", "B"])


class TestScoreTable:
    """Validation and lookups of permutation tables."""

    def test_row(self, table):
        """Rows are found by label, not position."""
        np.testing.assert_array_equal(
            table.row("KEGG_GLYCOLYSIS"),
            [1.0, 2.0, 3.0, -1.0, -2.0],
        )
        assert table.index("HALLMARK_HYPOXIA") == 0

    def test_missing_row(self, table):
        """An absent label raises MissingRow naming the table."""
        with pytest.raises(nesnorm.MissingRow) as info:
            table.row("NOT_A_SET")
        assert info.value.table == "rnd_es"
        assert "NOT_A_SET" in str(info.value)

    def test_default_columns(self):
        """Columns are numbered when no identifiers are given."""
        table = nesnorm.ScoreTable("t", ["A"], np.ones((1, 3)))
        assert table.columns == ["0", "1", "2"]
        assert table.annot == {}

    def test_column_mismatch(self):
        """One identifier per column."""
        with pytest.raises(nesnorm.InvalidArgument):
            nesnorm.ScoreTable("t", ["A"], np.ones((1, 3)), ["x", "y"])

    def test_row_mismatch(self):
        """One label per row."""
        with pytest.raises(nesnorm.InvalidArgument):
            nesnorm.ScoreTable("t", ["A", "B"], np.ones((1, 3)))

    def test_not_2d(self):
        """Values must form a matrix."""
        with pytest.raises(nesnorm.InvalidArgument):
            nesnorm.ScoreTable("t", ["A", "B"], np.ones(2))

    def test_duplicate_labels(self):
        """Row labels must be unique."""
        with pytest.raises(nesnorm.InvalidArgument):
            nesnorm.ScoreTable("t", ["A", "A"], np.ones((2, 3)))


class TestStorage:
    """Writing containers to HDF5 and reading them back."""

    def test_vector(self, real, tmp_path: Path):
        """Name, labels and values are stored."""
        path = tmp_path / "scores.h5"
        real.save("real", str(path))

        with h5py.File(path, "r") as f:
            loaded = nesnorm.LabeledScoreVector.load("real", f)

        assert loaded.name == real.name
        assert loaded.labels == real.labels
        np.testing.assert_array_equal(loaded.values, real.values)

    def test_table(self, table, tmp_path: Path):
        """Labels, columns, values and annotation are stored."""
        path = tmp_path / "scores.h5"
        table.save("perm/rnd", str(path))

        with h5py.File(path, "r") as f:
            loaded = nesnorm.ScoreTable.load("perm/rnd", f)

        assert loaded.name == table.name
        assert loaded.labels == TABLE_LABELS
        assert loaded.columns == table.columns
        assert loaded.annot == ANNOT
        np.testing.assert_array_equal(loaded.values, table.values)

    def test_overwrite_group(self, real, tmp_path: Path):
        """Saving to an existing group replaces it."""
        path = tmp_path / "scores.h5"
        real.save("real", str(path))
        make_vector(np.array([5.0]), ["ONLY"], name="other").save("real", str(path))

        with h5py.File(path, "r") as f:
            loaded = nesnorm.LabeledScoreVector.load("real", f)

        assert loaded.name == "other"
        assert loaded.labels == ["ONLY"]

    def test_missing_group(self, tmp_path: Path):
        """Loading a group that does not exist fails."""
        path = tmp_path / "scores.h5"
        make_table().save("rnd", str(path))

        with h5py.File(path, "r") as f:
            with pytest.raises(KeyError):
                nesnorm.ScoreTable.load("missing", f)

    def test_outcome(self, real, table, tmp_path: Path):
        """An outcome is stored as a real and an rnd group."""
        path = tmp_path / "out.h5"
        outcome = nesnorm.normalize("meandiv", real, table)
        outcome.save("run", str(path))

        with h5py.File(path, "r") as f:
            assert "run/real" in f
            assert "run/rnd" in f
            loaded = nesnorm.ScoreTable.load("run/rnd", f)

        assert loaded.labels == LABELS
        np.testing.assert_allclose(loaded.values, outcome.table.values)

    @pytest.mark.parametrize("annot", [{"meta": {"x": 1}}, {"genes": ["A", "B"]}, {1: "one"}])
    def test_unstorable_annot(self, annot, tmp_path: Path):
        """An annotation HDF5 cannot hold is rejected before the file is touched."""
        path = tmp_path / "scores.h5"
        table = nesnorm.ScoreTable("t", ["A"], np.ones((1, 2)), annot=annot)

        with pytest.raises(nesnorm.InvalidArgument):
            table.save("rnd", str(path))
        assert not path.exists()

    def test_unstorable_outcome(self, real, tmp_path: Path):
        """A failed outcome save leaves neither group behind."""
        path = tmp_path / "out.h5"
        table = make_table()
        table.annot["meta"] = {"x": 1}
        outcome = nesnorm.normalize("meandiv", real, table)

        with pytest.raises(nesnorm.InvalidArgument):
            outcome.save("", str(path))
        assert not path.exists()

    def test_storable_annot(self, tmp_path: Path):
        """Strings, numbers, flags and numeric arrays are stored."""
        path = tmp_path / "scores.h5"
        annot = {"chip": "HG_U133A", "nperm": 2, "weighted": True, "seeds": np.arange(3)}
        nesnorm.ScoreTable("t", ["A"], np.ones((1, 2)), annot=annot).save("rnd", str(path))

        with h5py.File(path, "r") as f:
            loaded = nesnorm.ScoreTable.load("rnd", f)

        assert loaded.annot["chip"] == "HG_U133A"
        assert loaded.annot["nperm"] == 2
        assert bool(loaded.annot["weighted"])
        np.testing.assert_array_equal(loaded.annot["seeds"], [0, 1, 2])
