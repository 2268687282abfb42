"""
Pytest configuration and fixtures for nesnorm tests.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add tests/python to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from helpers import make_table, make_vector  # noqa: E402

import nesnorm  # noqa: E402


@pytest.fixture
def real() -> nesnorm.LabeledScoreVector:
    """Real scores for three gene sets, one of them negative."""
    return make_vector()


@pytest.fixture
def table() -> nesnorm.ScoreTable:
    """Permutation scores for the gene sets of `real`, plus one unused row."""
    return make_table()
