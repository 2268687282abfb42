"""Output formatting and statistics display.

This module provides formatting utilities for CLI output, including
ANSI terminal formatting and statistics display for normalized scores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, SupportsFloat

import numpy as np

if TYPE_CHECKING:
    from .data import NormalizationOutcome

__all__ = [
    "BOLD",
    "RESET",
    "div",
    "space",
    "format_s",
    "format_i",
    "format_f",
    "title",
    "subtitle",
    "summarize",
    "stats",
]


# ANSI escape codes for terminal formatting

BOLD = "\033[1m"
RESET = "\033[0m"

# Formatting constants

SPACE = " "
DIV = "─"


def div() -> str:
    """Return a divider line for CLI output."""
    return SPACE * 6 + DIV * 35


def space(n: int) -> str:
    """Return n spaces."""
    return SPACE * max(n, 1)


def format_s(seq: str, offset: int = 8) -> str:
    """Format a string with offset spacing."""
    return space(offset) + seq + "\n"


def format_i(seq: str, value: SupportsFloat, offset: int = 8, width: int = 40) -> str:
    """Format an integer value with label and alignment."""
    v = float(value)
    gap = width - len(f"{int(v):,}") - len(seq + ":") - offset
    return space(offset) + seq + ":" + space(gap) + f"{int(v):,}" + "\n"


def format_f(
    seq: str, value: SupportsFloat, offset: int = 8, width: int = 40, prec: int = 2
) -> str:
    """Format a float value with label, alignment, and precision."""
    v = float(value)
    gap = width - len(f"{v:.{prec}f}") - len(seq + ":") - offset
    return space(offset) + seq + ":" + space(gap) + f"{v:.{prec}f}" + "\n"


def title(name: str, version: str) -> str:
    """Format a title banner with name and version."""
    return space(8) + f"{name} version {version}\n" + div()


def subtitle(name: str) -> str:
    """Format a subtitle for statistics output."""
    if name:
        return space(8) + f"{BOLD}Statistics for {name}:{RESET}"
    else:
        return space(8) + f"{BOLD}Statistics:{RESET}"


def _mean_or_nan(values: np.ndarray) -> float:
    return float(values.mean()) if values.size else float("nan")


def summarize(outcome: NormalizationOutcome) -> dict[str, float]:
    """Summary figures of a normalization outcome.

    Non-finite normalized real scores are counted but left out of the
    means, as downstream significance estimation excludes them.
    """

    real = outcome.real.values
    rnd = outcome.table.values
    finite = real[np.isfinite(real)]

    return {
        "items": len(outcome),
        "permutations": rnd.shape[1],
        "nan": int(np.isnan(real).sum()),
        "inf": int(np.isinf(real).sum()),
        "rnd_nonfinite": int((~np.isfinite(rnd)).sum()),
        "positive": int((finite > 0).sum()),
        "mean_pos": _mean_or_nan(finite[finite > 0]),
        "mean_neg": _mean_or_nan(finite[finite <= 0]),
    }


def stats(outcome: NormalizationOutcome) -> None:
    """Print statistics for a normalization outcome."""

    s = summarize(outcome)

    print(format_i("Items", s["items"], 8), end="")
    print(format_i("Permutations", s["permutations"], 8), end="")

    print(format_s(f"{BOLD}Normalized real scores:{RESET}", 8), end="")
    print(format_i("Positive", s["positive"], 10), end="")
    print(format_f("Mean positive", s["mean_pos"], 10, prec=3), end="")
    print(format_f("Mean negative", s["mean_neg"], 10, prec=3), end="")
    print(format_i("NaN", s["nan"], 10), end="")
    print(format_i("Infinite", s["inf"], 10), end="")

    print(format_s(f"{BOLD}Normalized permutation scores:{RESET}", 8), end="")
    print(format_i("Non-finite", s["rnd_nonfinite"], 10), end="")

    print(div())
    print()
