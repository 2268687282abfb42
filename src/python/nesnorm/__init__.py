from importlib.metadata import version as _get_version

# Core data types
from .data import (
    LabeledScoreVector,
    NormalizationOutcome,
    ScoreTable,
)
from .config import Opts
from .errors import InvalidArgument, MissingRow, UnknownStrategy

# Core functions
from .norms import (
    NormResult,
    NormScheme,
    PartitionStats,
    get_norm,
    list_names,
    normalize,
)
from .output import stats, title

__version__ = _get_version("nesnorm")

__all__ = [
    "__version__",
    "LabeledScoreVector",
    "NormalizationOutcome",
    "ScoreTable",
    "Opts",
    "InvalidArgument",
    "MissingRow",
    "UnknownStrategy",
    "NormResult",
    "NormScheme",
    "PartitionStats",
    "get_norm",
    "list_names",
    "normalize",
    "stats",
    "title",
]
