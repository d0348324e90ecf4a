"""Differential property checks of candidate algorithms against trusted ones."""

from .config import CheckConfig, load_check_config
from .engine import Failure, Success, TrialEngine, TrialOutcome, format_outcome
from .errors import ConfigurationError, QuickDiffError
from .graph import AdjacencyGraph, Edge, EdgeList, from_dot, to_dot
from .hashing import mix
from .oracle import same_sequence
from .property import DifferentialProperty, bfs_property, sort_property
from .registry import CheckKind, resolve
from .slots import SlotArray

__all__ = [
    "AdjacencyGraph",
    "CheckConfig",
    "CheckKind",
    "ConfigurationError",
    "DifferentialProperty",
    "Edge",
    "EdgeList",
    "Failure",
    "QuickDiffError",
    "SlotArray",
    "Success",
    "TrialEngine",
    "TrialOutcome",
    "bfs_property",
    "format_outcome",
    "from_dot",
    "load_check_config",
    "mix",
    "resolve",
    "same_sequence",
    "sort_property",
    "to_dot",
]
