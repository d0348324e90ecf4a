"""Closed table of runnable checks, keyed by check kind and algorithm name."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Tuple

from . import algorithms
from .errors import ConfigurationError
from .property import DifferentialProperty, bfs_property, sort_property


class CheckKind(Enum):
    SORT = "sort"
    GRAPH = "graph"

    @classmethod
    def parse(cls, raw: str) -> "CheckKind":
        try:
            return cls(raw.strip().lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(
                f"Unknown check kind '{raw}' (expected one of: {choices})"
            ) from None


PropertyFactory = Callable[[], DifferentialProperty]

CHECKS: Dict[Tuple[CheckKind, str], PropertyFactory] = {
    (CheckKind.SORT, "mergesort"): lambda: sort_property(
        algorithms.mergesort, name="mergesort"
    ),
    (CheckKind.SORT, "quicksort"): lambda: sort_property(
        algorithms.quicksort, name="quicksort"
    ),
    (CheckKind.GRAPH, "bfs"): lambda: bfs_property(algorithms.bfs_par, name="bfs"),
}


def algorithms_for(kind: CheckKind) -> List[str]:
    return sorted(name for check_kind, name in CHECKS if check_kind is kind)


def resolve(kind: str, algo: str) -> DifferentialProperty:
    """Build the property for ``kind``/``algo`` or raise ``ConfigurationError``."""

    check_kind = CheckKind.parse(kind)
    key = (check_kind, algo.strip().lower())
    factory = CHECKS.get(key)
    if factory is None:
        choices = ", ".join(algorithms_for(check_kind))
        raise ConfigurationError(
            f"Unknown {check_kind.value} algorithm '{algo}' (expected one of: {choices})"
        )
    return factory()


__all__ = ["CHECKS", "CheckKind", "algorithms_for", "resolve"]
