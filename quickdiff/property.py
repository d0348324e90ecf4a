"""Differential properties: a trusted and a candidate algorithm over one input.

A property owns everything needed to check one operation: how to generate an
input for a given size, how to derive the structure both algorithms consume,
how to shrink and render a counterexample. It keeps no state between trials.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

from . import algorithms
from .generators import generate_edgelist, generate_values
from .graph import AdjacencyGraph, EdgeList, to_dot
from .oracle import describe_mismatch, same_sequence
from .shrink import shrink_edges, shrink_values
from .slots import SlotArray

logger = logging.getLogger(__name__)

I = TypeVar("I")
D = TypeVar("D")

BFS_SOURCE = 0

Algorithm = Callable[[Any], Any]
InputGenerator = Callable[[int, random.Random, int], I]


@dataclass(frozen=True)
class Verdict:
    holds: bool
    detail: str = ""


def observe(result: object) -> List[object]:
    """Turn an algorithm's return value into a plain result sequence.

    Slot arrays are snapshotted; the caller guarantees the writers are done.
    """

    if isinstance(result, SlotArray):
        return result.load_all()
    if isinstance(result, (str, bytes)) or not isinstance(result, Sequence):
        raise TypeError(
            f"expected a result sequence, got {type(result).__name__}"
        )
    return list(result)


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class DifferentialProperty(Generic[I, D]):
    name: str
    trusted: Algorithm
    candidate: Algorithm
    generate: InputGenerator
    prepare: Callable[[I], D] = _identity
    shrink: Optional[Callable[[I], Iterable[I]]] = None
    render: Callable[[I], str] = field(default=repr)

    def evaluate(self, value: I) -> Verdict:
        derived = self.prepare(value)
        expected = observe(self.trusted(derived))
        try:
            actual = observe(self.candidate(derived))
        except Exception as exc:
            logger.debug("%s: candidate raised", self.name, exc_info=True)
            return Verdict(False, f"candidate raised {type(exc).__name__}: {exc}")
        if same_sequence(expected, actual):
            return Verdict(True)
        return Verdict(False, describe_mismatch(expected, actual))

    def holds_for(self, value: I) -> bool:
        return self.evaluate(value).holds


def _render_values(xs: Sequence[int]) -> str:
    return f"[{', '.join(str(x) for x in xs)}]"


def sort_property(
    candidate: Algorithm,
    *,
    trusted: Algorithm = algorithms.seqsort,
    name: str = "sort",
) -> DifferentialProperty[List[int], tuple]:
    return DifferentialProperty(
        name=name,
        trusted=trusted,
        candidate=candidate,
        generate=lambda size, rng, seed: generate_values(size, rng),
        prepare=tuple,
        shrink=shrink_values,
        render=_render_values,
    )


def bfs_property(
    candidate: Callable[[AdjacencyGraph, int], Any],
    *,
    trusted: Callable[[AdjacencyGraph, int], Any] = algorithms.bfs_seq,
    name: str = "bfs",
) -> DifferentialProperty[EdgeList, AdjacencyGraph]:
    return DifferentialProperty(
        name=name,
        trusted=lambda graph: trusted(graph, BFS_SOURCE),
        candidate=lambda graph: candidate(graph, BFS_SOURCE),
        generate=lambda size, rng, seed: generate_edgelist(size, rng, seed=seed),
        prepare=AdjacencyGraph.from_edges,
        shrink=shrink_edges,
        render=to_dot,
    )


__all__ = [
    "BFS_SOURCE",
    "DifferentialProperty",
    "Verdict",
    "bfs_property",
    "observe",
    "sort_property",
]
