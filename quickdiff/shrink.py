"""Shrink candidates for counterexamples, and the greedy reduction loop.

Every candidate is derived by dropping elements, moving a value toward zero,
or renumbering vertices injectively. None of these can create a self-loop in
an edge list that had none.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from .graph import Edge, EdgeList

T = TypeVar("T")


def _removals(items: Sequence[T]) -> Iterator[List[T]]:
    """Copies of ``items`` with one contiguous chunk dropped, biggest chunks first."""

    n = len(items)
    chunk = n // 2
    while chunk >= 1:
        for start in range(0, n, chunk):
            yield list(items[:start]) + list(items[start + chunk :])
        chunk //= 2


def _toward_zero(value: int) -> Iterator[int]:
    yield 0
    half = int(value / 2)
    if half not in (0, value):
        yield half
    step = value - 1 if value > 0 else value + 1
    if step not in (0, half):
        yield step


def shrink_values(xs: Sequence[int]) -> Iterator[List[int]]:
    if not xs:
        return
    yield []
    yield from _removals(xs)
    for idx, value in enumerate(xs):
        if value == 0:
            continue
        for smaller in _toward_zero(value):
            yield list(xs[:idx]) + [smaller] + list(xs[idx + 1 :])


def compact_vertices(edges: Sequence[Edge]) -> EdgeList:
    """Renumber vertices densely in first-seen order, keeping vertex 0 fixed."""

    mapping: Dict[int, int] = {0: 0}
    for source, target in edges:
        for vertex in (source, target):
            if vertex not in mapping:
                mapping[vertex] = len(mapping)
    return [Edge(mapping[source], mapping[target]) for source, target in edges]


def shrink_edges(edges: Sequence[Edge]) -> Iterator[EdgeList]:
    if not edges:
        return
    yield []
    yield from _removals(edges)
    compacted = compact_vertices(edges)
    if compacted != list(edges):
        yield compacted


def shrink_counterexample(
    value: T,
    still_fails: Callable[[T], bool],
    candidates: Callable[[T], Iterable[T]],
    max_steps: int,
) -> Tuple[T, int]:
    """Greedily replace ``value`` by the first candidate that still fails.

    ``max_steps`` bounds the number of property evaluations. Returns the
    smallest failing value found and how many reductions were accepted.
    """

    current = value
    accepted = 0
    evaluations = 0
    progress = True
    while progress and evaluations < max_steps:
        progress = False
        for candidate in candidates(current):
            if evaluations >= max_steps:
                break
            evaluations += 1
            if still_fails(candidate):
                current = candidate
                accepted += 1
                progress = True
                break
    return current, accepted


__all__ = [
    "compact_vertices",
    "shrink_counterexample",
    "shrink_edges",
    "shrink_values",
]
