"""Sample trusted and candidate algorithms wired into the command table.

The harness treats these as black boxes with the signatures below; any other
implementation with the same shape can be checked through
:mod:`quickdiff.property`.
"""

from __future__ import annotations

from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .graph import AdjacencyGraph
from .slots import SlotArray

UNVISITED = -1
DEFAULT_BFS_WORKERS = 4
DEFAULT_BFS_GRAIN = 16


def seqsort(xs: Sequence[int]) -> List[int]:
    return sorted(xs)


def _merge(left: List[int], right: List[int]) -> List[int]:
    out: List[int] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if right[j] < left[i]:
            out.append(right[j])
            j += 1
        else:
            out.append(left[i])
            i += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


def mergesort(xs: Sequence[int]) -> List[int]:
    if len(xs) <= 1:
        return list(xs)
    mid = len(xs) // 2
    return _merge(mergesort(xs[:mid]), mergesort(xs[mid:]))


def quicksort(xs: Sequence[int]) -> List[int]:
    if len(xs) <= 1:
        return list(xs)
    pivot = xs[len(xs) // 2]
    less = [x for x in xs if x < pivot]
    equal = [x for x in xs if x == pivot]
    greater = [x for x in xs if x > pivot]
    return quicksort(less) + equal + quicksort(greater)


def bfs_seq(graph: AdjacencyGraph, source: int) -> List[int]:
    """BFS distance of every vertex from ``source``; ``UNVISITED`` if unreachable."""

    dists = [UNVISITED] * graph.nb_vertices
    dists[source] = 0
    queue = deque([source])
    while queue:
        vertex = queue.popleft()
        for neighbour in graph.out_edges(vertex):
            if dists[neighbour] == UNVISITED:
                dists[neighbour] = dists[vertex] + 1
                queue.append(neighbour)
    return dists


def _expand(
    graph: AdjacencyGraph, chunk: Sequence[int], dists: SlotArray[int], depth: int
) -> List[int]:
    claimed: List[int] = []
    for vertex in chunk:
        for neighbour in graph.out_edges(vertex):
            if dists.try_settle(neighbour, depth):
                claimed.append(neighbour)
    return claimed


def bfs_par(
    graph: AdjacencyGraph,
    source: int,
    *,
    max_workers: Optional[int] = DEFAULT_BFS_WORKERS,
    grain: int = DEFAULT_BFS_GRAIN,
) -> SlotArray[int]:
    """Level-synchronous BFS; each frontier is split into chunks across a pool.

    Workers claim a vertex by settling its slot, so every vertex is written once
    with its distance. The returned slots are complete once this call returns.
    """

    dists: SlotArray[int] = SlotArray(graph.nb_vertices, UNVISITED)
    dists.settle(source, 0)
    frontier = [source]
    depth = 0
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        while frontier:
            depth += 1
            futures = [
                pool.submit(_expand, graph, frontier[start : start + grain], dists, depth)
                for start in range(0, len(frontier), grain)
            ]
            frontier = [vertex for future in futures for vertex in future.result()]
    return dists


__all__ = [
    "UNVISITED",
    "bfs_par",
    "bfs_seq",
    "mergesort",
    "quicksort",
    "seqsort",
]
