"""Edge lists, adjacency graphs and their DOT rendering.

Rendered graphs use a small subset of the Graphviz ``digraph`` grammar::

    digraph {
      0;
      1;
      0 -> 1;
    }

Every vertex from 0 to ``nb_vertices - 1`` is listed as a node statement, then
one edge statement per edge in edge-list order. :func:`from_dot` reads the same
subset back, so a rendered counterexample reproduces the failing graph with
identical vertex ids and edge order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from .errors import DotParseError


class Edge(NamedTuple):
    source: int
    target: int


EdgeList = List[Edge]


def mk_edge(source: int, target: int) -> Edge:
    return Edge(int(source), int(target))


def vertex_count(edges: Iterable[Edge]) -> int:
    """Number of vertices implied by ``edges``; at least 1 so vertex 0 exists."""

    highest = -1
    for edge in edges:
        highest = max(highest, edge.source, edge.target)
    return max(highest + 1, 1)


def has_self_loop(edges: Iterable[Edge]) -> bool:
    return any(edge.source == edge.target for edge in edges)


@dataclass(frozen=True)
class AdjacencyGraph:
    """Read-only out-neighbour lists built from an edge list."""

    neighbours: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_edges(cls, edges: Sequence[Edge]) -> "AdjacencyGraph":
        buckets: List[List[int]] = [[] for _ in range(vertex_count(edges))]
        for source, target in edges:
            buckets[source].append(target)
        return cls(neighbours=tuple(tuple(bucket) for bucket in buckets))

    @property
    def nb_vertices(self) -> int:
        return len(self.neighbours)

    @property
    def nb_edges(self) -> int:
        return sum(len(bucket) for bucket in self.neighbours)

    def out_edges(self, vertex: int) -> Tuple[int, ...]:
        return self.neighbours[vertex]

    def out_degree(self, vertex: int) -> int:
        return len(self.neighbours[vertex])


def to_dot(edges: Sequence[Edge], *, name: str = "") -> str:
    header = f"digraph {name} {{" if name else "digraph {"
    lines = [header]
    if edges:
        lines.extend(f"  {vertex};" for vertex in range(vertex_count(edges)))
    lines.extend(f"  {source} -> {target};" for source, target in edges)
    lines.append("}")
    return "\n".join(lines) + "\n"


_HEADER_RE = re.compile(r"^digraph(?:\s+\w+)?\s*\{$")
_NODE_RE = re.compile(r"^(\d+)\s*;?$")
_EDGE_RE = re.compile(r"^(\d+)\s*->\s*(\d+)\s*;?$")


def from_dot(text: str) -> EdgeList:
    """Parse the output of :func:`to_dot` back into an edge list."""

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines or not _HEADER_RE.match(lines[0]):
        raise DotParseError("Expected 'digraph {' header")
    if lines[-1] != "}":
        raise DotParseError("Missing closing '}'")

    edges: EdgeList = []
    for lineno, line in enumerate(lines[1:-1], start=2):
        match = _EDGE_RE.match(line)
        if match:
            edges.append(mk_edge(int(match.group(1)), int(match.group(2))))
            continue
        if _NODE_RE.match(line):
            continue
        raise DotParseError(f"Unrecognised statement on line {lineno}: {line!r}")
    return edges


__all__ = [
    "AdjacencyGraph",
    "Edge",
    "EdgeList",
    "from_dot",
    "has_self_loop",
    "mk_edge",
    "to_dot",
    "vertex_count",
]
