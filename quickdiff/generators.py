"""Input generators: graph families sized by a target edge count, and value arrays.

The three graph families only draw randomness from :func:`quickdiff.hashing.mix`,
so a family plus a target size plus a seed always yields the same edge list.
The ``random.Random`` passed to :func:`generate_edgelist` is used only to pick
the family.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Tuple

from .graph import Edge, EdgeList
from .hashing import MASK64, mix

logger = logging.getLogger(__name__)

DEFAULT_DIM = 10
DEFAULT_DEGREE = 8
MIN_ROWS = 2
# Self-loop re-rolls per edge before falling back to a derived target.
MAX_REROLLS = 64
_WIDEN_MODULUS = 1000003
_WIDEN_THRESHOLD = 500001
_MAX_POW = 64


def _check_target(target_edge_count: int) -> None:
    if target_edge_count < 1:
        raise ValueError(f"target_edge_count must be positive, got {target_edge_count}")


def random_edgelist(dim: int, degree: int, row_count: int, *, seed: int = 0) -> EdgeList:
    """``degree`` out-edges for each of ``row_count`` rows, targets picked by hashing.

    With ``dim == 0`` the target is uniform over all rows. Otherwise it lands in
    a window after the source of width ``2**pow``, where ``pow`` grows by ``dim``
    with probability one half at each step. Edges favour nearby rows.
    """

    if degree < 1:
        raise ValueError(f"degree must be at least 1, got {degree}")
    if row_count < MIN_ROWS:
        raise ValueError(f"row_count must be at least {MIN_ROWS}, got {row_count}")

    nb_edges = degree * row_count
    edges: EdgeList = []
    for k in range(nb_edges):
        source = k // degree
        h = (seed * nb_edges + k) & MASK64
        pow_ = dim + 2
        target = source
        for _ in range(MAX_REROLLS):
            if dim == 0:
                h = mix(h)
                target = h % row_count
            else:
                h = mix(h)
                while pow_ < _MAX_POW and h % _WIDEN_MODULUS < _WIDEN_THRESHOLD:
                    pow_ += dim
                    h = mix(h)
                h = mix(h)
                target = (source + h % (1 << min(pow_, _MAX_POW))) % row_count
            if target != source:
                break
        else:
            target = (source + 1 + h % (row_count - 1)) % row_count
        edges.append(Edge(source, target))
    return edges


def random_sizing(target_edge_count: int) -> Tuple[int, int]:
    """Clamped ``(degree, row_count)`` for a target size."""

    _check_target(target_edge_count)
    degree = max(1, min(DEFAULT_DEGREE, target_edge_count))
    return degree, max(MIN_ROWS, degree)


def gen_random_edgelist(target_edge_count: int, *, seed: int = 0) -> EdgeList:
    degree, row_count = random_sizing(target_edge_count)
    return random_edgelist(DEFAULT_DIM, degree, row_count, seed=seed)


def balanced_tree_edgelist(branching_factor: int, height: int) -> EdgeList:
    if branching_factor < 1:
        raise ValueError(f"branching_factor must be at least 1, got {branching_factor}")
    if height < 0:
        raise ValueError(f"height must be non-negative, got {height}")

    edges: EdgeList = []
    frontier: List[int] = [0]
    fresh = 1
    for _ in range(height):
        next_frontier: List[int] = []
        for vertex in frontier:
            for _ in range(branching_factor):
                child = fresh
                fresh += 1
                next_frontier.append(child)
                edges.append(Edge(vertex, child))
        frontier = next_frontier
    return edges


def log2_up(n: int) -> int:
    """Smallest ``k`` with ``2**k >= n``."""

    if n < 1:
        raise ValueError(f"log2_up needs a positive argument, got {n}")
    return (n - 1).bit_length()


def tree_sizing(target_edge_count: int) -> Tuple[int, int]:
    _check_target(target_edge_count)
    return 2, max(1, log2_up(target_edge_count) - 1)


def gen_balanced_tree_edgelist(target_edge_count: int, *, seed: int = 0) -> EdgeList:
    branching_factor, height = tree_sizing(target_edge_count)
    return balanced_tree_edgelist(branching_factor, height)


def lattice_edgelist(side: int) -> EdgeList:
    """``side**3`` torus; vertex ``l`` owns edges ``3l``, ``3l+1``, ``3l+2``."""

    if side < 2:
        raise ValueError(f"lattice side must be at least 2, got {side}")

    n = side

    def loc3d(x: int, y: int, z: int) -> int:
        return (x % n) * n * n + (y % n) * n + (z % n)

    edges: EdgeList = [Edge(0, 0)] * (3 * n * n * n)
    for i in range(n):
        for j in range(n):
            for k in range(n):
                vertex = loc3d(i, j, k)
                edges[3 * vertex] = Edge(vertex, loc3d(i + 1, j, k))
                edges[3 * vertex + 1] = Edge(vertex, loc3d(i, j + 1, k))
                edges[3 * vertex + 2] = Edge(vertex, loc3d(i, j, k + 1))
    return edges


def lattice_sizing(target_edge_count: int) -> int:
    """Largest side ``n`` with ``3 * n**3 <= target``, clamped to at least 2."""

    _check_target(target_edge_count)
    n = int(round((target_edge_count / 3.0) ** (1.0 / 3.0)))
    while n > 0 and 3 * n ** 3 > target_edge_count:
        n -= 1
    while 3 * (n + 1) ** 3 <= target_edge_count:
        n += 1
    return max(2, n)


def gen_lattice_edgelist(target_edge_count: int, *, seed: int = 0) -> EdgeList:
    return lattice_edgelist(lattice_sizing(target_edge_count))


GraphGenerator = Callable[..., EdgeList]

GRAPH_FAMILIES: Dict[str, GraphGenerator] = {
    "random": gen_random_edgelist,
    "lattice": gen_lattice_edgelist,
    "tree": gen_balanced_tree_edgelist,
}


def generate_edgelist(target_edge_count: int, rng: random.Random, *, seed: int = 0) -> EdgeList:
    """Pick one graph family uniformly and build a graph of about the target size."""

    family = rng.choice(sorted(GRAPH_FAMILIES))
    edges = GRAPH_FAMILIES[family](target_edge_count, seed=seed)
    logger.debug(
        "generated %s graph: target=%d edges=%d", family, target_edge_count, len(edges)
    )
    return edges


def generate_values(target_size: int, rng: random.Random) -> List[int]:
    """Array of up to ``target_size`` integers drawn from ``[-size, size]``."""

    length = rng.randint(0, max(0, target_size))
    return [rng.randint(-target_size, target_size) for _ in range(length)]


__all__ = [
    "DEFAULT_DEGREE",
    "DEFAULT_DIM",
    "GRAPH_FAMILIES",
    "MAX_REROLLS",
    "balanced_tree_edgelist",
    "gen_balanced_tree_edgelist",
    "gen_lattice_edgelist",
    "gen_random_edgelist",
    "generate_edgelist",
    "generate_values",
    "lattice_edgelist",
    "lattice_sizing",
    "log2_up",
    "random_edgelist",
    "random_sizing",
    "tree_sizing",
]
