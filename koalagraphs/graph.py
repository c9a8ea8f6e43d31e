"""Graphs with stable node identifiers, graph transformations and the algorithm base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

DEFAULT_WEIGHT = 1.0


class AlgorithmNotRunError(RuntimeError):
    """Raised when the result of an algorithm is requested before it was run."""


class Algorithm(ABC):
    """Base for algorithms that compute their result in run()."""

    def __init__(self) -> None:
        self.has_run = False

    @abstractmethod
    def run(self) -> None:
        """Compute the result."""

    def assure_finished(self) -> None:
        """Raise AlgorithmNotRunError unless run() has completed."""
        if not self.has_run:
            raise AlgorithmNotRunError("run() must be called first")


class Graph:
    """A simple graph whose nodes are the integers 0..n-1.

    Removed nodes keep their identifiers, so the id bound never shrinks and a
    removed node can be restored later. Parallel edges are not allowed.
    """

    def __init__(self, n: int = 0, weighted: bool = False, directed: bool = False) -> None:
        if n < 0:
            raise ValueError("number of nodes must not be negative")
        self._weighted = weighted
        self._directed = directed
        self._out: list[dict[int, float]] = [{} for _ in range(n)]
        self._in: list[dict[int, float]] = [{} for _ in range(n)] if directed else self._out
        self._alive = [True] * n
        self._node_count = n
        self._edge_count = 0

    @property
    def weighted(self) -> bool:
        return self._weighted

    @property
    def directed(self) -> bool:
        return self._directed

    def _require(self, u: int) -> None:
        if not self.has_node(u):
            raise ValueError(f"node {u} does not exist")

    # Nodes

    def add_node(self) -> int:
        """Add a new isolated node and return its identifier."""
        self._out.append({})
        if self._directed:
            self._in.append({})
        self._alive.append(True)
        self._node_count += 1
        return len(self._alive) - 1

    def remove_node(self, u: int) -> None:
        """Remove node u together with all its incident edges."""
        self._require(u)
        for v in list(self._out[u]):
            self.remove_edge(u, v)
        if self._directed:
            for w in list(self._in[u]):
                self.remove_edge(w, u)
        self._alive[u] = False
        self._node_count -= 1

    def restore_node(self, u: int) -> None:
        """Bring back a removed node, without any edges."""
        if not 0 <= u < len(self._alive):
            raise ValueError(f"node {u} was never part of the graph")
        if self._alive[u]:
            raise ValueError(f"node {u} already exists")
        self._alive[u] = True
        self._node_count += 1

    def has_node(self, u: int) -> bool:
        return 0 <= u < len(self._alive) and self._alive[u]

    def __contains__(self, u: object) -> bool:
        return isinstance(u, int) and self.has_node(u)

    def nodes(self) -> Iterator[int]:
        """Iterate over the existing nodes in increasing order."""
        return (u for u, alive in enumerate(self._alive) if alive)

    # Edges

    def add_edge(self, u: int, v: int, w: float = DEFAULT_WEIGHT) -> None:
        """Add the edge u-v (u->v if directed); unweighted graphs ignore w."""
        self._require(u)
        self._require(v)
        if v in self._out[u]:
            raise ValueError(f"edge ({u}, {v}) already exists")
        weight = w if self._weighted else DEFAULT_WEIGHT
        self._out[u][v] = weight
        self._in[v][u] = weight
        self._edge_count += 1

    def remove_edge(self, u: int, v: int) -> None:
        if not self.has_edge(u, v):
            raise ValueError(f"edge ({u}, {v}) does not exist")
        del self._out[u][v]
        self._in[v].pop(u, None)
        self._edge_count -= 1

    def has_edge(self, u: int, v: int) -> bool:
        return self.has_node(u) and self.has_node(v) and v in self._out[u]

    def weight(self, u: int, v: int) -> float:
        """Weight of the edge u-v, or 0 when there is no such edge."""
        if not self.has_node(u):
            return 0.0
        return self._out[u].get(v, 0.0)

    def increase_weight(self, u: int, v: int, w: float) -> None:
        """Add w to the weight of u-v, creating the edge when it is missing."""
        if not self._weighted:
            raise ValueError("cannot change weights of an unweighted graph")
        if self.has_edge(u, v):
            weight = self._out[u][v] + w
            self._out[u][v] = weight
            self._in[v][u] = weight
        else:
            self.add_edge(u, v, w)

    def degree(self, u: int) -> int:
        """Number of (outgoing) neighbours of u."""
        self._require(u)
        return len(self._out[u])

    def neighbors(self, u: int) -> list[int]:
        """(Outgoing) neighbours of u in the order the edges were added."""
        self._require(u)
        return list(self._out[u])

    def in_neighbors(self, u: int) -> list[int]:
        """Nodes with an edge into u; the neighbours for undirected graphs."""
        self._require(u)
        return list(self._in[u])

    def ith_neighbor(self, u: int, i: int) -> int | None:
        """The i-th neighbour of u, or None when u has fewer neighbours."""
        self._require(u)
        if not 0 <= i < len(self._out[u]):
            return None
        for index, v in enumerate(self._out[u]):
            if index == i:
                return v
        return None

    def edges(self) -> list[tuple[int, int]]:
        """All edges; undirected ones once, with the larger endpoint first."""
        return [(u, v) for u, v, _ in self.weighted_edges()]

    def weighted_edges(self) -> list[tuple[int, int, float]]:
        return [
            (u, v, w)
            for u in self.nodes()
            for v, w in self._out[u].items()
            if self._directed or v <= u
        ]

    # Summary

    def number_of_nodes(self) -> int:
        return self._node_count

    def number_of_edges(self) -> int:
        return self._edge_count

    def upper_node_id_bound(self) -> int:
        return len(self._alive)

    def is_empty(self) -> bool:
        return self._node_count == 0

    def total_edge_weight(self) -> float:
        return sum(w for _, _, w in self.weighted_edges())

    def copy(self) -> Graph:
        other = Graph(0, self._weighted, self._directed)
        other._out = [dict(adjacent) for adjacent in self._out]
        other._in = [dict(adjacent) for adjacent in self._in] if self._directed else other._out
        other._alive = list(self._alive)
        other._node_count = self._node_count
        other._edge_count = self._edge_count
        return other

    __copy__ = copy

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return (
            f"Graph({kind}, weighted={self._weighted}, "
            f"nodes={self._node_count}, edges={self._edge_count})"
        )


def _empty_like(graph: Graph, weighted: bool, directed: bool, keep: Iterable[int]) -> Graph:
    kept = set(keep)
    result = Graph(graph.upper_node_id_bound(), weighted, directed)
    for u in range(graph.upper_node_id_bound()):
        if u not in kept:
            result.remove_node(u)
    return result


def to_complement(graph: Graph) -> Graph:
    """Undirected, unweighted complement over the same node identifiers."""
    result = Graph(graph.upper_node_id_bound())
    for v in range(graph.upper_node_id_bound()):
        if graph.has_node(v):
            adjacent = set(graph.neighbors(v))
            for u in list(result.nodes()):
                if u < v and u not in adjacent:
                    result.add_edge(u, v)
        else:
            result.remove_node(v)
    return result


def to_undirected(graph: Graph) -> Graph:
    """Undirected copy; opposite directed edges merge, keeping the first weight."""
    result = _empty_like(graph, graph.weighted, False, graph.nodes())
    for u, v, w in graph.weighted_edges():
        if not result.has_edge(u, v):
            result.add_edge(u, v, w)
    return result


def subgraph_from_nodes(graph: Graph, nodes: Iterable[int]) -> Graph:
    """Induced subgraph on the given nodes, keeping their identifiers."""
    kept = {u for u in nodes if graph.has_node(u)}
    result = _empty_like(graph, graph.weighted, graph.directed, kept)
    for u, v, w in graph.weighted_edges():
        if u in kept and v in kept:
            result.add_edge(u, v, w)
    return result