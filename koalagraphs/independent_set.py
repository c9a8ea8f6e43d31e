"""Maximum independent sets: brute force and exact branching algorithms."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable, Sequence
from itertools import combinations

from .graph import Algorithm, Graph, to_undirected

EdgeSet = set[tuple[int, int]]


def _edge(u: int, v: int) -> tuple[int, int]:
    return (u, v) if u < v else (v, u)


class IndependentSet(Algorithm):
    """Base for maximum independent set algorithms on undirected graphs.

    A directed input graph is treated as its underlying undirected graph.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self.graph = to_undirected(graph) if graph.directed else graph.copy()
        self._independent_set: set[int] = set()

    def independent_set(self) -> set[int]:
        self.assure_finished()
        return self._independent_set

    def check(self) -> None:
        """Raise ValueError when two chosen nodes are adjacent."""
        self.assure_finished()
        for u, v in self.graph.edges():
            if u in self._independent_set and v in self._independent_set:
                raise ValueError(f"nodes {u} and {v} are adjacent")

    # Neighbourhoods

    def _neighbors(self, v: int) -> list[int]:
        return self.graph.neighbors(v)

    def _neighbors_plus(self, v: int) -> list[int]:
        """Closed neighbourhood: the neighbours of v followed by v itself."""
        return [*self.graph.neighbors(v), v]

    def _neighbors2(self, v: int) -> list[int]:
        """Nodes at distance exactly two from v, in order of discovery."""
        near = {v, *self.graph.neighbors(v)}
        result: list[int] = []
        for n in self.graph.neighbors(v):
            for x in self.graph.neighbors(n):
                if x not in near:
                    near.add(x)
                    result.append(x)
        return result

    def _connected_edges(self, nodes: Iterable[int]) -> EdgeSet:
        """Edges with at least one endpoint among nodes."""
        return {_edge(u, v) for u in nodes for v in self.graph.neighbors(u)}

    def _induced_edges(self, nodes: Iterable[int]) -> EdgeSet:
        """Edges with both endpoints among nodes."""
        chosen = set(nodes)
        return {
            _edge(u, v) for u in chosen for v in self.graph.neighbors(u) if v in chosen
        }

    def _mirrors(self, v: int) -> list[int]:
        """Nodes w at distance two with N(v) minus N(w) a clique."""
        neighbors_v = set(self.graph.neighbors(v))
        mirrors = []
        for w in self._neighbors2(v):
            rest = neighbors_v - set(self.graph.neighbors(w))
            if all(self.graph.has_edge(a, b) for a, b in combinations(rest, 2)):
                mirrors.append(w)
        return mirrors

    def _minimum_degree_node(self) -> int:
        return min(self.graph.nodes(), key=self.graph.degree)

    def _maximum_degree_node(self) -> int:
        return max(self.graph.nodes(), key=self.graph.degree)

    # Graph surgery

    def _remove_elements(self, nodes: Iterable[int]) -> None:
        for v in nodes:
            if self.graph.has_node(v):
                self.graph.remove_node(v)

    def _restore_elements(self, nodes: Iterable[int], edges: Iterable[tuple[int, int]]) -> None:
        for v in nodes:
            if not self.graph.has_node(v):
                self.graph.restore_node(v)
        for u, v in sorted(edges):
            if self.graph.has_node(u) and self.graph.has_node(v) and not self.graph.has_edge(u, v):
                self.graph.add_edge(u, v)

    def _run_degree2(self) -> list[int]:
        """Maximum independent set of a graph whose degrees are at most two."""
        g = self.graph.copy()
        result: list[int] = []

        def solve_path(u: int | None) -> None:
            while u is not None and g.has_node(u) and g.degree(u) <= 1:
                result.append(u)
                if g.degree(u) == 0:
                    g.remove_node(u)
                    return
                v = g.ith_neighbor(u, 0)
                g.remove_node(u)
                if g.degree(v) == 1:
                    u = g.ith_neighbor(v, 0)
                g.remove_node(v)

        for u in range(g.upper_node_id_bound()):
            solve_path(u)
        for u in range(g.upper_node_id_bound()):
            if g.has_node(u) and g.degree(u) == 2:
                result.append(u)
                g.remove_node(g.ith_neighbor(u, 0))
                v = g.ith_neighbor(u, 0)
                g.remove_node(u)
                if g.degree(v) > 0:
                    w = g.ith_neighbor(v, 0)
                    g.remove_node(v)
                    solve_path(w)
                else:
                    g.remove_node(v)
        return result


class BruteForceIndependentSet(IndependentSet):
    """Tries node subsets from the largest size down."""

    def run(self) -> None:
        nodes = list(self.graph.nodes())
        edges = self.graph.edges()
        self._independent_set = set()
        for size in range(len(nodes), 0, -1):
            for candidate in combinations(nodes, size):
                chosen = set(candidate)
                if not any(u in chosen and v in chosen for u, v in edges):
                    self._independent_set = chosen
                    self.has_run = True
                    return
        self.has_run = True


class RecursiveIndependentSet(IndependentSet):
    """Branching algorithms that shrink the graph and restore it afterwards."""

    def run(self) -> None:
        self._independent_set = set(self.recursive())
        self.has_run = True

    @abstractmethod
    def recursive(self) -> list[int]:
        """A maximum independent set of the current graph; the graph is left intact."""

    def _solve_without(self, removed: Iterable[int], chosen: Sequence[int] = ()) -> list[int]:
        """Solve the graph with removed nodes deleted, then add chosen to the result."""
        removed = list(dict.fromkeys(removed))
        edges = self._connected_edges(removed)
        self._remove_elements(removed)
        try:
            result = self.recursive()
        finally:
            self._restore_elements(removed, edges)
        result.extend(chosen)
        return result

    def _branch_on(self, v: int) -> list[int]:
        """Either take v, or drop v together with its mirrors."""
        with_v = self._solve_without(self._neighbors_plus(v), [v])
        without_v = self._solve_without([*self._mirrors(v), v])
        return with_v if len(with_v) > len(without_v) else without_v

    def _branch_plain(self, v: int) -> list[int]:
        """Either take v, or drop v alone."""
        with_v = self._solve_without(self._neighbors_plus(v), [v])
        without_v = self._solve_without([v])
        return with_v if len(with_v) > len(without_v) else without_v

    def _solve_components(self) -> list[int] | None:
        """Solve component-wise when the graph is disconnected, else None."""
        nodes = list(self.graph.nodes())
        seen = {nodes[0]}
        stack = [nodes[0]]
        while stack:
            x = stack.pop()
            for y in self.graph.neighbors(x):
                if y not in seen:
                    seen.add(y)
                    stack.append(y)
        if len(seen) == len(nodes):
            return None
        component = [u for u in nodes if u in seen]
        rest = [u for u in nodes if u not in seen]
        return self._solve_without(rest) + self._solve_without(component)


class Mis1IndependentSet(RecursiveIndependentSet):
    """Branch on every node of the closed neighbourhood of a minimum-degree node."""

    def recursive(self) -> list[int]:
        if self.graph.is_empty():
            return []
        largest: list[int] = []
        selected: int | None = None
        for u in self._neighbors_plus(self._minimum_degree_node()):
            best = self._solve_without(self._neighbors_plus(u))
            if len(best) >= len(largest):
                largest, selected = best, u
        largest.append(selected)
        return largest


class Mis2IndependentSet(RecursiveIndependentSet):
    """Case analysis on low-degree nodes with mirror branching."""

    def recursive(self) -> list[int]:
        g = self.graph
        if g.is_empty():
            return []

        v = self._minimum_degree_node()
        degree = g.degree(v)
        if degree <= 1:
            return self._solve_without(self._neighbors_plus(v), [v])
        if degree == 2:
            return self._degree_two(v)
        if degree == 3:
            return self._degree_three(v)

        v = self._maximum_degree_node()
        if g.degree(v) >= 6:
            return self._branch_plain(v)

        split = self._solve_components()
        if split is not None:
            return split

        degrees = [g.degree(u) for u in g.nodes()]
        has_degree4 = 4 in degrees
        has_other = any(d != 4 for d in degrees)
        if not (has_degree4 and has_other):
            return self._branch_on(v)

        w = v
        for a, b in g.edges():
            if g.degree(a) != g.degree(b):
                v, w = (a, b) if g.degree(a) == 5 else (b, a)
                break

        mirrors = self._mirrors(v)
        case1 = self._solve_without(self._neighbors_plus(v), [v])
        case2 = self._solve_without(sorted({*mirrors, *self._neighbors_plus(w)}), [w])
        case3 = self._solve_without([*mirrors, v, w])
        if len(case1) >= len(case2) and len(case1) >= len(case3):
            return case1
        if len(case2) >= len(case1) and len(case2) >= len(case3):
            return case2
        return case3

    def _degree_two(self, v: int) -> list[int]:
        u1, u2 = self.graph.neighbors(v)[:2]
        if self.graph.has_edge(u1, u2):
            return self._solve_without(self._neighbors_plus(v), [v])
        second = self._neighbors2(v)
        if len(second) == 1:
            return self._solve_without([v, u1, u2, second[0]], [u1, u2])
        return self._branch_on(v)

    def _degree_three(self, v: int) -> list[int]:
        g = self.graph
        u1, u2, u3 = g.neighbors(v)[:3]
        inner = sum(g.has_edge(a, b) for a, b in ((u1, u2), (u2, u3), (u1, u3)))
        if inner == 3:
            return self._solve_without(self._neighbors_plus(v), [v])
        if inner > 0 or self._mirrors(v):
            return self._branch_on(v)

        def closed_without_v(u: int) -> list[int]:
            return [x for x in self._neighbors_plus(u) if x != v]

        n1, n2, n3 = closed_without_v(u1), closed_without_v(u2), closed_without_v(u3)
        solutions = [
            self._solve_without([v, u1, u2, u3], [v]),
            self._solve_without([v, *n1, *n2], [u1, u2]),
            self._solve_without([v, u2, *n1, *n3], [u1, u3]),
            self._solve_without([v, u1, *n2, *n3], [u2, u3]),
        ]
        return max(solutions, key=len)