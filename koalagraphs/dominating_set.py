"""Minimum dominating sets by exact exponential algorithms."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from .graph import Algorithm, Graph, subgraph_from_nodes, to_undirected


def is_optional_dominating_set(graph: Graph, solution: Iterable[int], bound: Iterable[int]) -> bool:
    """Whether every node of bound is in solution or adjacent to a node of solution."""
    remaining = set(bound)
    for u in solution:
        remaining.discard(u)
        remaining.difference_update(graph.neighbors(u))
    return not remaining


class DominatingSet(Algorithm):
    """Base for dominating set algorithms on undirected graphs.

    A directed input graph is treated as its underlying undirected graph.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self.graph = to_undirected(graph) if graph.directed else graph.copy()
        self._dominating_set: set[int] = set()

    def dominating_set(self) -> set[int]:
        self.assure_finished()
        return self._dominating_set

    def check(self) -> None:
        """Raise ValueError when some node is not dominated by the computed set."""
        self.assure_finished()
        dominated: set[int] = set()
        for u in self._dominating_set:
            dominated.add(u)
            dominated.update(self.graph.neighbors(u))
        for u in self.graph.nodes():
            if u not in dominated:
                raise ValueError(f"node {u} is not dominated")


class ExactDominatingSet(DominatingSet):
    """Exact algorithms searching for minimum optional dominating sets.

    Nodes are split into bound ones (still to be dominated), free ones
    (already dominated) and required ones (already in the solution).
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._free: set[int] = set()
        self._bound: set[int] = set()
        self._required: set[int] = set()

    def _find_small_mods(
        self, graph: Graph, candidates: Sequence[int], size: int, chosen: set[int]
    ) -> bool:
        """Look for at most size candidates dominating all bound nodes of graph.

        On success the candidates found are left in chosen.
        """
        closed: dict[int, int] = {}
        for u in candidates:
            mask = 1 << u
            for v in graph.neighbors(u):
                mask |= 1 << v
            closed[u] = mask
        bound_mask = 0
        for u in self._bound:
            bound_mask |= 1 << u
        count = len(candidates)

        def dominates() -> bool:
            cover = 0
            for u in chosen:
                cover |= closed[u]
            return bound_mask & ~cover == 0

        def search(index: int) -> bool:
            if index == count:
                return dominates()
            if len(chosen) < size:
                node = candidates[index]
                chosen.add(node)
                if search(index + 1):
                    return True
                chosen.discard(node)
            if count - index <= size - len(chosen):
                return False
            return search(index + 1)

        return search(0)


class FominKratschWoegingerDominatingSet(ExactDominatingSet):
    """Branching on nodes of degree one and two, then a small search on the rest."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._degree_one: set[int] = set()
        self._degree_two: set[int] = set()

    def run(self) -> None:
        g = self.graph
        self._free, self._bound, self._required = set(), set(), set()
        self._degree_one, self._degree_two = set(), set()
        for u in g.nodes():
            self._bound.add(u)
            if g.degree(u) == 1:
                self._degree_one.add(u)
            elif g.degree(u) == 2:
                self._degree_two.add(u)
        work = Graph(g.upper_node_id_bound(), False, True)
        for u in range(g.upper_node_id_bound()):
            if not g.has_node(u):
                work.remove_node(u)
        for u, v in g.edges():
            if u != v:
                work.add_edge(u, v)
                work.add_edge(v, u)
        self._dominating_set = self._find_big_mods(work)
        self.has_run = True

    def _find_big_mods(self, g: Graph) -> set[int]:
        if self._degree_one:
            u = min(self._degree_one)
            unique = g.ith_neighbor(u, 0)
            is_free = self._forget_vertex(g, u, False)
            if is_free:
                solution = self._find_big_mods(g)
            else:
                moved = self._move_to_solution(g, unique)
                is_free_unique = self._forget_vertex(g, unique, True)
                solution = self._find_big_mods(g)
                self._retrieve_vertex(g, unique, is_free_unique, True)
                self._remove_from_solution(moved)
            self._retrieve_vertex(g, u, is_free, False)
            return solution

        if self._degree_two:
            v = min(self._degree_two)
            u1, u2 = g.ith_neighbor(v, 0), g.ith_neighbor(v, 1)
            # Take u1.
            is_free_v = self._forget_vertex(g, v, False)
            moved = self._move_to_solution(g, u1)
            is_free_u1 = self._forget_vertex(g, u1, True)
            solution = self._find_big_mods(g)
            self._required.discard(u1)
            self._retrieve_vertex(g, u1, is_free_u1, True)
            self._remove_from_solution(moved)
            self._retrieve_vertex(g, v, is_free_v, False)
            # Take v.
            is_free_u1 = self._forget_vertex(g, u1, False)
            is_free_u2 = self._forget_vertex(g, u2, False)
            moved = self._move_to_solution(g, v)
            is_free_v = self._forget_vertex(g, v, True)
            other = self._find_big_mods(g)
            self._retrieve_vertex(g, v, is_free_v, True)
            self._remove_from_solution(moved)
            self._retrieve_vertex(g, u2, is_free_u2, False)
            self._retrieve_vertex(g, u1, is_free_u1, False)
            if len(other) < len(solution):
                solution = other
            # Take u2, or nothing when v is already dominated.
            is_free_v = self._forget_vertex(g, v, False)
            if is_free_v:
                other = self._find_big_mods(g)
            else:
                moved = self._move_to_solution(g, u2)
                is_free_u2 = self._forget_vertex(g, u2, True)
                other = self._find_big_mods(g)
                self._retrieve_vertex(g, u2, is_free_u2, True)
                self._remove_from_solution(moved)
            self._retrieve_vertex(g, v, is_free_v, False)
            return solution if len(solution) < len(other) else other

        isolated = {u for u in g.nodes() if g.degree(u) == 0 and u in self._bound}
        self._bound -= isolated
        solution: set[int] = set()
        if self._bound:
            solution = self._find_mods_for_minimum_degree_3(g)
        solution |= self._required
        solution |= isolated
        self._bound |= isolated
        return solution

    def _find_mods_for_minimum_degree_3(self, g: Graph) -> set[int]:
        unrequired = sorted(self._free | self._bound)
        reduced = to_undirected(subgraph_from_nodes(g, unrequired))
        size = 1
        while 8 * size <= 3 * len(unrequired):
            solution: set[int] = set()
            if self._find_small_mods(reduced, unrequired, size, solution):
                return solution
            size += 1
        raise ValueError("There is no small optional dominating set in the graph")

    def _move_to_solution(self, g: Graph, vertex: int) -> list[int]:
        moved = []
        for u in g.neighbors(vertex):
            if u in self._bound:
                self._bound.discard(u)
                self._free.add(u)
                moved.append(u)
        return moved

    def _remove_from_solution(self, moved: list[int]) -> None:
        for u in reversed(moved):
            self._free.discard(u)
            self._bound.add(u)

    def _forget_vertex(self, g: Graph, vertex: int, is_required: bool) -> bool:
        is_free = vertex in self._free
        if is_free:
            self._free.discard(vertex)
        else:
            self._bound.discard(vertex)
        if g.degree(vertex) == 1:
            self._degree_one.discard(vertex)
        elif g.degree(vertex) == 2:
            self._degree_two.discard(vertex)
        for u in g.neighbors(vertex):
            g.remove_edge(u, vertex)
            degree = g.degree(u)
            if degree == 0:
                self._degree_one.discard(u)
            elif degree == 1:
                self._degree_one.add(u)
                self._degree_two.discard(u)
            elif degree == 2:
                self._degree_two.add(u)
        if is_required:
            self._required.add(vertex)
        return is_free

    def _retrieve_vertex(self, g: Graph, vertex: int, is_free: bool, is_required: bool) -> None:
        for u in g.neighbors(vertex):
            g.add_edge(u, vertex)
            degree = g.degree(u)
            if degree == 1:
                self._degree_one.add(u)
            elif degree == 2:
                self._degree_one.discard(u)
                self._degree_two.add(u)
            elif degree == 3:
                self._degree_two.discard(u)
        if g.degree(vertex) == 1:
            self._degree_one.add(vertex)
        elif g.degree(vertex) == 2:
            self._degree_two.add(vertex)
        if is_required:
            self._required.discard(vertex)
        if is_free:
            self._free.add(vertex)
        else:
            self._bound.add(vertex)


class SchiermeyerDominatingSet(ExactDominatingSet):
    """Reduction to a core graph, a small search, and matchings for large solutions."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._neighborhood: set[int] = set()

    def run(self) -> None:
        self._free, self._bound, self._required = set(), set(self.graph.nodes()), set()
        self._neighborhood = set()
        self._dominating_set = set()
        core = self._core_graph(self.graph, self._free, self._bound, self._required)
        if not self._bound:
            self._dominating_set = set(self._required)
            self.has_run = True
            return
        unrequired = sorted(self._free | self._bound)
        if not self._find_small(core, unrequired):
            self._find_big(core, unrequired)
        self.has_run = True

    @staticmethod
    def _core_graph(g: Graph, free: set[int], bound: set[int], required: set[int]) -> Graph:
        """Apply the reduction rules until none fires; the sets are updated in place."""
        core = g.copy()
        process = True
        while process:
            process = False
            # Rule 1: isolated bound nodes must be taken.
            for u in sorted(bound):
                if core.degree(u) == 0:
                    required.add(u)
                    process = True
            bound -= {u for u in bound if core.degree(u) == 0}
            # Rule 2: bound nodes next to a required node become free.
            changed = {
                u for u in bound if any(v in required for v in core.neighbors(u))
            }
            if changed:
                process = True
            free |= changed
            bound -= changed
            # Rule 3: drop edges at required nodes and between free nodes.
            for u, v in core.edges():
                if u in required or v in required or (u in free and v in free):
                    core.remove_edge(u, v)
                    process = True
            # Rule 4: free nodes with fewer than two bound neighbours are useless.
            useless = {
                u for u in free if sum(1 for v in core.neighbors(u) if v in bound) < 2
            }
            for u in sorted(useless):
                core.remove_node(u)
                core.restore_node(u)
                process = True
            free -= useless
            # Rule 5: the only neighbour of a bound leaf must be taken.
            for u in sorted(bound):
                if core.degree(u) == 1 and u not in required:
                    unique = core.ith_neighbor(u, 0)
                    free.discard(unique)
                    required.add(unique)
                    process = True
            bound -= required
        return core

    def _find_small(self, g: Graph, candidates: list[int]) -> bool:
        size = 1
        while 3 * size <= len(candidates):
            chosen: set[int] = set()
            if self._find_small_mods(g, candidates, size, chosen):
                self._dominating_set = chosen | self._required
                return True
            size += 1
        return False

    def _find_big(self, g: Graph, candidates: list[int]) -> None:
        self._dominating_set |= self._required
        self._required.clear()
        self._dominating_set |= set(self._find_big_recursive(g, candidates, 0))

    def _find_big_recursive(self, g: Graph, candidates: list[int], index: int) -> list[int]:
        required, neighborhood = self._required, self._neighborhood
        if index == len(candidates):
            if len(neighborhood) < 3 * len(required):
                return candidates
            if len(neighborhood) >= 3 * (len(required) + 1):
                return candidates
            for u in candidates:
                if u in required:
                    continue
                if len(neighborhood) + len(self._new_neighborhood(g, u)) >= 3 * (
                    len(required) + 1
                ):
                    return candidates
            return self._matching_mods(g, set(self._free), set(self._bound), set(required))
        solution = self._find_big_recursive(g, candidates, index + 1)
        if len(candidates) < 3 * (len(required) + 1):
            return solution
        node = candidates[index]
        added = self._new_neighborhood(g, node)
        required.add(node)
        neighborhood.update(added)
        other = self._find_big_recursive(g, candidates, index + 1)
        required.discard(node)
        neighborhood.difference_update(added)
        return solution if len(solution) < len(other) else other

    def _new_neighborhood(self, g: Graph, vertex: int) -> list[int]:
        result = [] if vertex in self._neighborhood else [vertex]
        result.extend(v for v in g.neighbors(vertex) if v not in self._neighborhood)
        return result

    def _matching_mods(
        self, g: Graph, free: set[int], bound: set[int], required: set[int]
    ) -> list[int]:
        core = self._core_graph(g, free, bound, required)
        helper = nx.Graph()
        helper.add_nodes_from(range(g.upper_node_id_bound()))
        owners: dict[tuple[int, int], int] = {}
        for u in sorted(bound):
            v = core.ith_neighbor(u, 0)
            if v is not None and u < v:
                helper.add_edge(u, v)
                owners.setdefault((u, v), u)
        for u in sorted(free):
            v1, v2 = core.ith_neighbor(u, 0), core.ith_neighbor(u, 1)
            if v1 is None or v2 is None:
                raise RuntimeError(f"free node {u} has fewer than two bound neighbours")
            key = (min(v1, v2), max(v1, v2))
            if key not in owners:
                helper.add_edge(*key)
                owners[key] = u
        mate: dict[int, int] = {}
        for a, b in nx.max_weight_matching(helper, maxcardinality=True):
            mate[a], mate[b] = b, a
        result = sorted(required)
        for u in sorted(bound):
            if u not in mate:
                result.append(u)
            elif u < mate[u]:
                result.append(owners[(u, mate[u])])
        return result