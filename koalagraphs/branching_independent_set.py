"""Maximum independent sets by branching on high-degree nodes and by measure and conquer."""

from __future__ import annotations

from .independent_set import RecursiveIndependentSet


class Mis3IndependentSet(RecursiveIndependentSet):
    """Take low-degree nodes greedily, branch on a maximum-degree node of degree >= 3."""

    def recursive(self) -> list[int]:
        g = self.graph
        if g.is_empty():
            return []
        u = self._minimum_degree_node()
        degree = g.degree(u)
        if degree == 0:
            return self._solve_without([u], [u])
        if degree == 1:
            return self._solve_without(self._neighbors_plus(u), [u])
        v = self._maximum_degree_node()
        if g.degree(v) >= 3:
            return self._branch_plain(v)
        return self._run_degree2()


class Mis4IndependentSet(RecursiveIndependentSet):
    """Branch on the last node of degree >= 3 until all degrees are at most two."""

    def recursive(self) -> list[int]:
        g = self.graph
        if g.is_empty():
            return []
        v = self._maximum_degree_node()
        if g.degree(v) < 3:
            return self._run_degree2()
        for u in g.nodes():
            if g.degree(u) >= 3:
                v = u
        return self._branch_plain(v)


class Mis5IndependentSet(RecursiveIndependentSet):
    """Branch on a maximum-degree node until all degrees are at most two."""

    def recursive(self) -> list[int]:
        g = self.graph
        if g.is_empty():
            return []
        v = self._maximum_degree_node()
        if g.degree(v) >= 3:
            return self._branch_plain(v)
        return self._run_degree2()


class MeasureAndConquerIndependentSet(RecursiveIndependentSet):
    """Components, domination, folding of small nodes and mirror branching."""

    def recursive(self) -> list[int]:
        g = self.graph
        if g.is_empty():
            return []

        split = self._solve_components()
        if split is not None:
            return split

        closed = [(v, set(self._neighbors_plus(v))) for v in g.nodes()]
        for v, closed_v in closed:
            for w, closed_w in closed:
                if v != w and closed_v >= closed_w:
                    return self._solve_without([v])

        for v in list(g.nodes()):
            degree = g.degree(v)
            if degree > 4:
                continue
            neighbors = self._neighbors(v)
            induced = self._induced_edges(neighbors)
            if degree == 0:
                return self._solve_without([v], [v])
            if degree == 2:
                if induced:
                    return self._solve_without(self._neighbors_plus(v), [v])
                return self._fold_degree_two(v, neighbors)
            # Degree-3 nodes with a single edge among their neighbours are folded;
            # the remaining small-degree cases were already handled by domination.
            if degree == 3 and len(induced) == 1:
                return self._fold(v, neighbors)

        return self._branch_on(self._maximum_degree_node())

    def _fold_degree_two(self, v: int, neighbors: list[int]) -> list[int]:
        g = self.graph
        u1, u2 = neighbors[0], neighbors[1]
        merged = u1
        second = self._neighbors2(v)
        closed = self._neighbors_plus(v)
        edges = self._connected_edges(closed)
        self._remove_elements(closed)
        try:
            g.restore_node(merged)
            for u in second:
                g.add_edge(merged, u)
            result = self.recursive()
            g.remove_node(merged)
        finally:
            self._restore_elements(closed, edges)
        result.append(u2 if merged in result else v)
        return result

    def _fold(self, v: int, neighbors: list[int]) -> list[int]:
        g = self.graph
        closed_v = {v, *neighbors}
        outside = {u: set(g.neighbors(u)) - closed_v for u in neighbors}
        pairs = [
            (a, b)
            for a in neighbors
            for b in neighbors
            if a < b and not g.has_edge(a, b)
        ]
        folds = [(a, b, neighbors[i]) for i, (a, b) in enumerate(pairs)]

        closed = self._neighbors_plus(v)
        edges = self._connected_edges(closed)
        self._remove_elements(closed)
        try:
            for a, b, merged in folds:
                g.restore_node(merged)
                for node in outside[a] | outside[b]:
                    g.add_edge(merged, node)
            merged_nodes = [merged for _, _, merged in folds]
            for x in merged_nodes:
                for y in merged_nodes:
                    if x < y:
                        g.add_edge(x, y)
            result = self.recursive()
            for merged in merged_nodes:
                g.remove_node(merged)
        finally:
            self._restore_elements(closed, edges)

        for i, node in enumerate(result):
            chosen = next(((a, b) for a, b, merged in folds if merged == node), None)
            if chosen is not None:
                result[i] = chosen[0]
                result.append(chosen[1])
                break
        else:
            result.append(v)
        return result