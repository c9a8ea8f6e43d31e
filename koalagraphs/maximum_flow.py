"""Maximum flow computations."""

from __future__ import annotations

from collections import defaultdict

from .dynamic_tree import DynamicTree
from .edge_designator import KRTEdgeDesignator
from .graph import Algorithm, Graph

Edge = tuple[int, int]


def _reverse(e: Edge) -> Edge:
    return e[1], e[0]


class MaximumFlow(Algorithm):
    """Base for maximum flow algorithms from source to target."""

    def __init__(self, graph: Graph, source: int, target: int) -> None:
        super().__init__()
        self.graph = graph.copy()
        self.source = source
        self.target = target
        self._flow_size = 0

    def flow_size(self) -> int:
        self.assure_finished()
        return self._flow_size


class KingRaoTarjanMaximumFlow(MaximumFlow):
    """Push-relabel with dynamic trees and the KRT edge designation game."""

    def _visible_excess(self, v: int) -> int:
        return max(0, self._excess[v] - self._hidden_excess[v])

    def _positive_excess_node(self) -> int | None:
        self._positive.discard(self.source)
        self._positive.discard(self.target)
        return min(self._positive) if self._positive else None

    def _update_positive_excess(self, v: int) -> None:
        if self._visible_excess(v) > 0:
            self._positive.add(v)
        else:
            self._positive.discard(v)

    def _cap(self, e: Edge) -> int:
        return self._capacity.get(e, 0)

    def _get_flow(self, e: Edge) -> int:
        if self._tree.find_parent(e[0]) == e[1]:
            return self._cap(e) - self._tree.get_value(e[0])
        if self._tree.find_parent(e[1]) == e[0]:
            return -(self._cap(_reverse(e)) - self._tree.get_value(e[1]))
        return self._flow.get(e, 0)

    def _set_flow(self, e: Edge, c: int) -> None:
        self._flow[e] = c
        self._flow[_reverse(e)] = -c

    def _saturate(self, e: Edge) -> None:
        c = self._cap(e)
        self._set_flow(e, c)
        self._excess[e[0]] -= c
        self._excess[e[1]] += c
        self._update_positive_excess(e[0])
        self._update_positive_excess(e[1])
        d0 = self._d[e[0]]
        self._designator.response_adversary(e[0], d0, e[1], d0 - 1)

    def _add_edge(self, e: Edge) -> None:
        rev = _reverse(e)
        self._e_star.add(e)
        self._e_star.add(rev)
        self._hidden_excess[e[0]] -= self._cap(e)
        self._hidden_excess[e[1]] -= self._cap(rev)
        self._update_positive_excess(e[0])
        self._update_positive_excess(e[1])
        d_first, d_second = self._d[e[0]], self._d[e[1]]
        if d_first > d_second:
            self._saturate(e)
        elif d_second > d_first:
            self._saturate(rev)

    def _cut(self, e: Edge) -> None:
        self._set_flow(e, self._cap(e) - self._tree.get_value(e[0]))
        self._tree.cut(e[0], e[1])
        self._designator.response_adversary(e[0], self._d[e[0]], e[1], self._d[e[1]])

    def _initialize(self) -> None:
        self._tree = DynamicTree(self.graph.upper_node_id_bound())
        self._designator = KRTEdgeDesignator(self.graph)
        self._capacity: dict[Edge, int] = {}
        self._flow: dict[Edge, int] = {}
        self._excess: defaultdict[int, int] = defaultdict(int)
        self._hidden_excess: defaultdict[int, int] = defaultdict(int)
        self._d: defaultdict[int, int] = defaultdict(int)
        self._e_star: set[Edge] = set()
        self._positive: set[int] = set()
        for u, v, w in self.graph.weighted_edges():
            self._capacity[(u, v)] = int(w)
            self._hidden_excess[u] += int(w)
            self._update_positive_excess(u)
        for v in self.graph.nodes():
            self._d[v] = 0
        for _ in range(self.graph.number_of_nodes()):
            self._relabel(self.source)
        for v in self.graph.neighbors(self.source):
            self._add_edge((self.source, v))

    def _edges_list(self) -> list[Edge]:
        cost: dict[Edge, float] = defaultdict(float)
        for u, v, w in self.graph.weighted_edges():
            if self.source in (u, v):
                continue
            cost[(min(u, v), max(u, v))] += w
        return sorted(sorted(cost), key=lambda e: cost[e])

    def _tree_push(self, v: int, u: int) -> None:
        if self._tree.find_root(v) == v:
            e = (v, u)
            self._tree.link(v, u, self._cap(e) - self._get_flow(e))
        delta = min(self._tree.minimum_path_residual_capacity(v), self._visible_excess(v))
        self._tree.add_value(v, -delta)
        path_end = self._tree.find_root(v)
        self._excess[v] -= delta
        self._excess[path_end] += delta
        self._update_positive_excess(v)
        self._update_positive_excess(path_end)
        e = self._tree.find_saturated_edge(v)
        while e[0] is not None:
            self._cut(e)
            e = self._tree.find_saturated_edge(e[1])

    def _relabel(self, v: int) -> None:
        for c in self._tree.find_children(v):
            self._cut((c, v))
        self._designator.response_adversary(v, self._d[v])
        self._d[v] += 1
        for w in self.graph.neighbors(v):
            e = (v, w)
            eligible = (
                self._cap(e) - self._get_flow(e) > 0
                and self._d[v] == self._d[w] + 1
                and e in self._e_star
            )
            if not eligible:
                self._designator.response_adversary(v, self._d[v], w, self._d[v] - 1)

    def run(self) -> None:
        self._initialize()
        pending = self._edges_list()
        while pending:
            self._add_edge(pending.pop())
            v = self._positive_excess_node()
            while v is not None:
                u = self._designator.current_edge(v, self._d[v])
                if u is not None:
                    self._tree_push(v, u)
                else:
                    self._relabel(v)
                v = self._positive_excess_node()
        self._flow_size = int(self._visible_excess(self.target))
        self.has_run = True