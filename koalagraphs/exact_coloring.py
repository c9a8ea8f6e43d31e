"""Exact vertex colorings by implicit enumeration (backtracking with bounds)."""

from __future__ import annotations

from abc import abstractmethod
from collections import defaultdict, deque
from collections.abc import Iterable

from .graph import Algorithm, Graph
from .greedy_coloring import _BucketQueue


class EnumerationVertexColoring(Algorithm):
    """Base for exact colorings that enumerate partial colorings along an ordering.

    Colors are positive integers; position i of the search holds the vertex
    ``ordering[i]``.
    """

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self.graph = graph.copy()
        self.ordering: list[int] = []
        self.lower_bound = 0
        self.upper_bound = 0
        self._n = self.graph.number_of_nodes()
        self._feasible: list[set[int]] = []
        self._current: list[int] = []
        self._best: list[int] = []
        self._predecessors: set[int] = set()
        self._r = 0
        self._current_bound = 0

    def coloring(self) -> dict[int, int]:
        """The best coloring found, as a mapping from node to color."""
        self.assure_finished()
        return dict(zip(self.ordering, self._best))

    @abstractmethod
    def _determine_current_predecessors(self, r: int) -> None:
        """Collect the positions the search may backtrack to from position r."""

    def _prepare_search(self) -> None:
        self.lower_bound, self.upper_bound = 1, self._n
        self._r = 0
        self._current_bound = self.upper_bound + 1
        self._feasible = [set() for _ in range(self._n)]
        self._feasible[0].add(1)
        self._current = [0] * self._n

    def _search(self) -> None:
        while True:
            self._forwards()
            if self._current_bound == self.lower_bound:
                break
            self._backwards()
            if self._r == 0:
                break

    def _determine_feasible_colors(self, i: int) -> None:
        prefix = self._current[:i]
        top = max(prefix, default=0)
        colors = set(range(1, min(top + 2, self._current_bound)))
        u = self.ordering[i]
        for node, color in zip(self.ordering[:i], prefix):
            if self.graph.has_edge(u, node):
                colors.discard(color)
        self._feasible[i] = colors

    def _forwards(self) -> None:
        start = self._r
        for i in range(start, self._n):
            if start == 0 or i > start:
                self._determine_feasible_colors(i)
            if not self._feasible[i]:
                self._r = i
                return
            self._current[i] = min(self._feasible[i])
        self._best = list(self._current)
        index = max(range(self._n), key=self._current.__getitem__)
        self._r = index
        self._current_bound = self._current[index]

    def _backwards(self) -> None:
        self._determine_current_predecessors(self._r)
        while self._predecessors:
            i = max(self._predecessors)
            self._predecessors.remove(i)
            feasible = self._feasible[i]
            feasible.discard(self._current[i])
            if feasible and min(feasible) < self._current_bound:
                self._r = i
                return
        self._r = 0


class BrownEnumerationVertexColoring(EnumerationVertexColoring):
    """Brown's enumeration over a greedy largest-first ordering."""

    def greedy_largest_first_ordering(self) -> list[int]:
        """Start from a vertex of maximum degree, then repeatedly take the vertex
        with most already ordered neighbours, ties broken by larger degree and
        then smaller identifier."""
        graph = self.graph
        nodes = list(graph.nodes())
        if not nodes:
            return []
        start, top = nodes[0], 0
        for u in nodes:
            if graph.degree(u) > top:
                start, top = u, graph.degree(u)
        ordering = [start]
        counts = {u: int(graph.has_edge(u, start)) for u in nodes if u != start}
        while counts:
            current = min(counts, key=lambda u: (-counts[u], -graph.degree(u), u))
            del counts[current]
            ordering.append(current)
            for v in graph.neighbors(current):
                if v in counts:
                    counts[v] += 1
        return ordering

    def _determine_current_predecessors(self, r: int) -> None:
        self._predecessors = set(range(r))

    def run(self) -> None:
        if self._n:
            self.ordering = self.greedy_largest_first_ordering()
            self._prepare_search()
            self._search()
        self.has_run = True


class ChristofidesEnumerationVertexColoring(BrownEnumerationVertexColoring):
    """Enumeration backtracking along the transitive closure of the ordered graph."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._closure: list[set[int]] = []

    def _calculate_transitive_closure(self) -> list[set[int]]:
        rows: list[set[int]] = [set() for _ in range(self._n)]
        for u, row in enumerate(rows):
            for v in range(u + 1, self._n):
                if self.graph.has_edge(self.ordering[u], self.ordering[v]):
                    row.add(v)
        for row in rows:
            for v in range(self._n):
                if v in row:
                    row |= rows[v]
        return rows

    def transitive_closure(self) -> list[list[bool]]:
        """Reachability between positions of the ordering along increasing edges."""
        self.assure_finished()
        return [[v in row for v in range(self._n)] for row in self._closure]

    def _determine_current_predecessors(self, r: int) -> None:
        self._predecessors.update(u for u, row in enumerate(self._closure) if r in row)

    def run(self) -> None:
        if self._n:
            self.ordering = self.greedy_largest_first_ordering()
            self._prepare_search()
            self._closure = self._calculate_transitive_closure()
            self._search()
        self.has_run = True


class BrelazEnumerationVertexColoring(EnumerationVertexColoring):
    """Enumeration seeded by saturation largest-first coloring with interchanges."""

    def _interchange_component(
        self, pair: list[int], solution: dict[int, int], new_node: int, alpha: int
    ) -> list[int]:
        graph = self.graph
        visited: set[int] = set()
        to_recolor: list[int] = []
        for start in pair:
            if start in visited:
                continue
            component: list[int] = []
            queue = deque([start])
            visited.add(start)
            colors: set[int] = set()
            while queue:
                v = queue.popleft()
                if graph.has_edge(new_node, v):
                    if not colors:
                        colors.add(solution[v])
                    elif solution[v] not in colors:
                        return []
                component.append(v)
                for w in pair:
                    if w not in visited and graph.has_edge(v, w):
                        queue.append(w)
                        visited.add(w)
            if alpha in colors:
                to_recolor.extend(component)
        return to_recolor

    def _interchange(
        self, palette: list[int], new_node: int, solution: dict[int, int]
    ) -> bool:
        for index, alpha in enumerate(palette):
            for beta in palette[:index]:
                pair = [node for node in sorted(solution) if solution[node] in (alpha, beta)]
                component = self._interchange_component(pair, solution, new_node, alpha)
                if component:
                    for v in component:
                        solution[v] = beta if solution[v] == alpha else alpha
                    solution[new_node] = alpha
                    return True
        return False

    def _saturation_largest_first_with_interchange(self) -> list[int]:
        graph = self.graph
        nodes = list(graph.nodes())
        start, top = nodes[0], 0
        for u in nodes:
            if graph.degree(u) > top:
                start, top = u, graph.degree(u)
        solution = {start: 1}
        ordering = [start]
        saturation: dict[int, tuple[int, int]] = {}
        neighbour_colors: defaultdict[int, set[int]] = defaultdict(set)
        for u in nodes:
            if u == start:
                continue
            if graph.has_edge(start, u):
                saturation[u] = (1, graph.degree(u) - 1)
                neighbour_colors[u].add(1)
            else:
                saturation[u] = (0, graph.degree(u))

        max_color, clique_size = 1, 0
        while saturation:
            u = min(saturation, key=lambda x: (-saturation[x][0], -saturation[x][1], x))
            del saturation[u]
            ordering.append(u)
            forbidden = {solution[v] for v in graph.neighbors(u) if v in solution}
            color = 1
            while color in forbidden:
                color += 1
            if color <= max_color:
                solution[u] = color
                if not clique_size:
                    clique_size = max_color
            elif self._interchange(sorted(forbidden), u, solution):
                if not clique_size:
                    clique_size = max_color
            else:
                max_color += 1
                solution[u] = max_color
            for node, (_, degree) in list(saturation.items()):
                if graph.has_edge(u, node):
                    neighbour_colors[node].add(solution[u])
                    saturation[node] = (len(neighbour_colors[node]), degree - 1)

        self.lower_bound, self.upper_bound = clique_size, max_color
        self._current = [solution[v] for v in ordering]
        self._best = list(self._current)
        return ordering

    def _adjacent_predecessor_representatives(self, i: int) -> Iterable[int]:
        representatives: dict[int, int] = {}
        u = self.ordering[i]
        for j, (node, color) in enumerate(zip(self.ordering[:i], self._current)):
            if color < self._current_bound and self.graph.has_edge(node, u):
                representatives.setdefault(color, j)
        return representatives.values()

    def _determine_current_predecessors(self, r: int) -> None:
        self._predecessors.update(self._adjacent_predecessor_representatives(r))

    def _backwards(self) -> None:
        self._determine_current_predecessors(self._r)
        while self._predecessors:
            i = max(self._predecessors)
            self._predecessors.remove(i)
            self._determine_current_predecessors(i)
            feasible = self._feasible[i]
            feasible.discard(self._current[i])
            if feasible:
                self._r = i
                return
        self._r = 0

    def run(self) -> None:
        if self._n:
            self._current = [0] * self._n
            self._best = [0] * self._n
            self.ordering = self._saturation_largest_first_with_interchange()
            if self.lower_bound != self.upper_bound:
                self._r = 0
                self._current_bound = self.upper_bound
                self._feasible = [set() for _ in range(self._n)]
                self._feasible[0].add(1)
                self._search()
        self.has_run = True


class KormanEnumerationVertexColoring(BrownEnumerationVertexColoring):
    """Enumeration that picks the next vertex dynamically by saturation."""

    def __init__(self, graph: Graph) -> None:
        super().__init__(graph)
        self._position: dict[int, int] = {}
        self._new_ordering: list[int] = []

    def _determine_feasible_colors_avoiding(self, i: int, blocked: set[int]) -> None:
        top = max((self._current[k] for k in self._new_ordering[:i]), default=0)
        self._feasible[self._new_ordering[i]] = {
            color
            for color in range(1, min(top + 2, self._current_bound))
            if color not in blocked
        }

    def _forwards(self) -> None:
        graph = self.graph
        colored = [False] * self._n
        neighbour_colors: list[set[int]] = [set() for _ in range(self._n)]
        queue = _BucketQueue()

        for i in self._new_ordering:
            colored[i] = True
            for v in graph.neighbors(self.ordering[i]):
                neighbour_colors[self._position[v]].add(self._current[i])

        for u in graph.nodes():
            j = self._position[u]
            if not colored[j]:
                queue.insert(-len(neighbour_colors[j]), j)

        while queue:
            node = queue.extract_min()
            self._new_ordering.append(node)
            self._determine_feasible_colors_avoiding(
                len(self._new_ordering) - 1, neighbour_colors[node]
            )
            if not self._feasible[node]:
                self._r = len(self._new_ordering) - 1
                return
            colored[node] = True
            color = min(self._feasible[node])
            self._current[node] = color
            for v in graph.neighbors(self.ordering[node]):
                j = self._position[v]
                if not colored[j]:
                    neighbour_colors[j].add(color)
                    queue.change_key(-len(neighbour_colors[j]), j)

        self._best = list(self._current)
        index = max(range(self._n), key=lambda i: self._best[self._new_ordering[i]])
        self._current_bound = self._best[self._new_ordering[index]]
        self._r = index

    def _backwards(self) -> None:
        for i in range(self._r - 1, -1, -1):
            node = self._new_ordering[i]
            feasible = self._feasible[node]
            feasible.discard(self._current[node])
            if feasible and min(feasible) < self._current_bound:
                self._current[node] = min(feasible)
                del self._new_ordering[i + 1:]
                self._r = i
                return
        self._r = 0

    def run(self) -> None:
        if self._n:
            self.ordering = self.greedy_largest_first_ordering()
            self.lower_bound, self.upper_bound = 1, self._n
            self._current = [0] * self._n
            self._best = [0] * self._n
            self._position = {node: i for i, node in enumerate(self.ordering)}
            self._r = 0
            self._current_bound = self.upper_bound + 1
            self._new_ordering = [0]
            self._feasible = [set() for _ in range(self._n)]
            self._feasible[0].add(1)
            self._current[0] = 1
            self._search()
        self.has_run = True