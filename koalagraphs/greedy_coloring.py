"""Greedy vertex colorings."""

from __future__ import annotations

import random
from collections import defaultdict

from .graph import Algorithm, Graph


class _BucketQueue:
    """Integer-keyed priority queue; among equal keys the newest comes first."""

    def __init__(self) -> None:
        self._buckets: defaultdict[int, list[int]] = defaultdict(list)
        self._keys: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, item: int) -> bool:
        return item in self._keys

    def insert(self, key: int, item: int) -> None:
        self._keys[item] = key
        self._buckets[key].append(item)

    def remove(self, item: int) -> None:
        key = self._keys.pop(item)
        self._buckets[key].remove(item)
        if not self._buckets[key]:
            del self._buckets[key]

    def key(self, item: int) -> int:
        return self._keys[item]

    def change_key(self, key: int, item: int) -> None:
        self.remove(item)
        self.insert(key, item)

    def extract_min(self) -> int:
        key = min(self._buckets)
        bucket = self._buckets[key]
        item = bucket.pop()
        if not bucket:
            del self._buckets[key]
        del self._keys[item]
        return item


def _max_degree(graph: Graph) -> int:
    return max((graph.degree(v) for v in graph.nodes()), default=0)


class VertexColoring(Algorithm):
    """Base for vertex colorings; colors are positive integers."""

    def __init__(self, graph: Graph) -> None:
        super().__init__()
        self.graph = graph.copy()
        self.colors: dict[int, int] = {}

    def coloring(self) -> dict[int, int]:
        self.assure_finished()
        return self.colors


class GreedyVertexColoring(VertexColoring):
    """Colorings assigning each vertex the smallest free color in some order."""

    def greedy_color(self, v: int) -> int:
        """Color v with the smallest color unused by its neighbours and return it."""
        if v in self.colors:
            return self.colors[v]
        forbidden = {
            self.colors[u] for u in self.graph.in_neighbors(v) if u in self.colors
        }
        color = 1
        while color in forbidden:
            color += 1
        self.colors[v] = color
        return color

    def run(self) -> None:
        raise NotImplementedError


class RandomSequentialVertexColoring(GreedyVertexColoring):
    def run(self) -> None:
        vertices = list(self.graph.nodes())
        random.shuffle(vertices)
        for v in vertices:
            self.greedy_color(v)
        self.has_run = True


class LargestFirstVertexColoring(GreedyVertexColoring):
    def run(self) -> None:
        for v in self.largest_first_ordering():
            self.greedy_color(v)
        self.has_run = True

    def largest_first_ordering(self) -> list[int]:
        vertices = [v for v in self.graph.nodes() if v not in self.colors]
        return sorted(vertices, key=self.graph.degree, reverse=True)


class SmallestLastVertexColoring(GreedyVertexColoring):
    def run(self) -> None:
        for v in self.smallest_last_ordering():
            self.greedy_color(v)
        self.has_run = True

    def smallest_last_ordering(self) -> list[int]:
        queue = _BucketQueue()
        for v in self.graph.nodes():
            if v not in self.colors:
                queue.insert(self.graph.degree(v), v)
        removed = []
        while queue:
            v = queue.extract_min()
            removed.append(v)
            for u in self.graph.in_neighbors(v):
                if u in queue:
                    queue.change_key(queue.key(u) - 1, u)
        return removed[::-1]


class SaturatedLargestFirstVertexColoring(GreedyVertexColoring):
    def run(self) -> None:
        saturations: defaultdict[int, set[int]] = defaultdict(set)
        for u, v in self.graph.edges():
            if u not in self.colors and v in self.colors:
                saturations[u].add(self.colors[v])
            elif u in self.colors and v not in self.colors:
                saturations[v].add(self.colors[u])

        max_degree = _max_degree(self.graph)
        queue = _BucketQueue()
        for v in self.graph.nodes():
            if v not in self.colors:
                queue.insert(-len(saturations[v]) * max_degree - self.graph.degree(v), v)

        while queue:
            v = queue.extract_min()
            color = self.greedy_color(v)
            for u in self.graph.in_neighbors(v):
                if u in queue and color not in saturations[u]:
                    saturations[u].add(color)
                    queue.change_key(queue.key(u) - max_degree, u)
        self.has_run = True


class GreedyIndependentSetVertexColoring(GreedyVertexColoring):
    def run(self) -> None:
        queues = [_BucketQueue(), _BucketQueue()]
        for v in self.graph.nodes():
            if v not in self.colors:
                queues[1].insert(self.graph.degree(v), v)
        color = 1
        while queues[color % 2]:
            queue, following = queues[color % 2], queues[1 - color % 2]
            while queue:
                v = queue.extract_min()
                for u in self.graph.in_neighbors(v):
                    if u in queue:
                        following.insert(queue.key(u) - 1, u)
                        queue.remove(u)
                    elif u in following:
                        following.change_key(following.key(u) - 1, u)
                self.colors[v] = color
            color += 1
        self.has_run = True