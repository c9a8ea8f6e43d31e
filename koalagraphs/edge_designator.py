"""Current-edge designation for the King-Rao-Tarjan maximum flow algorithm.

The designator plays the edge-designation game on a layered graph whose
vertices are pairs (node, level), encoded as integers.
"""

from __future__ import annotations

from .graph import Graph

# Minimum out-degree of a layered vertex before it takes part in ratio tracking.
MIN_TRACKED_DEGREE = 16
# Growth parameter of the ratio levels.
RATIO_GROWTH = 2
# Number of ratio levels.
RATIO_LEVELS = 6
# Smallest ratio that counts as a level.
BASE_RATIO = 0.5


class KRTEdgeDesignator:
    """Designates, for every (node, level), an edge towards level - 1."""

    def __init__(self, graph: Graph) -> None:
        n = graph.number_of_nodes()
        self._max_k = 2 * n
        self._size = (n + 1) * self._max_k
        size = self._size
        self._out: list[list[int]] = [[] for _ in range(size)]
        self._in: list[list[int]] = [[] for _ in range(size)]
        self._deg_out = [0] * size
        self._designated = [-1] * size
        self._rl = [0] * size
        self._erl = [0] * size

        for u, v in graph.edges():
            for k in range(1, self._max_k):
                left, right = self._encode(u, k), self._encode(v, k - 1)
                self._out[left].append(right)
                self._in[right].append(left)

        self._ratios = [BASE_RATIO]
        for _ in range(1, RATIO_LEVELS):
            self._ratios.append((1 + 1.0 / RATIO_GROWTH) * self._ratios[-1])

        self._out_neighbors: list[list[set[int]]] = []
        for i in range(size):
            levels = [set(self._out[i])] + [set() for _ in range(RATIO_LEVELS)]
            self._out_neighbors.append(levels)
            self._deg_out[i] = len(self._out[i])

        self._u_prim = {i for i in range(size) if len(self._out[i]) >= MIN_TRACKED_DEGREE}
        self._v_prim = {i for i in range(size) if len(self._in[i]) >= MIN_TRACKED_DEGREE}

        for i in range(size):
            self._designate_edge(i)

    def _encode(self, node: int, k: int) -> int:
        return node * self._max_k + k

    def _decode(self, i: int) -> int | None:
        return i // self._max_k if i >= 0 else None

    def _indexed_u(self, k: int) -> set[int]:
        result = set()
        for u in self._u_prim:
            des = self._designated[u]
            if des in self._v_prim and self._rl[des] >= k:
                result.add(u)
        return result

    def _indexed_v(self, k: int) -> set[int]:
        return {v for v in self._v_prim if self._rl[v] >= k}

    def _update_rl(self, v: int) -> None:
        if v < 0 or not self._in[v]:
            return
        count = sum(
            1 for u in self._in[v] if self._designated[u] == v and u in self._u_prim
        )
        ratio = count / len(self._in[v])
        if v not in self._v_prim or ratio < BASE_RATIO:
            self._rl[v] = 0
            return
        for i in range(RATIO_LEVELS - 1, -1, -1):
            if ratio >= self._ratios[i]:
                self._rl[v] = i + 1
                return

    def _update_erl(self, v: int) -> None:
        self._erl[v] = self._rl[v]
        for u in self._in[v]:
            if u not in self._u_prim:
                continue
            levels = self._out_neighbors[u]
            for bucket in levels:
                if v in bucket:
                    bucket.discard(v)
                    levels[self._erl[v]].add(v)
                    break

    def _remove_edge(self, u: int, v: int) -> None:
        for bucket in self._out_neighbors[u]:
            if v in bucket:
                bucket.discard(v)
                self._deg_out[u] -= 1
                break
        if self._designated[u] == v:
            self._designated[u] = -1
            if u in self._u_prim and self._deg_out[u] < MIN_TRACKED_DEGREE:
                self._u_prim.discard(u)
            if u in self._u_prim:
                self._update_rl(v)
                if self._rl[v] < self._erl[v] - 1:
                    self._update_erl(v)
            self._designate_edge(u)

    def _designate_edge(self, u: int) -> int:
        v = -1
        levels = self._out_neighbors[u]
        if u not in self._u_prim:
            if levels[0]:
                v = next(iter(levels[0]))
            self._designated[u] = v
            return v
        for bucket in levels:
            if bucket:
                v = next(iter(bucket))
                break
        self._designated[u] = v
        if v >= 0:
            self._update_rl(v)
            if self._rl[v] > self._erl[v]:
                self._update_erl(v)
        return v

    def reset(self) -> int:
        """Rebalance the designation; returns the level it started from."""
        k = RATIO_LEVELS
        threshold = MIN_TRACKED_DEGREE / (88.0 * RATIO_GROWTH)
        while k - 3 >= 0 and len(self._indexed_u(k - 3)) >= (
            self._ratios[k - 3] * threshold * len(self._indexed_u(k))
        ):
            k -= 3
        for v in self._indexed_v(k - 1):
            while self._rl[v] >= k - 1:
                for u in self._u_prim:
                    if self._designated[u] == v:
                        self._designated[u] = -1
                        break
                else:
                    self._rl[v] = 0
                    break
                self._update_rl(v)
            if self._rl[v] > self._erl[v] or self._rl[v] < self._erl[v] - 1:
                self._update_erl(v)
        for u in self._indexed_u(k - 1):
            if self._designated[u] == -1:
                self._designate_edge(u)
        return k

    def current_edge(self, node: int, k: int) -> int | None:
        """The node designated from (node, k), or None when there is none."""
        return self._decode(self._designated[self._encode(node, k)])

    def response_adversary(
        self, a: int, da: int, b: int | None = None, db: int | None = None
    ) -> None:
        """Remove vertex (a, da), or the edge (a, da) -> (b, db) when b is given."""
        if b is None:
            v = self._encode(a, da)
            for u in list(self._in[v]):
                self._remove_edge(u, v)
            return
        u, v = self._encode(a, da), self._encode(b, db)
        self._remove_edge(u, v)
        if self._designated[u] == v:
            chosen = self._designate_edge(u)
            if chosen >= 0 and self._rl[chosen] == RATIO_LEVELS:
                while True:
                    self.reset()
                    if any(level >= RATIO_LEVELS for level in self._rl):
                        return