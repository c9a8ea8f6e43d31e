"""Link-cut trees over the nodes 0..n-1 with values on the tree edges.

Every non-root node carries the value of the edge to its parent; a tree root
has a value of its own that path operations leave alone.
"""

from __future__ import annotations

import math

NO_PATH_CAPACITY = 2**31 - 2


class _Node:
    __slots__ = ("key", "value", "lazy", "minimum", "left", "right", "parent")

    def __init__(self, key: int) -> None:
        self.key = key
        # Tree roots hold infinity here so path minima ignore them.
        self.value: float = math.inf
        self.lazy: float = 0
        self.minimum: float = math.inf
        self.left: _Node | None = None
        self.right: _Node | None = None
        self.parent: _Node | None = None


def _is_splay_root(x: _Node) -> bool:
    p = x.parent
    return p is None or (p.left is not x and p.right is not x)


def _apply(x: _Node | None, delta: float) -> None:
    if x is not None:
        x.value += delta
        x.minimum += delta
        x.lazy += delta


def _push(x: _Node) -> None:
    if x.lazy:
        _apply(x.left, x.lazy)
        _apply(x.right, x.lazy)
        x.lazy = 0


def _update(x: _Node) -> None:
    x.minimum = min(
        x.value,
        x.left.minimum if x.left is not None else math.inf,
        x.right.minimum if x.right is not None else math.inf,
    )


def _rotate(x: _Node) -> None:
    p = x.parent
    g = p.parent
    if not _is_splay_root(p):
        if g.left is p:
            g.left = x
        else:
            g.right = x
    x.parent = g
    if p.left is x:
        p.left = x.right
        if x.right is not None:
            x.right.parent = p
        x.right = p
    else:
        p.right = x.left
        if x.left is not None:
            x.left.parent = p
        x.left = p
    p.parent = x
    _update(p)
    _update(x)


def _splay(x: _Node) -> None:
    path = [x]
    while not _is_splay_root(path[-1]):
        path.append(path[-1].parent)
    for node in reversed(path):
        _push(node)
    while not _is_splay_root(x):
        p = x.parent
        if not _is_splay_root(p):
            g = p.parent
            same_side = (g.left is p) == (p.left is x)
            _rotate(p if same_side else x)
        _rotate(x)


def _access(x: _Node) -> None:
    """Make the path from the tree root to x preferred, with x at the splay root."""
    last: _Node | None = None
    y: _Node | None = x
    while y is not None:
        _splay(y)
        y.right = last
        _update(y)
        last = y
        y = y.parent
    _splay(x)


class DynamicTree:
    """A forest of rooted trees supporting path updates and bottleneck queries."""

    def __init__(self, n: int) -> None:
        self._nodes = [_Node(v) for v in range(n)]
        self._root_values: dict[int, float] = dict.fromkeys(range(n), 0)
        self._children: list[set[int]] = [set() for _ in range(n)]

    def __len__(self) -> int:
        return len(self._nodes)

    def find_parent(self, v: int) -> int | None:
        """Parent of v, or None for a tree root."""
        if v in self._root_values:
            return None
        node = self._nodes[v]
        _access(node)
        x = node.left
        while x.right is not None:
            _push(x)
            x = x.right
        _splay(x)
        return x.key

    def find_root(self, v: int) -> int:
        node = self._nodes[v]
        _access(node)
        x = node
        while x.left is not None:
            _push(x)
            x = x.left
        _splay(x)
        return x.key

    def find_children(self, v: int) -> set[int]:
        """Nodes linked directly below v."""
        return set(self._children[v])

    def get_value(self, v: int) -> float:
        if v in self._root_values:
            return self._root_values[v]
        node = self._nodes[v]
        _access(node)
        return node.value

    def add_value(self, v: int, delta: float) -> None:
        """Add delta on the path from v up to, but excluding, the tree root.

        When v is itself a root, its own value changes.
        """
        if v in self._root_values:
            self._root_values[v] += delta
            return
        node = self._nodes[v]
        _access(node)
        _apply(node, delta)

    def link(self, u: int, v: int, capacity: float) -> None:
        """Hang the tree rooted at u below v, giving u the value capacity.

        Nothing happens when u is not a tree root.
        """
        if u not in self._root_values:
            return
        if self.find_root(v) == u:
            raise ValueError(f"nodes {u} and {v} are already in the same tree")
        node = self._nodes[u]
        _access(node)
        node.value = capacity
        _update(node)
        node.parent = self._nodes[v]
        del self._root_values[u]
        self._children[v].add(u)

    def cut(self, u: int, v: int) -> None:
        """Detach u from its parent v; u keeps its value as the new root."""
        if u not in self._root_values:
            node = self._nodes[u]
            _access(node)
            above = node.left
            above.parent = None
            node.left = None
            self._root_values[u] = node.value
            node.value = math.inf
            _update(node)
        self._children[v].discard(u)

    def find_bottleneck(self, v: int, neck: float) -> int:
        """Nearest node from v upwards, root excluded, with value <= neck.

        Returns the tree root when there is no such node.
        """
        if v in self._root_values:
            return v
        node = self._nodes[v]
        _access(node)
        if node.minimum > neck:
            return self.find_root(v)
        x = node
        while True:
            _push(x)
            if x.right is not None and x.right.minimum <= neck:
                x = x.right
            elif x.value <= neck:
                break
            else:
                x = x.left
        _splay(x)
        return x.key

    def find_saturated_edge(self, v: int) -> tuple[int, int] | tuple[None, None]:
        """The nearest edge above v whose value dropped to zero or below."""
        bottleneck = self.find_bottleneck(v, 0)
        if bottleneck != self.find_root(v):
            return bottleneck, self.find_parent(bottleneck)
        return None, None

    def minimum_path_residual_capacity(self, v: int) -> float:
        """Smallest value on the path from v to its root, clamped to
        [0, NO_PATH_CAPACITY]; NO_PATH_CAPACITY when v is a root."""
        if v in self._root_values:
            return NO_PATH_CAPACITY
        node = self._nodes[v]
        _access(node)
        return min(max(0, node.minimum), NO_PATH_CAPACITY)