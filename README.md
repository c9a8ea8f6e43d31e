# koalagraphs

Graph algorithms on a small, mutable graph type: greedy and exact vertex
coloring, maximum independent sets, minimum dominating sets and maximum flow.

## Installation

```
pip install koalagraphs
```

To run the test suite:

```
pip install "koalagraphs[test]"
pytest
```

## The graph type

`koalagraphs.graph.Graph(n, weighted, directed)` creates a graph with nodes
`0 .. n-1`. Removed nodes keep their identifiers and can be brought back with
`restore_node` (without their edges). Parallel edges are rejected with
`ValueError`.

```python
from koalagraphs.graph import Graph, to_complement

g = Graph(4, False, False)
for u, v in [(0, 1), (0, 2), (1, 3), (2, 3)]:
    g.add_edge(u, v)

g.degree(0)            # 2
g.neighbors(0)         # [1, 2]
g.number_of_edges()    # 4
c = to_complement(g)   # edges 0-3 and 1-2
```

Other members include `add_node`, `remove_node`, `remove_edge`, `has_edge`,
`weight`, `increase_weight` (weighted graphs only; creates a missing edge),
`in_neighbors`, `ith_neighbor`, `edges`, `weighted_edges`,
`total_edge_weight`, `upper_node_id_bound`, `is_empty` and `copy`.
`to_undirected` and `subgraph_from_nodes` build derived graphs over the same
node identifiers.

## Algorithms

Every algorithm copies the graph it is given, does its work in `run()` and
hands out results afterwards. Asking for a result before `run()` raises
`koalagraphs.graph.AlgorithmNotRunError`.

### Vertex coloring

Colors are positive integers; `coloring()` returns a `{node: color}` dict.

Greedy heuristics in `koalagraphs.greedy_coloring`:
`RandomSequentialVertexColoring`, `LargestFirstVertexColoring`,
`SmallestLastVertexColoring`, `SaturatedLargestFirstVertexColoring` and
`GreedyIndependentSetVertexColoring`.

Exact colorings by enumeration in `koalagraphs.exact_coloring`:
`BrownEnumerationVertexColoring`, `ChristofidesEnumerationVertexColoring`,
`BrelazEnumerationVertexColoring` and `KormanEnumerationVertexColoring`.

```python
from koalagraphs.exact_coloring import BrownEnumerationVertexColoring

algorithm = BrownEnumerationVertexColoring(g)
algorithm.run()
colors = algorithm.coloring()
max(colors.values())            # 2 for the 4-cycle above
```

### Maximum independent set

`koalagraphs.independent_set` has `BruteForceIndependentSet`,
`Mis1IndependentSet` and `Mis2IndependentSet`;
`koalagraphs.branching_independent_set` has `Mis3IndependentSet`,
`Mis4IndependentSet`, `Mis5IndependentSet` and
`MeasureAndConquerIndependentSet`. A directed graph is treated as its
underlying undirected graph.

```python
from koalagraphs.independent_set import Mis2IndependentSet

algorithm = Mis2IndependentSet(g)
algorithm.run()
algorithm.independent_set()     # a set of nodes, here of size 2
algorithm.check()               # raises ValueError if two chosen nodes are adjacent
```

### Minimum dominating set

`koalagraphs.dominating_set` has `FominKratschWoegingerDominatingSet` and
`SchiermeyerDominatingSet`, plus the helper `is_optional_dominating_set`.

```python
from koalagraphs.dominating_set import SchiermeyerDominatingSet

algorithm = SchiermeyerDominatingSet(g)
algorithm.run()
algorithm.dominating_set()
algorithm.check()               # raises ValueError if some node is not dominated
```

### Maximum flow

`koalagraphs.maximum_flow.KingRaoTarjanMaximumFlow` computes the value of a
maximum flow on a weighted, directed graph with integer capacities. It is
built on the link-cut tree `koalagraphs.dynamic_tree.DynamicTree` and the
edge designator `koalagraphs.edge_designator.KRTEdgeDesignator`, both of which
can also be used on their own.

```python
from koalagraphs.graph import Graph
from koalagraphs.maximum_flow import KingRaoTarjanMaximumFlow

network = Graph(4, True, True)
for u, v, w in [(0, 1, 10), (0, 2, 5), (1, 2, 15), (1, 3, 5), (2, 3, 10)]:
    network.increase_weight(u, v, w)
    network.increase_weight(v, u, 0)

flow = KingRaoTarjanMaximumFlow(network, 0, 3)
flow.run()
flow.flow_size()                # 15
```

Only the flow value is reported; the flow on individual edges is not exposed.

## What the package does not do

Graphs are built in code only: there are no readers or writers for graph file
formats such as graph6 or DIMACS, and the package installs no command-line
programs. It has no spanning tree, perfect graph or set-cover based
algorithms.