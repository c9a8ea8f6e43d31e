import pytest

from koalagraphs.graph import (
    Algorithm,
    AlgorithmNotRunError,
    Graph,
    subgraph_from_nodes,
    to_complement,
    to_undirected,
)

G6_EDGES = [(1, 0), (2, 0), (2, 1), (6, 5)]
D6_EDGES = [(0, 2), (0, 4), (3, 1), (3, 4)]
FLOW_EDGES = [(0, 1, 10), (0, 2, 5), (1, 2, 15), (1, 3, 5), (2, 3, 10)]


def build(n, edges, directed=False):
    graph = Graph(n, False, directed)
    for u, v in edges:
        graph.add_edge(u, v)
    return graph


def cycle(n):
    return build(n, [(i, (i + 1) % n) for i in range(n)])


def test_new_graph_has_nodes_and_no_edges():
    graph = Graph(5)
    assert list(graph.nodes()) == list(range(5))
    assert graph.number_of_nodes() == 5
    assert graph.number_of_edges() == 0
    assert not graph.is_empty()
    assert Graph().is_empty()


def test_undirected_edges_are_symmetric_and_reported_once():
    graph = build(7, G6_EDGES)
    assert graph.number_of_edges() == len(G6_EDGES)
    assert sorted(graph.edges()) == sorted(G6_EDGES)
    for u, v in G6_EDGES:
        assert graph.has_edge(u, v)
        assert graph.has_edge(v, u)
    assert not graph.has_edge(3, 4)


def test_directed_edges_have_one_direction():
    graph = build(5, D6_EDGES, directed=True)
    assert sorted(graph.edges()) == sorted(D6_EDGES)
    assert graph.has_edge(0, 2)
    assert not graph.has_edge(2, 0)
    assert graph.in_neighbors(4) == [0, 3]
    assert graph.neighbors(3) == [1, 4]
    assert graph.degree(0) == len([e for e in D6_EDGES if e[0] == 0])


def test_invalid_edge_operations_raise():
    graph = build(3, [(0, 1)])
    with pytest.raises(ValueError):
        graph.add_edge(0, 1)
    with pytest.raises(ValueError):
        graph.add_edge(1, 0)
    with pytest.raises(ValueError):
        graph.remove_edge(1, 2)
    with pytest.raises(ValueError):
        graph.add_edge(0, 7)


def test_remove_and_restore_node():
    graph = build(7, G6_EDGES)
    graph.remove_node(2)
    assert not graph.has_node(2)
    assert 2 not in graph
    assert graph.number_of_nodes() == 6
    assert graph.upper_node_id_bound() == 7
    assert sorted(graph.edges()) == [(1, 0), (6, 5)]
    assert graph.neighbors(0) == [1]
    with pytest.raises(ValueError):
        graph.degree(2)
    graph.restore_node(2)
    assert graph.has_node(2)
    assert graph.degree(2) == 0
    assert graph.number_of_nodes() == 7
    with pytest.raises(ValueError):
        graph.restore_node(2)


def test_remove_node_in_directed_graph_drops_both_directions():
    graph = build(5, D6_EDGES, directed=True)
    graph.remove_node(4)
    assert sorted(graph.edges()) == [(0, 2), (3, 1)]
    assert graph.number_of_edges() == len(graph.edges())


def test_ith_neighbor_follows_insertion_order():
    graph = build(4, [(0, 3), (0, 1), (0, 2)])
    assert [graph.ith_neighbor(0, i) for i in range(3)] == [3, 1, 2]
    assert graph.ith_neighbor(0, 3) is None
    assert graph.ith_neighbor(1, 1) is None


def test_weighted_graph_built_like_flow_network():
    graph = Graph(4, True, True)
    for u, v, w in FLOW_EDGES:
        graph.increase_weight(u, v, w)
        graph.increase_weight(v, u, 0)
    for u, v, w in FLOW_EDGES:
        assert graph.weight(u, v) == w
        assert graph.weight(v, u) == 0
    assert graph.total_edge_weight() == sum(w for _, _, w in FLOW_EDGES)
    assert graph.number_of_edges() == 2 * len(FLOW_EDGES)


def test_increase_weight_accumulates():
    graph = Graph(2, True, False)
    graph.increase_weight(0, 1, 10)
    graph.increase_weight(1, 0, 5)
    assert graph.weight(0, 1) == 10 + 5
    assert graph.weight(1, 0) == graph.weight(0, 1)


def test_unweighted_graph_weights():
    graph = build(3, [(0, 1)])
    assert graph.weight(0, 1) == 1.0
    assert graph.weight(0, 2) == 0.0
    with pytest.raises(ValueError):
        graph.increase_weight(0, 1, 3)


def test_copy_is_independent():
    graph = build(7, G6_EDGES)
    other = graph.copy()
    other.remove_edge(1, 0)
    other.remove_node(6)
    assert graph.has_edge(0, 1)
    assert graph.has_node(6)
    assert graph.number_of_edges() == len(G6_EDGES)
    assert other.number_of_edges() == len(G6_EDGES) - 2


def test_complement_of_five_cycle_is_a_cycle():
    complement = to_complement(cycle(5))
    assert complement.number_of_edges() == 5
    assert all(complement.degree(u) == 2 for u in complement.nodes())
    assert not complement.has_edge(0, 1)
    assert complement.has_edge(0, 2)


def test_double_complement_restores_edges():
    graph = build(7, G6_EDGES)
    twice = to_complement(to_complement(graph))
    assert sorted(twice.edges()) == sorted(graph.edges())


def test_complement_of_complete_graph_and_removed_nodes():
    graph = build(4, [(u, v) for u in range(4) for v in range(u)])
    graph.remove_node(1)
    complement = to_complement(graph)
    assert complement.number_of_edges() == 0
    assert not complement.has_node(1)
    assert list(complement.nodes()) == [0, 2, 3]


def test_to_undirected_merges_opposite_edges():
    directed = build(3, [(0, 1), (1, 0), (1, 2)], directed=True)
    graph = to_undirected(directed)
    assert not graph.directed
    assert sorted(graph.edges()) == [(1, 0), (2, 1)]
    assert graph.has_edge(2, 1)


def test_subgraph_keeps_identifiers():
    graph = build(7, G6_EDGES)
    sub = subgraph_from_nodes(graph, [0, 2, 5, 6])
    assert sub.upper_node_id_bound() == graph.upper_node_id_bound()
    assert list(sub.nodes()) == [0, 2, 5, 6]
    assert sorted(sub.edges()) == [(2, 0), (6, 5)]


class _Counter(Algorithm):
    def __init__(self, graph):
        super().__init__()
        self.graph = graph
        self._count = 0

    def run(self):
        self._count = self.graph.number_of_edges()
        self.has_run = True

    def count(self):
        self.assure_finished()
        return self._count


def test_algorithm_requires_run():
    algorithm = _Counter(build(7, G6_EDGES))
    with pytest.raises(AlgorithmNotRunError):
        algorithm.count()
    algorithm.run()
    assert algorithm.count() == len(G6_EDGES)