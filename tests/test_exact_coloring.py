import pytest

from koalagraphs.exact_coloring import (
    BrelazEnumerationVertexColoring,
    BrownEnumerationVertexColoring,
    ChristofidesEnumerationVertexColoring,
    KormanEnumerationVertexColoring,
)
from koalagraphs.graph import AlgorithmNotRunError, Graph

ALGORITHMS = [
    BrownEnumerationVertexColoring,
    ChristofidesEnumerationVertexColoring,
    BrelazEnumerationVertexColoring,
    KormanEnumerationVertexColoring,
]

EXACT_CASES = [
    (4, [(0, 1), (0, 2), (1, 3), (2, 3)], 2),
    (6, [(0, 1), (0, 2), (1, 2), (0, 3), (3, 4), (1, 5), (4, 5)], 3),
    (
        10,
        [(0, 2), (0, 3), (0, 4), (0, 5), (1, 2), (1, 3), (1, 4), (1, 5), (2, 6), (2, 8),
         (3, 4), (3, 6), (4, 6), (5, 6), (5, 7), (5, 9), (7, 8), (7, 9), (8, 9)],
        3,
    ),
    (
        8,
        [(0, 1), (0, 2), (0, 4), (0, 6), (1, 2), (1, 3), (1, 7), (2, 3), (2, 4), (3, 5),
         (3, 7), (4, 5), (4, 6), (5, 6), (5, 7), (6, 7)],
        4,
    ),
    (
        8,
        [(0, 1), (0, 2), (0, 4), (0, 6), (1, 3), (1, 5), (1, 7), (2, 3), (2, 4), (2, 5),
         (2, 6), (3, 4), (3, 5), (3, 7), (4, 6), (4, 7), (5, 6), (5, 7), (6, 7)],
        4,
    ),
    (
        10,
        [(0, 1), (0, 2), (0, 3), (0, 5), (0, 6), (0, 7), (1, 2), (1, 3), (1, 4), (1, 6),
         (1, 7), (2, 3), (2, 4), (2, 5), (2, 7), (3, 4), (3, 5), (3, 6), (4, 5), (4, 7),
         (4, 8), (4, 9), (5, 6), (5, 8), (5, 9), (6, 7), (6, 8), (6, 9), (7, 8), (7, 9),
         (8, 9)],
        5,
    ),
    (4, [(0, 2), (1, 3), (2, 3)], 2),
    (
        9,
        [(0, 4), (0, 5), (0, 6), (0, 8), (1, 5), (1, 6), (1, 7), (1, 8), (2, 6), (3, 7),
         (3, 8), (4, 5), (4, 7), (4, 8), (5, 7), (5, 8), (6, 7), (7, 8)],
        4,
    ),
]


def build_graph(n, edges):
    graph = Graph(n)
    for u, v in edges:
        graph.add_edge(u, v)
    return graph


def check_coloring(n, edges, colors, expected):
    assert set(colors) == set(range(n))
    for u, v in edges:
        assert colors[u] != colors[v]
    assert max(colors.values()) == expected


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
@pytest.mark.parametrize("n, edges, expected", EXACT_CASES)
def test_exact_chromatic_number(algorithm_class, n, edges, expected):
    algorithm = algorithm_class(build_graph(n, edges))
    algorithm.run()
    check_coloring(n, edges, algorithm.coloring(), expected)


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_coloring_before_run_raises(algorithm_class):
    algorithm = algorithm_class(build_graph(3, [(0, 1)]))
    with pytest.raises(AlgorithmNotRunError):
        algorithm.coloring()


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_empty_graph(algorithm_class):
    algorithm = algorithm_class(Graph(0))
    algorithm.run()
    assert algorithm.coloring() == {}


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_single_node(algorithm_class):
    algorithm = algorithm_class(Graph(1))
    algorithm.run()
    assert algorithm.coloring() == {0: 1}


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_edgeless_graph_uses_one_color(algorithm_class):
    algorithm = algorithm_class(Graph(3))
    algorithm.run()
    assert algorithm.coloring() == {0: 1, 1: 1, 2: 1}


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_complete_graph(algorithm_class):
    edges = [(u, v) for u in range(4) for v in range(u + 1, 4)]
    algorithm = algorithm_class(build_graph(4, edges))
    algorithm.run()
    colors = algorithm.coloring()
    assert sorted(colors.values()) == [1, 2, 3, 4]


def test_greedy_largest_first_ordering_of_path():
    algorithm = BrownEnumerationVertexColoring(build_graph(3, [(0, 1), (1, 2)]))
    assert algorithm.greedy_largest_first_ordering() == [1, 0, 2]


def test_transitive_closure_of_path():
    algorithm = ChristofidesEnumerationVertexColoring(build_graph(3, [(0, 1), (1, 2)]))
    algorithm.run()
    assert algorithm.transitive_closure() == [
        [False, True, True],
        [False, False, False],
        [False, False, False],
    ]


def test_transitive_closure_before_run_raises():
    algorithm = ChristofidesEnumerationVertexColoring(build_graph(2, [(0, 1)]))
    with pytest.raises(AlgorithmNotRunError):
        algorithm.transitive_closure()


def test_input_graph_is_left_unchanged():
    graph = build_graph(4, [(0, 1), (0, 2), (1, 3), (2, 3)])
    algorithm = KormanEnumerationVertexColoring(graph)
    algorithm.run()
    assert graph.number_of_edges() == 4
    assert max(algorithm.coloring().values()) == 2