import random

import pytest

from koalagraphs.branching_independent_set import (
    MeasureAndConquerIndependentSet,
    Mis3IndependentSet,
    Mis4IndependentSet,
    Mis5IndependentSet,
)
from koalagraphs.graph import AlgorithmNotRunError, Graph
from koalagraphs.independent_set import BruteForceIndependentSet

ALGORITHMS = [
    Mis3IndependentSet,
    Mis4IndependentSet,
    Mis5IndependentSet,
    MeasureAndConquerIndependentSet,
]

GRAPHS = {
    "wheel_w8": (
        8,
        [
            (0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6), (6, 0),
            (7, 0), (7, 1), (7, 2), (7, 3), (7, 4), (7, 5), (7, 6),
        ],
        3,
    ),
    "utility_k33": (
        6,
        [(0, 3), (0, 4), (0, 5), (1, 3), (1, 4), (1, 5), (2, 3), (2, 4), (2, 5)],
        3,
    ),
    "petersen": (
        10,
        [
            (0, 1), (1, 2), (2, 3), (3, 4), (4, 0),
            (0, 5), (1, 6), (2, 7), (3, 8), (4, 9),
            (5, 7), (5, 8), (6, 8), (6, 9), (7, 9),
        ],
        4,
    ),
    "frucht": (
        12,
        [
            (0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6), (6, 0),
            (0, 7), (1, 8), (2, 8), (3, 9), (4, 9), (5, 10), (6, 10),
            (7, 8), (11, 7), (11, 9), (11, 10),
        ],
        5,
    ),
    "two_k5": (
        10,
        [
            (0, 1), (0, 2), (0, 3), (0, 4), (1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4),
            (5, 6), (5, 7), (5, 8), (5, 9), (6, 7), (6, 8), (6, 9), (7, 8), (7, 9), (8, 9),
        ],
        2,
    ),
    "testing_graph": (
        6,
        [(1, 2), (0, 3), (1, 3), (2, 3), (0, 4), (2, 4), (0, 5), (1, 5)],
        3,
    ),
}


def build_graph(n, edges, directed=True):
    graph = Graph(n, False, directed)
    for u, v in edges:
        graph.add_edge(u, v)
    return graph


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
@pytest.mark.parametrize("name", sorted(GRAPHS))
def test_simple_graphs(algorithm_class, name):
    n, edges, expected = GRAPHS[name]
    algorithm = algorithm_class(build_graph(n, edges))
    algorithm.run()
    result = algorithm.independent_set()
    for u, v in edges:
        assert not (u in result and v in result)
    assert len(result) == expected
    assert result <= set(range(n))


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_result_before_run_raises(algorithm_class):
    algorithm = algorithm_class(build_graph(3, [(0, 1)]))
    with pytest.raises(AlgorithmNotRunError):
        algorithm.independent_set()


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_empty_graph(algorithm_class):
    algorithm = algorithm_class(Graph(0))
    algorithm.run()
    assert algorithm.independent_set() == set()


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_isolated_nodes_are_all_taken(algorithm_class):
    algorithm = algorithm_class(Graph(5))
    algorithm.run()
    assert algorithm.independent_set() == {0, 1, 2, 3, 4}


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
@pytest.mark.parametrize(
    "n, edges, expected",
    [
        (5, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 0)], 2),
        (6, [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)], 3),
        (4, [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)], 1),
        (7, [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5), (0, 6)], 6),
    ],
)
def test_known_families(algorithm_class, n, edges, expected):
    algorithm = algorithm_class(build_graph(n, edges, directed=False))
    algorithm.run()
    algorithm.check()
    assert len(algorithm.independent_set()) == expected


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_graph_is_left_intact(algorithm_class):
    n, edges, _ = GRAPHS["frucht"]
    original = build_graph(n, edges, directed=False)
    algorithm = algorithm_class(original)
    before = {frozenset(e) for e in algorithm.graph.edges()}
    algorithm.run()
    assert {frozenset(e) for e in algorithm.graph.edges()} == before
    assert algorithm.graph.number_of_nodes() == n
    assert original.number_of_edges() == len(edges)


@pytest.mark.parametrize("algorithm_class", ALGORITHMS)
def test_matches_brute_force_on_random_graphs(algorithm_class):
    rng = random.Random(20240601)
    for _ in range(40):
        n = rng.randint(1, 9)
        probability = rng.choice([0.2, 0.4, 0.6])
        edges = [
            (u, v) for u in range(n) for v in range(u + 1, n) if rng.random() < probability
        ]
        graph = build_graph(n, edges, directed=False)
        brute = BruteForceIndependentSet(graph)
        brute.run()
        algorithm = algorithm_class(graph)
        algorithm.run()
        result = algorithm.independent_set()
        for u, v in edges:
            assert not (u in result and v in result)
        assert len(result) == len(brute.independent_set())