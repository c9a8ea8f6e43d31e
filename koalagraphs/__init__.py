"""Graph algorithms: vertex coloring, independent and dominating sets, maximum flow."""

__version__ = "0.1.0"

__all__ = [
    "graph",
    "dynamic_tree",
    "edge_designator",
    "maximum_flow",
    "greedy_coloring",
    "exact_coloring",
    "independent_set",
    "branching_independent_set",
    "dominating_set",
]