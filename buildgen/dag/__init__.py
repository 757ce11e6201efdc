"""
DAG Module

Build graph vocabulary: nodes, graphs, conditions, traversal and registry.
"""

from .node import (
    BaseGraph,
    BaseNode,
    Node,
    NodeCondition,
    all_of,
    find_by_name,
    gather_matching_input_names,
    gather_matching_inputs,
    gather_matching_inputs_transitive,
    implements,
    negate,
    node_kind,
)
from .registry import NodeRegistry
from .walker import GraphCycleError, VisitedSet, walk, walk_node, walk_roots

__all__ = [
    "BaseGraph",
    "BaseNode",
    "Node",
    "NodeCondition",
    "all_of",
    "find_by_name",
    "gather_matching_input_names",
    "gather_matching_inputs",
    "gather_matching_inputs_transitive",
    "implements",
    "negate",
    "node_kind",
    "NodeRegistry",
    "GraphCycleError",
    "VisitedSet",
    "walk",
    "walk_node",
    "walk_roots",
]
