"""Combinators - composing endpoints into one loadable value."""

from .ops import CombinedEndpoint
from .types import Node, ParallelNode, SequenceNode, SingleNode, map_node

__all__ = [
    "CombinedEndpoint",
    "Node",
    "SingleNode",
    "SequenceNode",
    "ParallelNode",
    "map_node",
]
