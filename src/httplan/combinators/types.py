"""Combinator tree nodes.

A tree is one of three node kinds. Sub-trees whose result type differs
from the root are held as ``Node[Any]``; the only code that reads those
values back is the closure built next to them in ``ops``, which captured
the concrete types when the node was created.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from httplan.kernel.endpoint import Endpoint

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class SingleNode(Generic[A]):
    """Load one endpoint."""

    endpoint: Endpoint[A]


@dataclass(frozen=True)
class SequenceNode(Generic[A]):
    """Load `first`, then the tree built from its value."""

    first: Node[Any]
    then: Callable[[Any], Node[A]]


@dataclass(frozen=True)
class ParallelNode(Generic[A]):
    """Load `left` and `right` concurrently and combine both values."""

    left: Node[Any]
    right: Node[Any]
    combine: Callable[[Any, Any], A]


Node = Union[SingleNode[A], SequenceNode[A], ParallelNode[A]]


def map_node(node: Node[A], func: Callable[[A], B]) -> Node[B]:
    """Transform the eventual value of `node`, keeping its shape.

    - single: the endpoint's parse is post-processed
    - sequence: the continuation's tree is mapped
    - parallel: the combine function is post-processed
    """
    if isinstance(node, SingleNode):
        return SingleNode(node.endpoint.map(func))
    if isinstance(node, SequenceNode):
        then = node.then
        return SequenceNode(node.first, lambda value: map_node(then(value), func))
    if isinstance(node, ParallelNode):
        combine = node.combine
        return ParallelNode(node.left, node.right, lambda left, right: func(combine(left, right)))
    raise TypeError(f"Unknown node kind: {type(node).__name__}")
