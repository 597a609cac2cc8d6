"""CombinedEndpoint - one value describing several dependent or independent calls."""

# Combinators satisfy the following algebraic laws:
#
# 1. Functor identity: c.map(lambda x: x) == c
#
# 2. Functor composition: c.map(f).map(g) == c.map(lambda x: g(f(x)))
#    map never changes the shape of the tree, only its eventual value
#
# 3. Associativity: c.flat_map(f).flat_map(g) == c.flat_map(lambda x: f(x).flat_map(g))
#    Sequencing is associative
#
# 4. Zip symmetry: a.zip(b).map(lambda p: (p[1], p[0])) == b.zip(a)
#    Neither branch of a zip is loaded before the other


from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from httplan.kernel.endpoint import Endpoint
from httplan.kernel.result import Result

from .types import Node, ParallelNode, SequenceNode, SingleNode, map_node

if TYPE_CHECKING:
    from httplan.kernel.env import Env

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


@dataclass(frozen=True)
class CombinedEndpoint(Generic[A]):
    """This describes an endpoint that combines multiple endpoints.

    Build one from endpoints with `single`, `sequence`, `zipped`, or the
    instance combinators; load it with `httplan.load` / `httplan.execute`.
    A CombinedEndpoint holds no execution state and may be loaded many times.

    Passing an Endpoint as `node` wraps it in a single node.
    """

    node: Node[A]

    def __post_init__(self) -> None:
        if isinstance(self.node, Endpoint):
            object.__setattr__(self, "node", SingleNode(self.node))

    @staticmethod
    def single(endpoint: Endpoint[A]) -> CombinedEndpoint[A]:
        """Transform an Endpoint into a CombinedEndpoint."""
        return CombinedEndpoint(SingleNode(endpoint))

    @staticmethod
    def sequence(
        endpoint: Endpoint[A],
        transform: Callable[[A], Endpoint[B]],
    ) -> CombinedEndpoint[B]:
        """Combine two endpoints which are loaded one after another.

        Args:
            endpoint: The first endpoint
            transform: Takes the first value and builds the next endpoint
        """
        return CombinedEndpoint.single(endpoint).compact_map(transform)

    @staticmethod
    def zipped(
        lhs: Endpoint[A],
        rhs: Endpoint[B],
        combine: Callable[[A, B], C],
    ) -> CombinedEndpoint[C]:
        """Combine two endpoints which are loaded concurrently.

        Args:
            lhs: The endpoint
            rhs: The other endpoint
            combine: Combines both values into a `C`
        """
        return CombinedEndpoint.single(lhs).zip_with(rhs, combine)

    def map(self, func: Callable[[A], B]) -> CombinedEndpoint[B]:
        """Transform the result."""
        return CombinedEndpoint(map_node(self.node, func))

    def compact_map(self, transform: Callable[[A], Endpoint[B]]) -> CombinedEndpoint[B]:
        """Load this, then the endpoint built from its value."""

        def then(value: Any) -> Node[B]:
            return SingleNode(transform(cast(A, value)))

        return CombinedEndpoint(SequenceNode(self.node, then))

    def flat_map(self, transform: Callable[[A], CombinedEndpoint[B]]) -> CombinedEndpoint[B]:
        """Load this, then the combined endpoint built from its value."""

        def then(value: Any) -> Node[B]:
            return _lift(transform(cast(A, value))).node

        return CombinedEndpoint(SequenceNode(self.node, then))

    def zip(self, other: CombinedEndpoint[B] | Endpoint[B]) -> CombinedEndpoint[tuple[A, B]]:
        """Load this and `other` concurrently, pairing their values."""
        return self.zip_with(other, lambda a, b: (a, b))

    def zip_with(
        self,
        other: CombinedEndpoint[B] | Endpoint[B],
        combine: Callable[[A, B], C],
    ) -> CombinedEndpoint[C]:
        """Load this and `other` concurrently, combining their values."""

        def both(left: Any, right: Any) -> C:
            return combine(cast(A, left), cast(B, right))

        return CombinedEndpoint(ParallelNode(self.node, _lift(other).node, both))

    def run(self, env: Env) -> Awaitable[Result[A]]:
        """Load this combined endpoint through the environment's transport."""
        from httplan.runtime.loader import load

        return load(self, env)


def _lift(value: CombinedEndpoint[A] | Endpoint[A]) -> CombinedEndpoint[A]:
    if isinstance(value, Endpoint):
        return CombinedEndpoint.single(value)
    return value
