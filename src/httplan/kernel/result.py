"""Core kernel abstractions - pure and dependency-free."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

V = TypeVar("V")
R = TypeVar("R")


@dataclass(frozen=True)
class Result(Generic[V]):
    """
    Outcome of loading an endpoint.

    Kinds:
    - success: The endpoint produced `value` (which may legitimately be None)
    - failure: The endpoint failed with `error`
    """

    kind: Literal["success", "failure"]
    value: V | None = None
    error: BaseException | None = None

    @staticmethod
    def Success(value: Any = None) -> Result[Any]:
        return Result(kind="success", value=value)

    @staticmethod
    def Failure(error: BaseException) -> Result[Any]:
        return Result(kind="failure", error=error)

    @property
    def is_success(self) -> bool:
        return self.kind == "success"

    @property
    def is_failure(self) -> bool:
        return self.kind == "failure"

    def map(self, func: Callable[[V], R]) -> Result[R]:
        if self.kind == "failure":
            return self  # type: ignore[return-value]
        return Result.Success(func(self.value))  # type: ignore[arg-type]

    def flat_map(self, func: Callable[[V], Result[R]]) -> Result[R]:
        if self.kind == "failure":
            return self  # type: ignore[return-value]
        return func(self.value)  # type: ignore[arg-type]

    def unwrap(self) -> V:
        """Return the value, raising the stored error on failure."""
        if self.kind == "failure":
            if self.error is None:
                raise ValueError("Failure result has no error.")
            raise self.error
        return self.value  # type: ignore[return-value]
