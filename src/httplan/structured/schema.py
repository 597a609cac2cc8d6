"""Decoder abstractions turning response bytes into typed values."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from httplan.kernel.errors import DecodeError
from httplan.structured.codec import parse_json_bytes

T = TypeVar("T")


class ResponseDecoder(Protocol[T]):
    """Protocol for response body decoders."""

    def decode(self, data: bytes) -> T:
        """Decode the raw body.

        Raises:
            Exception: If decoding fails
        """
        ...

    def describe(self) -> str:
        """Return a human-readable description for debugging/display."""
        ...


@dataclass(frozen=True)
class PydanticDecoder(ResponseDecoder[T]):
    """Decoder validating JSON against any type pydantic understands.

    Works for BaseModel subclasses, dataclasses and generic containers
    such as ``list[Person]``.
    """

    model: Any
    _adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.model))

    def decode(self, data: bytes) -> T:
        try:
            return self._adapter.validate_json(data)
        except ValidationError as e:
            raise DecodeError(
                f"Response does not match {self.describe()}: {e.error_count()} validation error(s)",
                data,
            ) from e

    def describe(self) -> str:
        return f"PydanticDecoder({getattr(self.model, '__name__', repr(self.model))})"


@dataclass(frozen=True)
class CallableDecoder(ResponseDecoder[T]):
    """Decoder that parses JSON and hands the document to a callable.

    The callable should raise if the document is unacceptable.
    """

    fn: Callable[[Any], T]
    _description: str | None = None

    def decode(self, data: bytes) -> T:
        return self.fn(parse_json_bytes(data))

    def describe(self) -> str:
        if self._description:
            return self._description
        return getattr(self.fn, "__name__", repr(self.fn))
