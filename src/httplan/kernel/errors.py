"""Error types raised or returned by endpoint construction and loading."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httplan.kernel.request import RawResponse


class HttplanError(Exception):
    """Base class for all httplan errors."""


class EndpointBuildError(HttplanError):
    """Raised when the inputs of an endpoint cannot form a valid request."""

    def __init__(self, message: str, reason: BaseException | None = None) -> None:
        self.reason = reason
        super().__init__(message)


class NoDataError(HttplanError):
    """Signals that a response's body was absent where a value was expected."""

    def __init__(self) -> None:
        super().__init__("Response has no data")


class UnknownError(HttplanError):
    """Signals a response without a usable status code."""

    def __init__(self) -> None:
        super().__init__("Response has no status code")


class WrongStatusCodeError(HttplanError):
    """Signals that a response's status code was rejected.

    The raw response is kept so callers can inspect diagnostic bodies
    returned by the server.
    """

    def __init__(self, status_code: int, response: RawResponse | None = None) -> None:
        self.status_code = status_code
        self.response = response
        super().__init__(f"Unexpected status code: {status_code}")

    def __repr__(self) -> str:
        return f"WrongStatusCodeError(status_code={self.status_code})"


class DecodeError(HttplanError):
    """Error raised when a response body cannot be decoded.

    This error preserves the raw value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object) -> None:
        self.raw_value = raw_value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"DecodeError({super().__repr__()}, raw_value={self.raw_value!r})"


class AggregatedError(HttplanError):
    """An error wrapper that contains multiple errors.

    Nested aggregates are spliced in, so `errors` is always flat.
    """

    def __init__(self, errors: Iterable[BaseException]) -> None:
        flat: list[BaseException] = []
        for error in errors:
            if isinstance(error, AggregatedError):
                flat.extend(error.errors)
            else:
                flat.append(error)
        self.errors: tuple[BaseException, ...] = tuple(flat)
        super().__init__(f"{len(self.errors)} errors: " + "; ".join(repr(e) for e in self.errors))

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
