"""Endpoint - the description of one HTTP call and how to read its response."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from httplan.kernel.errors import EndpointBuildError, NoDataError
from httplan.kernel.request import (
    DEFAULT_TIMEOUT,
    ContentType,
    Method,
    RawResponse,
    Request,
    build_url,
    expected_200_to_300,
    merge_headers,
)
from httplan.kernel.result import Result
from httplan.structured import PydanticDecoder, ResponseDecoder, encode_json

if TYPE_CHECKING:
    from httplan.combinators.ops import CombinedEndpoint
    from httplan.kernel.env import Env

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

Parse = Callable[[bytes | None, RawResponse | None], Result[A]]
StatusPredicate = Callable[[int], bool]


def _parse_nothing(_data: bytes | None, _response: RawResponse | None) -> Result[None]:
    return Result.Success(None)


def _decoding(decoder: ResponseDecoder[A]) -> Parse[A]:
    def parse(data: bytes | None, _response: RawResponse | None) -> Result[A]:
        if not data:
            return Result.Failure(NoDataError())
        try:
            return Result.Success(decoder.decode(data))
        except Exception as exc:
            return Result.Failure(exc)

    return parse


@dataclass(frozen=True)
class Endpoint(Generic[A]):
    """This describes an endpoint returning `A` values.

    It contains both a request and a way to parse the response. Endpoints
    are values: every transformation returns a new Endpoint.

    Attributes:
        request: The request for this endpoint
        parse: Turns the raw body and response into a Result[A]
        expected_status: If this returns False for a status code, loading
            fails with WrongStatusCodeError and parse is never called
    """

    request: Request
    parse: Parse[A]
    expected_status: StatusPredicate = expected_200_to_300

    @classmethod
    def build(
        cls,
        method: Method | str,
        url: str,
        *,
        parse: Parse[A],
        accept: ContentType | str | None = None,
        content_type: ContentType | str | None = None,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_200_to_300,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Endpoint[A]:
        """Create a new Endpoint.

        Args:
            method: The HTTP method
            url: The endpoint's URL
            parse: Converts a response into an `A`
            accept: The content type for the `Accept` header
            content_type: The content type for the `Content-Type` header
            body: The body of the request
            headers: Additional headers; these win over accept/content_type
            expected_status: The status codes that are expected
            timeout: The timeout for this request, in seconds
            query: Query parameters to append to the URL

        Raises:
            EndpointBuildError: If the inputs cannot form a valid request
        """
        try:
            http_method = Method(str(method).upper())
        except ValueError as exc:
            raise EndpointBuildError(f"Unsupported HTTP method: {method!r}", exc) from exc
        if timeout <= 0:
            raise EndpointBuildError(f"Timeout must be positive, got {timeout}")

        request = Request(
            method=http_method,
            url=build_url(url, query),
            headers=merge_headers(
                {"Accept": str(accept)} if accept else None,
                {"Content-Type": str(content_type)} if content_type else None,
                headers,
            ),
            body=body,
            timeout=timeout,
        )
        return cls(request=request, parse=parse, expected_status=expected_status)

    @classmethod
    def empty(
        cls,
        method: Method | str,
        url: str,
        *,
        accept: ContentType | str | None = None,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_200_to_300,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Endpoint[None]:
        """Create an endpoint whose response carries no payload."""
        return Endpoint.build(
            method,
            url,
            parse=_parse_nothing,
            accept=accept,
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    @classmethod
    def send_json(
        cls,
        method: Method | str,
        url: str,
        body: Any,
        *,
        accept: ContentType | str | None = ContentType.JSON,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_200_to_300,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Endpoint[None]:
        """Create an endpoint that sends `body` as JSON and ignores the response body."""
        return Endpoint.build(
            method,
            url,
            parse=_parse_nothing,
            accept=accept,
            content_type=ContentType.JSON,
            body=encode_json(body),
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    @classmethod
    def json(
        cls,
        method: Method | str,
        url: str,
        model: type[A] | Any = None,
        *,
        body: Any = None,
        decoder: ResponseDecoder[A] | None = None,
        accept: ContentType | str | None = ContentType.JSON,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_200_to_300,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Endpoint[A]:
        """Create an endpoint decoding a JSON response into `model`.

        If `body` is given it is encoded as JSON and Content-Type is set.
        A response without a body fails with NoDataError; the decoder is
        not called.

        Args:
            model: Any type pydantic can validate (ignored if `decoder` is given)
            decoder: A custom decoder, e.g. CallableDecoder
        """
        if decoder is None:
            if model is None:
                raise TypeError("Endpoint.json() needs a model or a decoder")
            decoder = PydanticDecoder(model)
        return Endpoint.build(
            method,
            url,
            parse=_decoding(decoder),
            accept=accept,
            content_type=ContentType.JSON if body is not None else None,
            body=encode_json(body) if body is not None else None,
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    def map(self, func: Callable[[A], B]) -> Endpoint[B]:
        """Transform the parsed value. Failures pass through unchanged."""
        parse = self.parse

        def mapped(data: bytes | None, response: RawResponse | None) -> Result[B]:
            return parse(data, response).map(func)

        return Endpoint(request=self.request, parse=mapped, expected_status=self.expected_status)

    def flat_map_result(self, func: Callable[[A], Result[B]]) -> Endpoint[B]:
        """Transform the parsed value with a function that may itself fail."""
        parse = self.parse

        def mapped(data: bytes | None, response: RawResponse | None) -> Result[B]:
            return parse(data, response).flat_map(func)

        return Endpoint(request=self.request, parse=mapped, expected_status=self.expected_status)

    compact_map = flat_map_result

    def with_expected_status(self, expected_status: StatusPredicate) -> Endpoint[A]:
        return replace(self, expected_status=expected_status)

    @property
    def combined(self) -> CombinedEndpoint[A]:
        """This endpoint as a one-node combined endpoint."""
        from httplan.combinators.ops import CombinedEndpoint

        return CombinedEndpoint.single(self)

    def flat_map(self, func: Callable[[A], CombinedEndpoint[B]]) -> CombinedEndpoint[B]:
        return self.combined.flat_map(func)

    def zip(self, other: Endpoint[B] | CombinedEndpoint[B]) -> CombinedEndpoint[tuple[A, B]]:
        return self.combined.zip(other)

    def zip_with(
        self,
        other: Endpoint[B] | CombinedEndpoint[B],
        combine: Callable[[A, B], C],
    ) -> CombinedEndpoint[C]:
        return self.combined.zip_with(other, combine)

    def run(self, env: Env) -> Awaitable[Result[A]]:
        """Load this endpoint through the environment's transport."""
        from httplan.runtime.loader import load_endpoint

        return load_endpoint(self, env)

    def __str__(self) -> str:
        return str(self.request)
