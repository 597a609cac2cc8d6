"""Request and response values exchanged with the transport port."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from httplan.kernel.errors import EndpointBuildError

DEFAULT_TIMEOUT: float = 10.0


class Method(StrEnum):
    """The HTTP method."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ContentType(StrEnum):
    """Built-in content types."""

    JSON = "application/json"
    XML = "application/xml"
    FORM_URL_ENCODED = "application/x-www-form-urlencoded"


def expected_200_to_300(code: int) -> bool:
    """Return True if `code` is in the 200..<300 range."""
    return 200 <= code < 300


@dataclass(frozen=True)
class Request:
    """A fully formed request. Immutable once built."""

    method: Method
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash((self.method, self.url, tuple(sorted(self.headers.items())), self.body, self.timeout))

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def __str__(self) -> str:
        body = self.body.decode("utf-8", errors="replace") if self.body else ""
        return f"{self.method} {self.url} {body}"


@dataclass(frozen=True)
class RawResponse:
    """What the transport hands back for one request.

    `status_code` is None when the transport got no usable status line.
    """

    status_code: int | None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    url: str | None = None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace") if self.body else ""


def build_url(url: str, query: Mapping[str, str] | None = None) -> str:
    """Append `query` to `url`, keeping any query string already present.

    Raises:
        EndpointBuildError: If the URL is not absolute or cannot be parsed
    """
    try:
        parts = urlsplit(url)
        _ = parts.port
    except ValueError as exc:
        raise EndpointBuildError(f"Invalid URL: {url!r}", exc) from exc
    if not parts.scheme or not parts.netloc:
        raise EndpointBuildError(f"URL must be absolute: {url!r}")
    if not query:
        return url

    encoded = urlencode(list(query.items()), quote_via=quote)
    merged = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit(parts._replace(query=merged))


def merge_headers(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right; names compare case-insensitively."""
    merged: dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        for name, value in source.items():
            for existing in [k for k in merged if k.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
    return merged
