"""httpx-backed transport port."""

from __future__ import annotations

from types import TracebackType

import httpx

from httplan.config.settings import HttplanSettings
from httplan.kernel.request import RawResponse, Request


def build_async_client(
    settings: HttplanSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` from settings.

    `transport` replaces the network layer, e.g. with `httpx.MockTransport`.
    """
    settings = settings or HttplanSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        limits=httpx.Limits(max_connections=settings.max_connections),
        transport=transport,
    )


class HttpxTransport:
    """TransportPort implementation on top of `httpx.AsyncClient`.

    A client passed in stays owned by the caller; a client built here from
    settings is closed by `aclose()` / leaving the `async with` block.
    httpx errors (timeouts, connection failures) propagate unchanged.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: HttplanSettings | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else build_async_client(settings)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, request: Request) -> RawResponse:
        response = await self._client.request(
            request.method.value,
            request.url,
            headers=dict(request.headers),
            content=request.body,
            timeout=request.timeout,
        )
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=str(response.url),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
