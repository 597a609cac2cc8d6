"""Port protocols for httplan - pure abstractions."""

from __future__ import annotations

from typing import Protocol

from httplan.kernel.request import RawResponse, Request


class TransportPort(Protocol):
    """HTTP transport port.

    One invocation per request, no implicit retries. Transport failures are
    raised; they are passed through to the caller unchanged.
    """

    async def send(self, request: Request) -> RawResponse: ...
