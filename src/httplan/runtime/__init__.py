"""Runtime - loading endpoints through concrete transports."""

from httplan.runtime.loader import execute, load, load_endpoint
from httplan.runtime.transports import HttpxTransport, build_async_client

__all__ = [
    "load",
    "load_endpoint",
    "execute",
    "HttpxTransport",
    "build_async_client",
]
