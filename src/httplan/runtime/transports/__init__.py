"""Transport port implementations."""

from .httpx_transport import HttpxTransport, build_async_client

__all__ = ["HttpxTransport", "build_async_client"]
