"""JSON bodies for endpoints.

This module provides the encoder used for request bodies and the
decoders used by JSON endpoints.
"""

from .codec import encode_json, parse_json_bytes
from .schema import CallableDecoder, PydanticDecoder, ResponseDecoder

__all__ = [
    "ResponseDecoder",
    "PydanticDecoder",
    "CallableDecoder",
    "encode_json",
    "parse_json_bytes",
]
