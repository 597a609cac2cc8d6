"""JSON encoding/decoding helpers for request and response bodies."""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from httplan.kernel.errors import DecodeError, EndpointBuildError


def parse_json_bytes(data: bytes | str) -> Any:
    """Parse a JSON document.

    Raises:
        DecodeError: If the data is not valid JSON
    """
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e.msg} at position {e.pos}", data) from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid JSON encoding: {e.reason}", data) from e


def encode_json(body: Any) -> bytes:
    """Encode a request body as JSON bytes.

    Pydantic models, dataclasses, TypedDicts and plain containers are all
    accepted; the adapter is chosen from the runtime type of `body`.

    Raises:
        EndpointBuildError: If the body cannot be serialized
    """
    try:
        return TypeAdapter(type(body)).dump_json(body)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EndpointBuildError(f"Cannot encode body of type {type(body).__name__} as JSON", e) from e
