import logging

from .kernel import (
    DEFAULT_TIMEOUT,
    AggregatedError,
    ContentType,
    DecodeError,
    Endpoint,
    EndpointBuildError,
    Env,
    Evidence,
    HttplanError,
    Method,
    NoDataError,
    RawResponse,
    Request,
    Result,
    Trace,
    TransportPort,
    UnknownError,
    WrongStatusCodeError,
    expected_200_to_300,
)
from .combinators import CombinedEndpoint
from .config import HttplanSettings, configure_logging
from .runtime import HttpxTransport, execute, load, load_endpoint
from .structured import CallableDecoder, PydanticDecoder

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "Endpoint",
    "CombinedEndpoint",
    "Result",
    "Request",
    "RawResponse",
    "Method",
    "ContentType",
    "DEFAULT_TIMEOUT",
    "expected_200_to_300",
    # Loading
    "Env",
    "TransportPort",
    "HttpxTransport",
    "load",
    "load_endpoint",
    "execute",
    # Decoding
    "PydanticDecoder",
    "CallableDecoder",
    # Errors
    "HttplanError",
    "EndpointBuildError",
    "NoDataError",
    "UnknownError",
    "WrongStatusCodeError",
    "DecodeError",
    "AggregatedError",
    # Tracing & config
    "Trace",
    "Evidence",
    "HttplanSettings",
    "configure_logging",
]
