"""Kernel layer - endpoint descriptions and the values they exchange."""

from httplan.kernel.errors import (
    AggregatedError,
    DecodeError,
    EndpointBuildError,
    HttplanError,
    NoDataError,
    UnknownError,
    WrongStatusCodeError,
)
from httplan.kernel.request import (
    DEFAULT_TIMEOUT,
    ContentType,
    Method,
    RawResponse,
    Request,
    expected_200_to_300,
)
from httplan.kernel.result import Result
from httplan.kernel.trace import Evidence, Trace
from httplan.kernel.ports import TransportPort
from httplan.kernel.env import Env
from httplan.kernel.endpoint import Endpoint

__all__ = [
    "Endpoint",
    "Result",
    "Request",
    "RawResponse",
    "Method",
    "ContentType",
    "DEFAULT_TIMEOUT",
    "expected_200_to_300",
    # Env & ports
    "Env",
    "TransportPort",
    # Tracing
    "Trace",
    "Evidence",
    # Errors
    "HttplanError",
    "EndpointBuildError",
    "NoDataError",
    "UnknownError",
    "WrongStatusCodeError",
    "DecodeError",
    "AggregatedError",
]
