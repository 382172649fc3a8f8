"""HTTP client utilities with observability and retry support."""

from .client import HttpClient, Performance, create_http_client
from .hooks import CallableHook, LoggingHook, StructlogHook
from .options import Credentials, NormalizedRequest, RequestOptions, normalize_options
from .retry import (
    IDEMPOTENT_METHODS,
    RetryPolicy,
    is_idempotent_request_error,
    is_network_error,
    is_permanent_transport_error,
    is_retryable_error,
    linear_delay,
)

__all__ = [
    "HttpClient",
    "Performance",
    "create_http_client",
    "RequestOptions",
    "NormalizedRequest",
    "Credentials",
    "normalize_options",
    "RetryPolicy",
    "IDEMPOTENT_METHODS",
    "linear_delay",
    "is_network_error",
    "is_permanent_transport_error",
    "is_retryable_error",
    "is_idempotent_request_error",
    "LoggingHook",
    "StructlogHook",
    "CallableHook",
]
