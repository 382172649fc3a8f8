import socket
import ssl
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

# Methods that may be repeated without changing the outcome of the first success
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})

RetryCondition = Callable[[Exception], bool]
RetryDelay = Callable[[int], float]


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry settings for a single client

    Args:
        count: Number of retries after the first failed attempt
        condition: Predicate deciding whether an error is retried
        delay: Milliseconds to wait before the given (1-based) retry
        should_reset_timeout: Give every attempt a fresh timeout instead of
            sharing one timeout across all attempts
    """

    count: int = 0
    condition: RetryCondition | None = None
    delay: RetryDelay | None = None
    should_reset_timeout: bool = False

    @classmethod
    def from_value(cls, value: "RetryPolicy | dict[str, Any] | None") -> "RetryPolicy | None":
        """Accept a policy or a plain mapping with the same keys"""
        if value is None or isinstance(value, RetryPolicy):
            return value
        return cls(**value)

    def resolve(self, base_delay_millis: int) -> "RetryPolicy":
        """Fill in the default delay and condition"""
        return replace(
            self,
            condition=self.condition or is_idempotent_request_error,
            delay=self.delay or linear_delay(base_delay_millis),
        )


def linear_delay(base_delay_millis: int) -> RetryDelay:
    """Delay growing linearly with the retry number"""

    def delay(retry_attempt: int) -> float:
        return base_delay_millis * retry_attempt

    return delay


def _request_of(error: Exception) -> httpx.Request | None:
    try:
        return error.request
    except (AttributeError, RuntimeError):
        # httpx raises RuntimeError when the request was never attached
        return None


def _caused_by(error: BaseException, types: tuple[type[BaseException], ...]) -> bool:
    seen = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, types):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def is_permanent_transport_error(error: Exception) -> bool:
    """Failures a retry cannot fix: unsupported URL scheme, DNS lookup, TLS"""
    if isinstance(error, httpx.UnsupportedProtocol):
        return True
    return _caused_by(error, (socket.gaierror, ssl.SSLError))


def is_network_error(error: Exception) -> bool:
    """Retryable connection level failure without a response; timeouts are not included"""
    if not isinstance(error, httpx.TransportError) or isinstance(error, httpx.TimeoutException):
        return False
    return not is_permanent_transport_error(error)


def is_retryable_error(error: Exception) -> bool:
    """Network error or a 5xx response"""
    if isinstance(error, httpx.HTTPStatusError):
        return 500 <= error.response.status_code <= 599
    return is_network_error(error)


def is_idempotent_request_error(error: Exception) -> bool:
    """Default retry condition: retryable errors of idempotent requests only"""
    request = _request_of(error)
    if request is None or request.method.upper() not in IDEMPOTENT_METHODS:
        return False

    # DELETE with a payload is not treated as idempotent
    if request.method.upper() == "DELETE" and request.headers.get("content-length", "0") != "0":
        return False

    return is_retryable_error(error)
