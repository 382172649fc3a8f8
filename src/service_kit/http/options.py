from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from ..config import get_settings
from .hooks import LoggingHook
from .retry import RetryPolicy

logger = structlog.get_logger(__name__)

HEADER_NAMES = {
    "CONTENT_TYPE": "Content-Type",
    "AUTHORIZATION": "Authorization",
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class Credentials:
    """Username and password sent as HTTP basic auth"""

    username: str
    password: str


@dataclass
class RequestOptions:
    """
    Request configuration accepted by HttpClient

    Args:
        url: Absolute URL of the request
        method: HTTP method
        headers: Extra request headers
        bearer_token: Sent as ``Authorization: Bearer <token>``; wins over ``auth``
        auth: Basic auth credentials
        body: Request payload
        data: Request payload, takes precedence over ``body``
        content_type: Value of the Content-Type header unless ``headers`` already has one
        correlation_id: Propagated under the configured correlation-id header
        logger: Receives request, response and error events
        retry: Retry policy; defaults to the configured retry count
        timeout: Timeout in milliseconds; defaults to the configured timeout
        params: Query parameters
    """

    url: str | None = None
    method: str = "GET"
    headers: Mapping[str, str] | None = None
    bearer_token: str | None = None
    auth: Credentials | tuple[str, str] | None = None
    body: Any = None
    data: Any = None
    content_type: str | None = "application/json"
    correlation_id: str | None = None
    logger: LoggingHook | None = None
    retry: RetryPolicy | dict[str, Any] | None = None
    timeout: float | None = None
    params: Mapping[str, Any] | None = None


@dataclass
class NormalizedRequest:
    """Transport-ready request derived from RequestOptions and process-wide settings"""

    url: str | None
    method: str
    headers: httpx.Headers
    data: Any
    timeout: float  # milliseconds
    retry: RetryPolicy
    auth: tuple[str, str] | None = None
    params: Mapping[str, Any] | None = None
    logger: LoggingHook | None = field(default=None, repr=False)

    def is_form(self) -> bool:
        content_type = self.headers.get(HEADER_NAMES["CONTENT_TYPE"], "")
        return content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE

    def transport_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for httpx's build_request"""
        kwargs: dict[str, Any] = {
            "method": self.method,
            "url": self.url,
            "headers": self.headers,
        }
        if self.params:
            kwargs["params"] = self.params

        # Pre-encoded payloads go out byte-for-byte
        if isinstance(self.data, (str, bytes)):
            kwargs["content"] = self.data
        elif self.data is not None and self.is_form():
            kwargs["data"] = self.data
        elif self.data is not None:
            kwargs["json"] = self.data

        return kwargs


def _build_headers(options: RequestOptions, correlation_id_header_name: str) -> httpx.Headers:
    # httpx.Headers copies the caller's mapping and matches keys case-insensitively
    headers = httpx.Headers(options.headers or {})

    if options.content_type and HEADER_NAMES["CONTENT_TYPE"] not in headers:
        headers[HEADER_NAMES["CONTENT_TYPE"]] = options.content_type
    if options.bearer_token:
        headers[HEADER_NAMES["AUTHORIZATION"]] = f"Bearer {options.bearer_token}"
    if options.correlation_id:
        headers[correlation_id_header_name] = str(options.correlation_id)

    return headers


def _build_auth(options: RequestOptions) -> tuple[str, str] | None:
    if options.bearer_token or options.auth is None:
        return None
    if isinstance(options.auth, Credentials):
        return options.auth.username, options.auth.password
    username, password = options.auth
    return username, password


def normalize_options(options: RequestOptions) -> NormalizedRequest:
    """Merge request options with process-wide defaults; the options are left untouched"""
    settings = get_settings()

    retry = RetryPolicy.from_value(options.retry) or RetryPolicy(count=settings.http_retry_count)

    hook = options.logger
    if hook is not None and not isinstance(hook, LoggingHook):
        logger.warning("Ignoring logger without log_request/log_response/log_error", logger=repr(hook))
        hook = None

    return NormalizedRequest(
        url=options.url,
        method=options.method.upper(),
        headers=_build_headers(options, settings.correlation_id_header_name),
        data=options.data if options.data is not None else options.body,
        timeout=options.timeout if options.timeout is not None else settings.http_timeout_millis,
        retry=retry.resolve(settings.http_retry_delay_millis),
        auth=_build_auth(options),
        params=options.params,
        logger=hook,
    )
