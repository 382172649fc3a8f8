import asyncio
import dataclasses
import time
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from .options import NormalizedRequest, RequestOptions, normalize_options

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Performance:
    """Wall-clock time of an invocation in milliseconds, retries included"""

    elapsed_time: float


def _elapsed_millis(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def _response_data(response: httpx.Response) -> Any:
    if "json" in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            pass
    return response.text


class HttpClient:
    """
    HTTP client with header shaping, retry, timing and request/response logging

    The options are normalized once on construction. Each ``invoke`` opens its
    own httpx.AsyncClient, so retry policy and logging never leak between
    clients.
    """

    def __init__(
        self,
        options: RequestOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.options = options or RequestOptions()
        self.request = normalize_options(self.options)
        self.transport = transport

    def get_options(self) -> RequestOptions:
        """Options as given to the constructor, before normalization"""
        return self.options

    async def invoke(self) -> httpx.Response:
        """
        Send the request, retrying per the retry policy

        Returns the response with ``performance`` attached. Errors are raised
        unchanged apart from the same ``performance`` attribute.
        """
        start = time.perf_counter()
        try:
            response, retry_count = await self._send_with_retry(start)
        except Exception as e:
            e.performance = Performance(elapsed_time=_elapsed_millis(start))
            raise

        response.performance = Performance(elapsed_time=_elapsed_millis(start))

        hook = self.request.logger
        if hook is not None:
            hook.log_response(
                {
                    "response": {
                        "status": response.status_code,
                        "headers": dict(response.headers),
                        "retry": {"retry_count": retry_count},
                        "data": _response_data(response),
                        "performance": dataclasses.asdict(response.performance),
                    }
                }
            )

        return response

    def _attempt_timeout(self, start: float) -> float:
        """Seconds available to the next attempt"""
        timeout = self.request.timeout / 1000
        if self.request.retry.should_reset_timeout:
            return timeout
        return max(timeout - (time.perf_counter() - start), 0.0)

    async def _send_within(
        self,
        client: httpx.AsyncClient,
        outgoing: httpx.Request,
        attempt_timeout: float,
    ) -> httpx.Response:
        """Send and read the response, cancelling the attempt once its window is over"""
        # httpx timeouts apply per connect/read/write step; this bounds the attempt as a whole
        try:
            async with asyncio.timeout(attempt_timeout):
                return await client.send(outgoing)
        except TimeoutError as e:
            raise httpx.ReadTimeout(
                f"Request exceeded timeout of {self.request.timeout}ms",
                request=outgoing,
            ) from e

    def _retry_delay(self, error: Exception, retry_count: int, start: float) -> float | None:
        """Seconds to wait before the next attempt, or None when the error is final"""
        retry = self.request.retry
        if retry_count >= retry.count or not retry.condition(error):
            return None

        delay = retry.delay(retry_count + 1) / 1000

        # Shared timeout: don't start an attempt that has no time left
        if not retry.should_reset_timeout:
            remaining = self.request.timeout / 1000 - (time.perf_counter() - start)
            if delay >= remaining:
                return None

        return delay

    async def _send_with_retry(self, start: float) -> tuple[httpx.Response, int]:
        request: NormalizedRequest = self.request
        hook = request.logger
        retry_count = 0

        async with httpx.AsyncClient(
            transport=self.transport,
            auth=request.auth,
            follow_redirects=True,
        ) as client:
            while True:
                attempt_timeout = self._attempt_timeout(start)
                outgoing = client.build_request(**request.transport_kwargs(), timeout=attempt_timeout)

                if hook is not None:
                    hook.log_request(
                        {
                            "request": {
                                "url": str(outgoing.url),
                                "method": outgoing.method,
                                "headers": dict(outgoing.headers),
                                "data": request.data,
                            }
                        }
                    )

                try:
                    response = await self._send_within(client, outgoing, attempt_timeout)
                    response.raise_for_status()
                    return response, retry_count

                except httpx.HTTPError as e:
                    if hook is not None:
                        hook.log_error({"error": e})

                    delay = self._retry_delay(e, retry_count, start)
                    if delay is None:
                        logger.error(
                            "HTTP request failed",
                            method=request.method,
                            url=request.url,
                            attempts=retry_count + 1,
                            error=str(e),
                        )
                        raise

                    retry_count += 1
                    logger.warning(
                        "HTTP request failed, retrying",
                        method=request.method,
                        url=request.url,
                        attempt=retry_count,
                        max_attempts=request.retry.count + 1,
                        error=str(e),
                        backoff_seconds=delay,
                    )
                    await asyncio.sleep(delay)


def create_http_client(
    options: RequestOptions | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    **fields: Any,
) -> HttpClient:
    """Factory function to create HTTP client from options and/or option fields"""
    if options is None:
        options = RequestOptions(**fields)
    elif fields:
        options = dataclasses.replace(options, **fields)
    return HttpClient(options, transport=transport)
