import uuid
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ...config import Settings, get_settings
from ...logging import get_logger, reset_correlation_id, set_correlation_id


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID and a logger to every request

    The correlation ID is taken from the correlation header, then from the
    global transaction header, and generated when neither is present. It is
    echoed back in the response under the correlation header.
    """

    def __init__(
        self,
        app: ASGIApp,
        name: str = "api",
        logger: Any = None,
        settings: Settings | None = None,
    ):
        super().__init__(app)
        self.name = name
        self.logger = logger
        self.settings = settings or get_settings()

    def _correlation_id(self, request: Request) -> str:
        return (
            request.headers.get(self.settings.correlation_id_header_name)
            or request.headers.get(self.settings.global_transaction_id_header_name)
            or str(uuid.uuid4())
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = self._correlation_id(request)

        logger = self.logger or get_logger(self.name, correlation_id=correlation_id)
        logger.info("Injecting logger and correlation id")

        request.state.logger = logger
        request.state.correlation_id = correlation_id

        token = set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[self.settings.correlation_id_header_name] = correlation_id
        return response
