from pathlib import Path
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings, get_settings
from ..logging import setup_logging
from .docs import install_api_docs, load_api_spec
from .middleware import CorrelationMiddleware, SecurityHeadersMiddleware

logger = structlog.get_logger(__name__)


class ApiBootstrapper:
    """
    Builds a FastAPI application with the standard middleware stack

    Middleware, outermost first: CORS, security headers, correlation ID and
    logger injection. When ``path_to_spec`` is given, the API document is
    served with Swagger UI under ``/api-docs``. With ``configure_logging`` the
    process-wide logging is set up from the settings before anything is logged.
    """

    def __init__(
        self,
        path_to_spec: str | Path | None = None,
        name: str = "api",
        logger: Any = None,
        settings: Settings | None = None,
        configure_logging: bool = False,
    ):
        self.path_to_spec = path_to_spec
        self.name = name
        self.logger = logger
        self.settings = settings
        self.configure_logging = configure_logging

    # NOTE: kept for backwards compatibility
    def create_app(self) -> FastAPI:
        return self.bootstrap()

    def bootstrap(self) -> FastAPI:
        """Create and configure FastAPI application"""
        settings = self.settings or get_settings()

        if self.configure_logging:
            setup_logging(self.name, level=settings.log_level, format_type=settings.log_format)

        # Load the document first so a bad path fails before any wiring
        doc = load_api_spec(self.path_to_spec) if self.path_to_spec else None

        app = FastAPI(title=self.name, debug=settings.debug, docs_url=None, redoc_url=None, openapi_url=None)

        # Starlette wraps in reverse order of registration
        app.add_middleware(CorrelationMiddleware, name=self.name, logger=self.logger, settings=settings)
        app.add_middleware(SecurityHeadersMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[settings.correlation_id_header_name],
        )

        if doc is not None:
            install_api_docs(app, doc, ingress_path=settings.ingress_path)

        logger.info("API bootstrapped", name=self.name, env=settings.env, api_docs=doc is not None)
        return app

    def get_logger(self) -> Any:
        return self.logger
