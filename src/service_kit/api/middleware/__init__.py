"""Request/response middleware installed by the API bootstrapper."""

from .correlation import CorrelationMiddleware
from .security import DEFAULT_SECURITY_HEADERS, SecurityHeadersMiddleware

__all__ = [
    "CorrelationMiddleware",
    "SecurityHeadersMiddleware",
    "DEFAULT_SECURITY_HEADERS",
]
