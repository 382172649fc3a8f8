"""
Shared library for HTTP services.

This library provides common functionality for:
- Bootstrapping FastAPI applications with standard middleware
- HTTP client utilities with retry, timing and logging
- Logging and configuration
"""

from .api import ApiBootstrapper
from .http import HttpClient, RequestOptions, RetryPolicy, create_http_client

__version__ = "1.0.0"

__all__ = [
    "ApiBootstrapper",
    "HttpClient",
    "RequestOptions",
    "RetryPolicy",
    "create_http_client",
]
