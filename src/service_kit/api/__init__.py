"""FastAPI bootstrapping with correlation, security headers and API docs."""

from .bootstrapper import ApiBootstrapper
from .docs import install_api_docs, load_api_spec
from .errors import ApiBootstrapError, ApiSpecError

__all__ = [
    "ApiBootstrapper",
    "load_api_spec",
    "install_api_docs",
    "ApiBootstrapError",
    "ApiSpecError",
]
