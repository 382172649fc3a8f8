"""Structured logging utilities with correlation support."""

from .setup import (
    get_correlation_id,
    get_logger,
    reset_correlation_id,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
]
