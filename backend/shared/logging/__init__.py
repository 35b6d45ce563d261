"""Logging configuration and utilities."""

from backend.shared.logging.config import setup_logging, log_refresh_event, StructuredFormatter

__all__ = [
    "setup_logging",
    "log_refresh_event",
    "StructuredFormatter",
]
