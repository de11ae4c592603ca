"""
Observability helpers for the Journal backend.

Usage
-----
>>> from journal.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Settings updated", fields=["site_name"])
"""

from journal.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
