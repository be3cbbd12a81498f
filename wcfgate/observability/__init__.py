"""Observability - structured logging and timing helpers.

Submodules:
    logging: Structured JSON logging formatter and timing utilities
"""

from wcfgate.observability.logging import (
    StructuredFormatter,
    configure_logging,
    log_event,
    timed_operation,
)

__all__ = [
    "StructuredFormatter",
    "configure_logging",
    "log_event",
    "timed_operation",
]
