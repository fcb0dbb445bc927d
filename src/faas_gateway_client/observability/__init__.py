"""Observability utilities for the FaaS gateway client.

This package provides:
- Prometheus metrics for listing calls and individual attempts
- Structured logging with contextual information
"""

from faas_gateway_client.observability.logging import configure_logging, get_logger
from faas_gateway_client.observability.metrics import (
    record_attempt,
    record_list_call,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "record_attempt",
    "record_list_call",
]
