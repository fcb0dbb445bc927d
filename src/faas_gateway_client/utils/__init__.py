"""Utility modules for the FaaS gateway client."""

from .urls import (
    NAMESPACE_KEY,
    SYSTEM_PATH,
    add_query_params,
    namespaced_location,
)

__all__ = [
    "add_query_params",
    "namespaced_location",
    "SYSTEM_PATH",
    "NAMESPACE_KEY",
]
