"""
Client for listing the functions deployed on a FaaS gateway.

This package provides a bounded, redirect-following request loop on top of
an httpx transport, decoding the gateway's function listing into typed
status records.
"""

__version__ = "0.1.0"

from faas_gateway_client.client import GatewayClient
from faas_gateway_client.config import GatewayConfig
from faas_gateway_client.context import RequestContext
from faas_gateway_client.core.redirect_loop import MAX_ATTEMPTS, fetch_list
from faas_gateway_client.exceptions import (
    AuthRequiredError,
    ConnectionFailureError,
    DecodeError,
    GatewayError,
    TooManyRedirectsError,
    UnexpectedStatusError,
)
from faas_gateway_client.models import FunctionStatus
from faas_gateway_client.utils.urls import NAMESPACE_KEY, SYSTEM_PATH

__all__ = [
    "__version__",
    "GatewayClient",
    "GatewayConfig",
    "RequestContext",
    "fetch_list",
    "MAX_ATTEMPTS",
    "FunctionStatus",
    "GatewayError",
    "TooManyRedirectsError",
    "AuthRequiredError",
    "UnexpectedStatusError",
    "DecodeError",
    "ConnectionFailureError",
    "SYSTEM_PATH",
    "NAMESPACE_KEY",
]
