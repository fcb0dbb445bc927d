"""Request issuers for the FaaS gateway client.

This package provides the issuer protocol consumed by the listing loop and
its httpx-backed implementation.
"""

from faas_gateway_client.issuer.base import IssuedResponse, RequestIssuer
from faas_gateway_client.issuer.httpx_issuer import HttpxIssuedResponse, HttpxRequestIssuer

__all__ = [
    "IssuedResponse",
    "RequestIssuer",
    "HttpxIssuedResponse",
    "HttpxRequestIssuer",
]
