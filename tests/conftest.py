"""
Pytest configuration and shared fixtures for faas_gateway_client tests.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from faas_gateway_client.config import GatewayConfig
from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer

GATEWAY_URL = "http://gateway.test:8080"


class ScriptedGateway:
    """httpx.MockTransport handler replaying canned responses in order.

    Items may be ``httpx.Response`` objects or exceptions to raise. Every
    received request is recorded.
    """

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request to {request.url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def paths(self) -> list[str]:
        """Path and query of every received request."""
        return [
            request.url.raw_path.decode("ascii") for request in self.requests
        ]


@pytest.fixture
def gateway_url() -> str:
    """Provide the gateway URL used by the scripted issuers."""
    return GATEWAY_URL


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Provide a gateway config pointing at the scripted gateway."""
    return GatewayConfig(gateway_url=GATEWAY_URL, timeout_seconds=5)


@pytest.fixture
def sample_functions() -> list[dict[str, Any]]:
    """Provide a listing payload as the gateway sends it."""
    return [
        {
            "name": "figlet",
            "image": "ghcr.io/openfaas/figlet:latest",
            "namespace": "openfaas-fn",
            "invocationCount": 12,
            "replicas": 1,
            "availableReplicas": 1,
            "envProcess": "figlet",
            "labels": {"faas_function": "figlet"},
        },
        {
            "name": "nodeinfo",
            "image": "ghcr.io/openfaas/nodeinfo:latest",
            "namespace": "openfaas-fn",
            "replicas": 2,
            "availableReplicas": 0,
        },
    ]


@pytest.fixture
def scripted(
    gateway_config: GatewayConfig,
) -> Callable[..., tuple[ScriptedGateway, HttpxRequestIssuer]]:
    """Build an issuer backed by a ScriptedGateway.

    Usage::

        gateway, issuer = scripted(httpx.Response(200, json=[]))
    """

    def factory(*responses: Any) -> tuple[ScriptedGateway, HttpxRequestIssuer]:
        gateway = ScriptedGateway(list(responses))
        issuer = HttpxRequestIssuer(gateway_config, transport=httpx.MockTransport(gateway))
        return gateway, issuer

    return factory

