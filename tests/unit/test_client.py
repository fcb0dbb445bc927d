"""Unit tests for GatewayClient."""

from contextlib import asynccontextmanager

import httpx
import pytest

from faas_gateway_client import GatewayClient, GatewayConfig, RequestContext
from faas_gateway_client.exceptions import AuthRequiredError
from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer


class StubResponse:
    def __init__(self, status_code, body=b"", headers=None, url="http://stub.test/system/functions"):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.url = url

    async def read(self):
        return self.body


class ListIssuer:
    """Issuer replaying StubResponses without any HTTP library."""

    gateway_url = "http://stub.test"

    def __init__(self, *responses):
        self.responses = list(responses)
        self.locations = []
        self.relative_to = []
        self.contexts = []
        self.open = 0

    @asynccontextmanager
    async def send(self, method, location, context, body=None, relative_to=None):
        self.locations.append(location)
        self.relative_to.append(relative_to)
        self.contexts.append(context)
        self.open += 1
        try:
            yield self.responses.pop(0)
        finally:
            self.open -= 1


class TestGatewayClient:
    """Test suite for GatewayClient."""

    def test_default_issuer_built_from_config(self, gateway_config):
        client = GatewayClient(gateway_config)
        assert isinstance(client.issuer, HttpxRequestIssuer)
        assert client.gateway_url == gateway_config.gateway_url

    def test_default_config(self):
        client = GatewayClient()
        assert client.config == GatewayConfig()

    @pytest.mark.asyncio
    async def test_list_functions_through_custom_issuer(self):
        issuer = ListIssuer(
            StubResponse(307, headers={"location": "/alt"}),
            StubResponse(200, b'[{"name": "figlet"}]'),
        )
        client = GatewayClient(issuer=issuer)
        context = RequestContext(timeout=5)

        functions = await client.list_functions(context, namespace="dev")

        assert [f.name for f in functions] == ["figlet"]
        assert issuer.locations == ["/system/functions?namespace=dev", "/alt"]
        assert issuer.relative_to == [None, "http://stub.test/system/functions"]
        assert issuer.contexts == [context, context]
        assert issuer.open == 0

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        client = GatewayClient(issuer=ListIssuer(StubResponse(401)))

        with pytest.raises(AuthRequiredError) as exc_info:
            await client.list_functions()

        assert exc_info.value.gateway_url == "http://stub.test"

    @pytest.mark.asyncio
    async def test_owned_issuer_closed(self, gateway_config):
        async with GatewayClient(gateway_config) as client:
            issuer = client.issuer
        assert issuer._client.is_closed is True  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_supplied_issuer_left_open(self, gateway_config):
        issuer = HttpxRequestIssuer(
            gateway_config,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
        )

        async with GatewayClient(issuer=issuer) as client:
            assert await client.list_functions() == []

        assert issuer._client.is_closed is False
        await issuer.aclose()
