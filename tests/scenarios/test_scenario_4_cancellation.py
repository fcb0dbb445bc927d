"""Scenario 4: Cancellation Tests

This module tests listing calls that are cut short:
- A deadline expiring while the gateway is slow abandons the request
- Cancelling the context from another task abandons the request
- A context that is already done sends nothing
- The deadline spans every attempt of a call, redirects included
- Cancelling the calling task propagates CancelledError
"""

import asyncio

import httpx
import pytest
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from faas_gateway_client import GatewayClient, GatewayConfig, RequestContext
from faas_gateway_client.exceptions import ConnectionFailureError
from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer

GATEWAY_URL = "http://gateway.local:8080"


class SlowGateway:
    """Gateway whose listing endpoint hangs until told otherwise."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.requests = 0
        self.completed = 0
        self.app = FastAPI()

        @self.app.get("/system/functions")
        async def list_functions(namespace: str | None = None):
            self.requests += 1
            if namespace == "moved":
                return RedirectResponse("/slow/functions", status_code=307)
            return await self._hang()

        @self.app.get("/slow/functions")
        async def slow_functions():
            self.requests += 1
            return await self._hang()

    async def _hang(self):
        self.started.set()
        await self.release.wait()
        self.completed += 1
        return [{"name": "figlet"}]


# Fixtures
@pytest.fixture
def gateway() -> SlowGateway:
    return SlowGateway()


@pytest.fixture
def client(gateway: SlowGateway) -> GatewayClient:
    config = GatewayConfig(gateway_url=GATEWAY_URL, timeout_seconds=30)
    issuer = HttpxRequestIssuer(config, transport=httpx.ASGITransport(app=gateway.app))
    return GatewayClient(config, issuer=issuer)


class TestDeadline:
    """Calls bounded by a context deadline."""

    @pytest.mark.asyncio
    async def test_deadline_abandons_slow_request(self, client: GatewayClient, gateway: SlowGateway):
        with pytest.raises(ConnectionFailureError) as exc_info:
            await client.list_functions(RequestContext(timeout=0.1))

        assert exc_info.value.cancelled is True
        assert "deadline exceeded" in exc_info.value.message
        assert gateway.requests == 1
        assert gateway.completed == 0

    @pytest.mark.asyncio
    async def test_deadline_spans_redirects(self, client: GatewayClient, gateway: SlowGateway):
        with pytest.raises(ConnectionFailureError) as exc_info:
            await client.list_functions(RequestContext(timeout=0.2), namespace="moved")

        assert exc_info.value.cancelled is True
        assert gateway.requests == 2
        assert gateway.completed == 0

    @pytest.mark.asyncio
    async def test_released_before_deadline(self, client: GatewayClient, gateway: SlowGateway):
        gateway.release.set()

        functions = await client.list_functions(RequestContext(timeout=5))

        assert [f.name for f in functions] == ["figlet"]
        assert gateway.completed == 1


class TestCancel:
    """Calls cancelled while in flight or before starting."""

    @pytest.mark.asyncio
    async def test_cancel_from_another_task(self, client: GatewayClient, gateway: SlowGateway):
        context = RequestContext()
        call = asyncio.create_task(client.list_functions(context))

        await asyncio.wait_for(gateway.started.wait(), timeout=5)
        context.cancel()

        with pytest.raises(ConnectionFailureError) as exc_info:
            await call

        assert exc_info.value.cancelled is True
        assert exc_info.value.message == (
            f"cannot connect to gateway on URL: {GATEWAY_URL} (request cancelled)"
        )
        assert gateway.completed == 0

    @pytest.mark.asyncio
    async def test_cancelled_context_sends_nothing(self, client: GatewayClient, gateway: SlowGateway):
        context = RequestContext()
        context.cancel()

        with pytest.raises(ConnectionFailureError) as exc_info:
            await client.list_functions(context)

        assert exc_info.value.cancelled is True
        assert gateway.requests == 0

    @pytest.mark.asyncio
    async def test_expired_context_sends_nothing(self, client: GatewayClient, gateway: SlowGateway):
        with pytest.raises(ConnectionFailureError):
            await client.list_functions(RequestContext(timeout=0))

        assert gateway.requests == 0

    @pytest.mark.asyncio
    async def test_task_cancellation_propagates(self, client: GatewayClient, gateway: SlowGateway):
        call = asyncio.create_task(client.list_functions())

        await asyncio.wait_for(gateway.started.wait(), timeout=5)
        call.cancel()

        with pytest.raises(asyncio.CancelledError):
            await call

        assert gateway.completed == 0
