"""httpx-backed request issuer.

HttpxRequestIssuer wraps one ``httpx.AsyncClient`` configured for a single
gateway. It resolves the first location against the gateway URL and redirect
locations against the URL that answered with the redirect. It disables
redirect following and turns httpx transport errors into
TransportFailureError.

Credentials are attached per request, and only when the request targets the
gateway's own scheme, host and port. A redirect to another origin is
followed without them.

The client is safe to share between concurrent listing calls; connection
pooling is left to httpx.

Examples:
    Issuing a request::

        from faas_gateway_client.config import GatewayConfig
        from faas_gateway_client.context import RequestContext
        from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer

        async with HttpxRequestIssuer(GatewayConfig()) as issuer:
            async with issuer.send("GET", "/system/functions", RequestContext()) as response:
                print(response.status_code)

    Testing against an in-process gateway::

        transport = httpx.ASGITransport(app=fake_gateway)
        issuer = HttpxRequestIssuer(GatewayConfig(), transport=transport)
"""

from collections.abc import AsyncIterator, Generator, Mapping
from contextlib import asynccontextmanager
from typing import Any

import httpx

from faas_gateway_client.config import GatewayConfig
from faas_gateway_client.context import RequestContext
from faas_gateway_client.exceptions import TransportFailureError
from faas_gateway_client.observability.logging import get_logger

logger = get_logger(__name__)

# httpx errors that mean the exchange itself broke
TRANSPORT_ERRORS = (httpx.RequestError, httpx.StreamError, httpx.InvalidURL)


class BearerAuth(httpx.Auth):
    """Send a gateway token as ``Authorization: Bearer <token>``."""

    def __init__(self, token: str) -> None:
        self._header = f"Bearer {token}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._header
        yield request


def _origin(url: httpx.URL) -> tuple[str, str, int | None]:
    # httpx reports default ports as None
    return url.scheme, url.host, url.port


class HttpxIssuedResponse:
    """Raw gateway response backed by a streaming ``httpx.Response``.

    Attributes:
        status_code: HTTP status code
        headers: Case-insensitive response headers
        url: Absolute URL the request was sent to
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.status_code = response.status_code
        self.url = str(response.url)
        self.headers: Mapping[str, str] = response.headers

    async def read(self) -> bytes:
        """Read the full body, translating stream failures.

        Raises:
            TransportFailureError: If reading the body fails.
        """
        try:
            return await self._response.aread()
        except TRANSPORT_ERRORS as e:
            raise TransportFailureError(
                f"cannot read response body from {self._response.url}: {e}",
                cause=e,
            ) from e


class HttpxRequestIssuer:
    """Request issuer sending through ``httpx.AsyncClient``.

    Attributes:
        config: Gateway configuration
        gateway_url: Base URL of the gateway
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the issuer.

        Args:
            config: Gateway configuration
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
                or ``httpx.ASGITransport`` in tests
        """
        self.config = config
        self.gateway_url = config.gateway_url

        self._origin = _origin(httpx.URL(config.gateway_url))
        self._auth: httpx.Auth | None = None
        if config.token is not None:
            self._auth = BearerAuth(config.token)
        elif config.username is not None and config.password is not None:
            self._auth = httpx.BasicAuth(config.username, config.password)

        client_kwargs: dict[str, Any] = {
            "base_url": config.gateway_url,
            "headers": {"User-Agent": config.user_agent},
            "timeout": config.timeout_seconds,
            "verify": not config.tls_insecure,
            "follow_redirects": False,
        }
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)

    def _request_timeout(self, context: RequestContext) -> float:
        remaining = context.remaining()
        if remaining is None:
            return self.config.timeout_seconds
        return min(self.config.timeout_seconds, remaining)

    @asynccontextmanager
    async def send(
        self,
        method: str,
        location: str,
        context: RequestContext,
        body: bytes | None = None,
        relative_to: str | None = None,
    ) -> AsyncIterator[HttpxIssuedResponse]:
        """Send one request and yield its raw response.

        The response stream is closed when the block exits. Credentials go
        out only when the resolved URL is on the gateway's origin.

        Args:
            method: HTTP method
            location: Path relative to the gateway, or an absolute URL
            context: The request context bounding this request
            body: Optional request body
            relative_to: URL that answered with the redirect to ``location``;
                None resolves ``location`` against the gateway URL

        Yields:
            The raw response, redirects included

        Raises:
            TransportFailureError: If the request could not be sent
        """
        try:
            target = location if relative_to is None else httpx.URL(relative_to).join(location)
            request = self._client.build_request(
                method,
                target,
                content=body,
                timeout=self._request_timeout(context),
            )
            auth = self._auth if _origin(request.url) == self._origin else None
            if auth is None and self._auth is not None:
                logger.debug(
                    "gateway.request.credentials_withheld",
                    method=method,
                    url=str(request.url),
                )
            response = await self._client.send(
                request,
                auth=auth,
                stream=True,
                follow_redirects=False,
            )
        except TRANSPORT_ERRORS as e:
            logger.debug(
                "gateway.request.failed",
                method=method,
                location=location,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportFailureError(
                f"cannot send {method} {location} to {self.gateway_url}: {e}",
                cause=e,
            ) from e

        logger.debug(
            "gateway.request.sent",
            method=method,
            url=str(request.url),
            status_code=response.status_code,
        )

        try:
            yield HttpxIssuedResponse(response)
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client and release connections."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxRequestIssuer":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
