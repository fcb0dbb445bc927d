"""Public client for a FaaS gateway.

GatewayClient ties a GatewayConfig, a request issuer and the listing loop
together. It is the entry point most callers need.

Examples:
    Listing functions::

        from faas_gateway_client import GatewayClient, GatewayConfig, RequestContext

        config = GatewayConfig(gateway_url="http://127.0.0.1:8080", token="...")

        async with GatewayClient(config) as client:
            for function in await client.list_functions(RequestContext(timeout=30)):
                print(function.name, function.available_replicas)

    Using a custom issuer::

        client = GatewayClient(issuer=my_issuer)
        functions = await client.list_functions(namespace="openfaas-fn")
"""

from faas_gateway_client.config import GatewayConfig
from faas_gateway_client.context import RequestContext
from faas_gateway_client.core.redirect_loop import fetch_list
from faas_gateway_client.issuer.base import RequestIssuer
from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer
from faas_gateway_client.models import FunctionStatus


class GatewayClient:
    """Client for one FaaS gateway.

    Attributes:
        config: Gateway configuration
        issuer: Request issuer used for every call
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        issuer: RequestIssuer | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Gateway configuration (uses defaults if not provided)
            issuer: Request issuer; an HttpxRequestIssuer built from
                ``config`` is used if not provided, and closed by aclose()
        """
        self.config = config or GatewayConfig()
        self._owns_issuer = issuer is None
        self.issuer: RequestIssuer = issuer or HttpxRequestIssuer(self.config)

    @property
    def gateway_url(self) -> str:
        return self.issuer.gateway_url

    async def list_functions(
        self,
        context: RequestContext | None = None,
        namespace: str = "",
    ) -> list[FunctionStatus]:
        """List the functions deployed on the gateway.

        Args:
            context: Cancellation and deadline token (default: no deadline)
            namespace: Optional namespace to scope the listing to

        Returns:
            The function statuses, in gateway order

        Raises:
            GatewayError: A subclass describing the failure
        """
        return await fetch_list(self.issuer, context, namespace)

    async def aclose(self) -> None:
        """Close the issuer if this client created it."""
        if self._owns_issuer and isinstance(self.issuer, HttpxRequestIssuer):
            await self.issuer.aclose()

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
