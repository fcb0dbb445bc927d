"""Request issuer protocol for the FaaS gateway client.

A request issuer builds and sends exactly one HTTP request to the gateway and
hands back the raw response. It must never follow redirects on its own: the
listing loop needs to see 307/308 responses to decide the next location.

The protocol keeps the listing loop independent of the HTTP library. The
packaged implementation is
:class:`faas_gateway_client.issuer.httpx_issuer.HttpxRequestIssuer`.

Examples:
    Implementing a custom issuer::

        from contextlib import asynccontextmanager

        class RecordingIssuer:
            gateway_url = "http://gateway:8080"

            def __init__(self, responses):
                self.responses = list(responses)
                self.locations = []

            @asynccontextmanager
            async def send(self, method, location, context, body=None, relative_to=None):
                self.locations.append(location)
                yield self.responses.pop(0)

    Using an issuer::

        async with issuer.send("GET", "/system/functions", context) as response:
            if response.status_code == 200:
                payload = await response.read()

Requirements:
    All RequestIssuer implementations MUST:

    1. **Leave redirects alone**: return 3xx responses as received.

    2. **Release on exit**: close the response stream when the context
       manager returned by send() exits, whether normally or by exception.

    3. **Translate transport errors**: raise TransportFailureError (with the
       original exception as ``cause``) for connection, timeout, DNS and
       stream failures, both from send() and from IssuedResponse.read().

    4. **Honour the request context**: never wait longer than the context's
       remaining time for a single request.

    5. **Resolve like a browser**: resolve ``location`` against the gateway
       URL when ``relative_to`` is None, and against ``relative_to`` (the URL
       that answered with the redirect) otherwise.

    6. **Keep credentials on the gateway**: attach authentication only to
       requests whose scheme, host and port match the gateway URL.
"""

from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from faas_gateway_client.context import RequestContext


@runtime_checkable
class IssuedResponse(Protocol):
    """Raw response to one issued request.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers with case-insensitive lookup.
        url: Absolute URL the request was sent to.
    """

    status_code: int
    url: str
    headers: Mapping[str, str]

    async def read(self) -> bytes:
        """Read the full response body.

        Returns:
            The body bytes.

        Raises:
            TransportFailureError: If the body stream fails.
        """
        ...


@runtime_checkable
class RequestIssuer(Protocol):
    """Sends single requests to one gateway.

    Attributes:
        gateway_url: Base URL of the gateway, used to resolve relative
            locations and to identify the gateway in error messages.
    """

    gateway_url: str

    def send(
        self,
        method: str,
        location: str,
        context: RequestContext,
        body: bytes | None = None,
        relative_to: str | None = None,
    ) -> AbstractAsyncContextManager[IssuedResponse]:
        """Send one request and expose its raw response.

        Args:
            method: HTTP method.
            location: Path relative to the gateway, or an absolute URL.
            context: The request context bounding this request.
            body: Optional request body.
            relative_to: Absolute URL a relative ``location`` is resolved
                against; None resolves it against the gateway URL.

        Returns:
            An async context manager yielding the response and closing it on
            exit.

        Raises:
            TransportFailureError: If the request could not be sent.
        """
        ...
