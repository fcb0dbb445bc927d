"""Bounded redirect loop listing the functions deployed on a gateway.

The loop sends GET requests to the listing endpoint, one at a time, and
decides after each response whether to stop or to follow a redirect:

    200        decode the body and return it
    401        AuthRequiredError, never retried
    307/308    re-issue the request at the Location header, verbatim
    other      UnexpectedStatusError, with the body text when readable
    transport  ConnectionFailureError, never retried

At most ``MAX_ATTEMPTS + 1`` requests are sent per call, so a redirect cycle
cannot keep the loop running. The namespace parameter only scopes the first
request; a redirect's location is used as given, resolved by the issuer
against the URL that answered with the redirect.

Examples:
    Listing through an issuer::

        from faas_gateway_client.config import GatewayConfig
        from faas_gateway_client.context import RequestContext
        from faas_gateway_client.core.redirect_loop import fetch_list
        from faas_gateway_client.issuer.httpx_issuer import HttpxRequestIssuer

        async with HttpxRequestIssuer(GatewayConfig()) as issuer:
            functions = await fetch_list(issuer, RequestContext(timeout=10), "openfaas-fn")
"""

import time

from pydantic import ValidationError

from faas_gateway_client.context import RequestContext
from faas_gateway_client.core.outcome import (
    OtherStatus,
    Redirect,
    ResponseOutcome,
    Success,
    TransportFailure,
    Unauthorized,
    classify_response,
)
from faas_gateway_client.exceptions import (
    AuthRequiredError,
    ConnectionFailureError,
    ContextDoneError,
    DecodeError,
    GatewayError,
    TooManyRedirectsError,
    TransportFailureError,
    UnexpectedStatusError,
)
from faas_gateway_client.issuer.base import RequestIssuer
from faas_gateway_client.models import FunctionStatus, decode_function_list
from faas_gateway_client.observability.logging import get_logger
from faas_gateway_client.observability.metrics import record_attempt, record_list_call
from faas_gateway_client.utils.urls import SYSTEM_PATH, namespaced_location

logger = get_logger(__name__)

# Attempt counter ceiling; the loop gives up once the counter exceeds it
MAX_ATTEMPTS = 6

# Characters of an undecodable body kept in DecodeError
BODY_EXCERPT_CHARS = 256


async def _attempt(
    issuer: RequestIssuer,
    location: str,
    context: RequestContext,
    relative_to: str | None,
) -> ResponseOutcome:
    """Send one request and classify it. The response is closed on return."""
    try:
        async with issuer.send("GET", location, context, relative_to=relative_to) as response:
            return await classify_response(response)
    except TransportFailureError as e:
        return TransportFailure(e)


def _decode(body: bytes, gateway_url: str) -> list[FunctionStatus]:
    try:
        return decode_function_list(body)
    except ValidationError as e:
        excerpt = body[:BODY_EXCERPT_CHARS].decode("utf-8", errors="replace")
        raise DecodeError(excerpt, gateway_url, cause=e) from e


async def fetch_list(
    issuer: RequestIssuer,
    context: RequestContext | None = None,
    namespace: str = "",
) -> list[FunctionStatus]:
    """List the functions deployed on the issuer's gateway.

    Args:
        issuer: Sends single requests to the gateway without following
            redirects
        context: Cancellation and deadline token checked before and during
            every attempt (default: no deadline)
        namespace: Optional namespace to scope the listing to

    Returns:
        The function statuses, in the order the gateway returned them

    Raises:
        TooManyRedirectsError: If the gateway kept redirecting
        AuthRequiredError: If the gateway answered 401
        UnexpectedStatusError: If the gateway answered another status
        DecodeError: If a 200 body is not a list of function statuses
        ConnectionFailureError: On transport failure, or if the context was
            cancelled or expired
    """
    if context is None:
        context = RequestContext.background()

    gateway_url = issuer.gateway_url
    location = namespaced_location(SYSTEM_PATH, namespace)
    relative_to: str | None = None
    attempts = 0
    started = time.monotonic()
    log = logger.bind(gateway_url=gateway_url, namespace=namespace or None)

    try:
        while True:
            if attempts > MAX_ATTEMPTS:
                raise TooManyRedirectsError(attempts, gateway_url)

            try:
                context.raise_if_done()
                attempts += 1
                log.debug("gateway.list.attempt", location=location, attempt=attempts)
                outcome = await context.run(_attempt(issuer, location, context, relative_to))
            except ContextDoneError as e:
                raise ConnectionFailureError(gateway_url, cause=e, cancelled=True) from e

            record_attempt(outcome.name, outcome.status_code)

            if isinstance(outcome, Success):
                functions = _decode(outcome.body, gateway_url)
                elapsed = time.monotonic() - started
                record_list_call("success", attempts, elapsed)
                log.info(
                    "gateway.list.completed",
                    attempts=attempts,
                    functions=len(functions),
                    duration_ms=int(elapsed * 1000),
                )
                return functions

            if isinstance(outcome, Redirect):
                log.info(
                    "gateway.list.redirect",
                    status_code=outcome.status_code,
                    location=outcome.location,
                    attempt=attempts,
                )
                location = outcome.location
                relative_to = outcome.source_url
                continue

            if isinstance(outcome, Unauthorized):
                raise AuthRequiredError(gateway_url)

            if isinstance(outcome, OtherStatus):
                raise UnexpectedStatusError(
                    outcome.status_code,
                    gateway_url,
                    body=outcome.body,
                    detail=outcome.detail,
                )

            if isinstance(outcome, TransportFailure):
                raise ConnectionFailureError(gateway_url, cause=outcome.cause) from outcome.cause

            raise RuntimeError(f"Unexpected response outcome: {outcome!r}")

    except GatewayError as e:
        elapsed = time.monotonic() - started
        record_list_call(type(e).__name__, attempts, elapsed)
        log.warning(
            "gateway.list.failed",
            attempts=attempts,
            error=e.message,
            error_type=type(e).__name__,
        )
        raise
