"""Classification of single gateway responses.

Each attempt of the listing loop ends in exactly one outcome:

    Success            200, body read
    Unauthorized       401
    Redirect           307/308 with a Location header
    OtherStatus        anything else, body text when readable
    TransportFailure   the request or the body read failed

The loop dispatches on the outcome type; classification itself never raises
for a response it received.
"""

from faas_gateway_client.exceptions import TransportFailureError
from faas_gateway_client.issuer.base import IssuedResponse

STATUS_OK = 200
STATUS_UNAUTHORIZED = 401
REDIRECT_STATUSES = frozenset({307, 308})


class Success:
    """A 200 response whose body was read in full."""

    name = "success"

    def __init__(self, body: bytes) -> None:
        self.status_code = STATUS_OK
        self.body = body


class Unauthorized:
    """A 401 response."""

    name = "unauthorized"

    def __init__(self) -> None:
        self.status_code = STATUS_UNAUTHORIZED


class Redirect:
    """A 307/308 response pointing at the next location.

    ``location`` is the Location header as received; ``source_url`` is the
    URL that answered, which a relative location is resolved against.
    """

    name = "redirect"

    def __init__(self, status_code: int, location: str, source_url: str) -> None:
        self.status_code = status_code
        self.location = location
        self.source_url = source_url


class OtherStatus:
    """Any response the loop does not handle.

    ``body`` is None when the body could not be read.
    """

    name = "other_status"

    def __init__(self, status_code: int, body: str | None, detail: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.detail = detail


class TransportFailure:
    """The exchange failed before a usable response was obtained."""

    name = "transport_failure"

    def __init__(self, cause: TransportFailureError) -> None:
        self.status_code: int | None = None
        self.cause = cause


ResponseOutcome = Success | Unauthorized | Redirect | OtherStatus | TransportFailure


async def _read_text(response: IssuedResponse) -> str | None:
    try:
        body = await response.read()
    except TransportFailureError:
        return None
    return body.decode("utf-8", errors="replace")


async def classify_response(response: IssuedResponse) -> ResponseOutcome:
    """Classify a raw response, reading its body where the status needs it.

    Args:
        response: The response to one attempt.

    Returns:
        The outcome of the attempt.
    """
    status = response.status_code

    if status == STATUS_OK:
        try:
            return Success(await response.read())
        except TransportFailureError as e:
            return TransportFailure(e)

    if status == STATUS_UNAUTHORIZED:
        return Unauthorized()

    if status in REDIRECT_STATUSES:
        location = response.headers.get("location")
        if location:
            return Redirect(status, location, response.url)
        return OtherStatus(
            status,
            await _read_text(response),
            detail="redirect without Location header",
        )

    return OtherStatus(status, await _read_text(response))
