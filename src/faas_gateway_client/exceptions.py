"""Custom exceptions for the FaaS gateway client.

This module defines the exception hierarchy raised by the function listing
loop and its collaborators. Every terminal failure of a listing call is a
subclass of :class:`GatewayError` carrying enough context (gateway URL,
status code, attempt count) to be logged or displayed without querying the
gateway again.

Two internal signals, :class:`TransportFailureError` and
:class:`ContextDoneError`, are raised by request issuers and by
``RequestContext`` respectively. The listing loop translates both into
:class:`ConnectionFailureError`; callers of ``fetch_list`` never see them.

Examples:
    Handling an authentication failure::

        from faas_gateway_client.exceptions import AuthRequiredError

        try:
            functions = await client.list_functions()
        except AuthRequiredError as e:
            logger.warning("gateway.auth_required", gateway_url=e.gateway_url)
            raise SystemExit(e.message)

    Handling any gateway failure::

        from faas_gateway_client.exceptions import GatewayError

        try:
            functions = await client.list_functions(namespace="staging")
        except GatewayError as e:
            logger.error("gateway.list_failed", error=str(e))
            functions = []
"""


class GatewayError(Exception):
    """Base exception for all gateway client errors.

    Attributes:
        message: Human-readable error description.

    Examples:
        Catching all gateway errors::

            try:
                await client.list_functions()
            except GatewayError as e:
                print(e.message)
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class TooManyRedirectsError(GatewayError):
    """The attempt ceiling was exceeded while following redirects.

    Raised when the gateway keeps answering with 307/308 redirects, for
    example because two locations redirect to each other.

    Attributes:
        message: Human-readable error description.
        attempts: Number of requests sent before giving up.
        gateway_url: The gateway the requests were sent to.
    """

    def __init__(self, attempts: int, gateway_url: str) -> None:
        """Initialize the error.

        Args:
            attempts: Number of requests sent before giving up.
            gateway_url: The gateway the requests were sent to.
        """
        super().__init__(f"too many redirections ({attempts}) to gateway on URL: {gateway_url}")
        self.attempts = attempts
        self.gateway_url = gateway_url


class AuthRequiredError(GatewayError):
    """The gateway answered 401 Unauthorized.

    Never retried: credentials do not change between redirects.

    Attributes:
        message: Human-readable error description.
        gateway_url: The gateway that rejected the credentials.
    """

    def __init__(self, gateway_url: str) -> None:
        """Initialize the error.

        Args:
            gateway_url: The gateway that rejected the credentials.
        """
        super().__init__(
            "unauthorized access, run \"faas-cli login\" to setup authentication "
            f"for this server: {gateway_url}"
        )
        self.gateway_url = gateway_url


class UnexpectedStatusError(GatewayError):
    """The gateway answered with a status code the client does not handle.

    The response body is included when it could be read. A failed body read
    does not change the error kind, it only leaves ``body`` as None.

    Attributes:
        message: Human-readable error description.
        status_code: The HTTP status code returned.
        body: Response body text, or None if it could not be read.
        gateway_url: The gateway that returned the status.

    Examples:
        Raising with a body::

            raise UnexpectedStatusError(
                status_code=500,
                body="internal error",
                gateway_url="http://127.0.0.1:8080",
            )
    """

    def __init__(
        self,
        status_code: int,
        gateway_url: str,
        body: str | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            status_code: The HTTP status code returned.
            gateway_url: The gateway that returned the status.
            body: Response body text, or None if it could not be read.
            detail: Extra explanation appended to the message.
        """
        message = f"server returned unexpected status code: {status_code}"
        if body is not None:
            message = f"{message} - {body}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.gateway_url = gateway_url


class DecodeError(GatewayError):
    """A 200 response body could not be decoded into function statuses.

    Attributes:
        message: Human-readable error description.
        body_excerpt: The leading part of the undecodable body.
        gateway_url: The gateway that returned the body.
        cause: The underlying parsing or validation error.
    """

    def __init__(
        self,
        body_excerpt: str,
        gateway_url: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            body_excerpt: The leading part of the undecodable body.
            gateway_url: The gateway that returned the body.
            cause: The underlying parsing or validation error.
        """
        message = f"cannot parse result from gateway on URL: {gateway_url}\n{body_excerpt}"
        if cause is not None:
            message = f"{message}\n{cause}"
        super().__init__(message)
        self.body_excerpt = body_excerpt
        self.gateway_url = gateway_url
        self.cause = cause


class ConnectionFailureError(GatewayError):
    """The request could not be completed at the transport level.

    Covers refused connections, timeouts, DNS failures, broken response
    streams, and cancellation of the request context. Never retried.

    Attributes:
        message: Human-readable error description.
        gateway_url: The gateway that could not be reached.
        cause: The underlying transport or context error.
        cancelled: True when the request context was cancelled or expired.
    """

    def __init__(
        self,
        gateway_url: str,
        cause: Exception | None = None,
        cancelled: bool = False,
    ) -> None:
        """Initialize the error.

        Args:
            gateway_url: The gateway that could not be reached.
            cause: The underlying transport or context error.
            cancelled: True when the request context was cancelled or expired.
        """
        message = f"cannot connect to gateway on URL: {gateway_url}"
        if cancelled:
            message = f"{message} (request {cause or 'cancelled'})"
        elif cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.gateway_url = gateway_url
        self.cause = cause
        self.cancelled = cancelled


class TransportFailureError(GatewayError):
    """A request issuer failed to send a request or read its response.

    Raised by ``RequestIssuer`` implementations in place of their transport
    library's own exceptions.

    Attributes:
        message: Human-readable error description.
        cause: The underlying transport exception.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            cause: The underlying transport exception.
        """
        super().__init__(message)
        self.cause = cause


class ContextDoneError(GatewayError):
    """A request context was cancelled or ran past its deadline.

    Attributes:
        message: Human-readable error description.
        reason: Either ``"cancelled"`` or ``"deadline exceeded"``.
    """

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Either ``"cancelled"`` or ``"deadline exceeded"``.
        """
        super().__init__(reason)
        self.reason = reason
