"""Prometheus metrics for the FaaS gateway client.

Metrics include:

- Attempt counters by outcome and status code
- Listing call counters by result
- Attempts-per-call and call duration histograms

Examples:
    Recording a redirect attempt::

        from faas_gateway_client.observability.metrics import record_attempt

        record_attempt(outcome="redirect", status_code=307)

    Recording a finished call::

        from faas_gateway_client.observability.metrics import record_list_call

        record_list_call(result="success", attempts=2, duration_seconds=0.12)
"""

from prometheus_client import Counter, Histogram

# Attempt counter
# Labels: outcome (success, unauthorized, redirect, other_status, transport_failure),
# status_code ("none" for transport failures)
attempts_total = Counter(
    "faas_gateway_attempts_total",
    "Total number of requests sent to the gateway by the listing loop",
    ["outcome", "status_code"],
)

# Listing call counter
# Labels: result (success or the error class name)
list_total = Counter(
    "faas_gateway_list_total",
    "Total number of function listing calls",
    ["result"],
)

# Requests sent per listing call
list_attempts = Histogram(
    "faas_gateway_list_attempts",
    "Number of requests sent per function listing call",
    buckets=[1, 2, 3, 4, 5, 6, 7],
)

# Wall-clock duration of a listing call
list_duration_seconds = Histogram(
    "faas_gateway_list_duration_seconds",
    "Duration of function listing calls in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60],
)


def record_attempt(outcome: str, status_code: int | None) -> None:
    """Record one request sent by the listing loop.

    Args:
        outcome: The classified outcome of the attempt
        status_code: HTTP status code, or None when no response arrived

    Examples:
        >>> record_attempt("success", 200)
        >>> record_attempt("transport_failure", None)
    """
    label = "none" if status_code is None else str(status_code)
    attempts_total.labels(outcome=outcome, status_code=label).inc()


def record_list_call(result: str, attempts: int, duration_seconds: float) -> None:
    """Record a finished listing call.

    Args:
        result: "success" or the name of the raised error class
        attempts: Requests sent during the call
        duration_seconds: Wall-clock duration of the call

    Examples:
        >>> record_list_call("success", 1, 0.05)
        >>> record_list_call("TooManyRedirectsError", 7, 0.4)
    """
    list_total.labels(result=result).inc()
    list_attempts.observe(attempts)
    list_duration_seconds.observe(duration_seconds)
