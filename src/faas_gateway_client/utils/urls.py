"""URL helpers and well-known gateway paths.

This module provides:
- The listing endpoint path and its namespace query key
- Query parameter merging for request locations
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Endpoint listing deployed functions
SYSTEM_PATH = "/system/functions"

# Query parameter scoping a listing to one namespace
NAMESPACE_KEY = "namespace"


def add_query_params(location: str, params: dict[str, str]) -> str:
    """Merge query parameters into a location.

    Existing parameters are kept; a parameter in ``params`` replaces any
    existing value for the same key. Keys are emitted in sorted order so the
    result does not depend on insertion order.

    Args:
        location: Path or absolute URL, optionally with a query and fragment
        params: Parameters to set

    Returns:
        The location with the merged query string

    Example:
        >>> add_query_params("/system/functions", {"namespace": "openfaas-fn"})
        '/system/functions?namespace=openfaas-fn'
        >>> add_query_params("/system/functions?b=2&a=1", {"b": "3"})
        '/system/functions?a=1&b=3'
    """
    parts = urlsplit(location)

    query: dict[str, list[str]] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        query.setdefault(key, []).append(value)

    for key, value in params.items():
        query[key] = [value]

    encoded = urlencode(
        [(key, value) for key in sorted(query) for value in query[key]],
    )
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encoded, parts.fragment))


def namespaced_location(path: str, namespace: str) -> str:
    """Return ``path`` scoped to ``namespace``, or unchanged if it is empty.

    Example:
        >>> namespaced_location("/system/functions", "")
        '/system/functions'
    """
    if not namespace:
        return path
    return add_query_params(path, {NAMESPACE_KEY: namespace})
