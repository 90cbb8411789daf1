"""Query-string building for Nexus API paths."""

from collections.abc import Mapping
from urllib.parse import quote

QueryValue = str | int | float | bool | None

# Characters left unescaped by JavaScript's encodeURIComponent.
_UNRESERVED = "-_.!~*'()"


def _format_value(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_query_params(options: Mapping[str, QueryValue] | None = None) -> str:
    """Build a query string from an options mapping.

    Keys whose value is None are left out. Pairs keep the mapping's
    insertion order.

    Args:
        options: Option name to primitive value.

    Returns:
        "?key=value&..." or an empty string when nothing is left to encode.
    """
    if not options:
        return ""
    pairs = [
        f"{key}={quote(_format_value(value), safe=_UNRESERVED)}"
        for key, value in options.items()
        if value is not None
    ]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)
