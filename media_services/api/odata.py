"""OData helpers: literal quoting, payload unwrapping and date parsing."""

import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

_DATE_PATTERN = re.compile(r"^/Date\((-?\d+)([+-]\d{4})?\)/$")


def quote_literal(value: str) -> str:
    """
    Format a string as an OData literal safe to embed in a relative address.

    Single quotes are doubled and the result is percent-encoded.

    Example:
        ```python
        quote_literal("abc123")  # "'abc123'"
        quote_literal("nb:kid:UUID:1")  # "'nb:kid:UUID:1'"
        ```
    """
    escaped = value.replace("'", "''")
    return f"'{quote(escaped, safe=':')}'"


def entity_address(entity_set: str, entity_id: str) -> str:
    """Relative address of a single entity, e.g. ``/Assets('nb:cid:UUID:1')``."""
    return f"/{entity_set}({quote_literal(entity_id)})"


def unwrap_payload(payload: Any) -> list[Any]:
    """
    Turn an OData response body into a list of results.

    Handles the verbose format (``{"d": {"results": [...]}}``, ``{"d": {...entity...}}``,
    ``{"d": {"FunctionName": value}}``) and the JSON light ``value`` form.

    Args:
        payload: Decoded JSON response.

    Returns:
        List of entity dicts or primitive values.
    """
    if isinstance(payload, dict) and "d" in payload:
        payload = payload["d"]
    elif isinstance(payload, dict) and "value" in payload:
        payload = payload["value"]
        return payload if isinstance(payload, list) else [payload]

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if "results" in payload:
            return list(payload["results"])
        if len(payload) == 1:
            (value,) = payload.values()
            if not isinstance(value, dict | list):
                return [value]
        return [payload]
    return [payload]


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an OData ``/Date(ms)/`` or ISO 8601 value to a UTC datetime."""
    if not value:
        return None
    if match := _DATE_PATTERN.match(value):
        return datetime.fromtimestamp(int(match.group(1)) / 1000, tz=timezone.utc)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: datetime) -> str:
    """Format a datetime the way the service expects in request bodies."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
