"""Route segments and query params from the current location."""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import unquote_plus

def get_routes(pathname: str, base_url: str = "/") -> List[str]:
    """Split the part of ``pathname`` after ``base_url`` into segments.

    The base URL is removed by length, not matched. A pathname equal to the
    base URL yields ``[""]``.
    """
    remainder = pathname[len(base_url):]
    if remainder.startswith("/"):
        remainder = remainder[1:]
    return remainder.split("/")

QueryValue = Optional[str]

def parse_query(search: str) -> Dict[str, QueryValue | List[QueryValue]]:
    """Parse a query string; a key without ``=`` maps to ``None``."""
    if search.startswith("?"):
        search = search[1:]
    params: Dict[str, QueryValue | List[QueryValue]] = {}
    for part in search.split("&"):
        if not part:
            continue
        raw_key, sep, raw_value = part.partition("=")
        key = unquote_plus(raw_key)
        value = unquote_plus(raw_value) if sep else None
        if key not in params:
            params[key] = value
        elif isinstance(params[key], list):
            params[key].append(value)
        else:
            params[key] = [params[key], value]
    return params
