"""Search parameter encoding for FHIR query strings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote as _urlquote


def quote(value: Any) -> str:
    """Percent-encode every byte outside ``[A-Za-z0-9._~-]`` (uppercase hex)."""
    return _urlquote(_render(value), safe="")


def encode(params: Mapping[str, Any]) -> str:
    """Encode a parameter mapping as ``key=value`` pairs joined by ``&``.

    Lists and tuples emit one pair per element, in order. ``None`` values
    (and ``None`` elements) are dropped.
    """
    pairs: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            pairs.append(f"{quote(key)}={quote(item)}")
    return "&".join(pairs)


def _render(value: Any) -> str:
    # FHIR token booleans are lowercase
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
