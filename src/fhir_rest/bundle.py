"""Helpers for iterating FHIR search Bundles.

Bundles are passed through untouched; these helpers only walk ``entry``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from .resource import RESOURCE_TYPE_KEY, Resource


def entries(bundle: Mapping[str, Any] | None) -> list[dict]:
    """Return the Bundle's entry list, or [] when absent."""
    if not bundle:
        return []
    return list(bundle.get("entry") or [])


def iter_resources(
    bundle: Mapping[str, Any] | None,
    resource_type: str | None = None,
) -> Iterator[Resource]:
    """Yield each entry's resource wrapped as a Resource.

    Uses ``resource_type`` when given, otherwise the resource's own
    ``resourceType``. Entries without a resource are skipped.
    """
    for entry in entries(bundle):
        data = entry.get("resource")
        if not data:
            continue
        rt = resource_type or data.get(RESOURCE_TYPE_KEY)
        yield Resource(rt, data)
