"""Fluent FHIR search builder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .bundle import entries
from .resource import Resource
from .util.params import encode, quote

if TYPE_CHECKING:
    from .client import Client


class SearchSet:
    """Accumulates search parameters, a result cap and a sort key for one resource type.

    Example::

        patient = client.resources("Patient").search(family="Smith").sort("-birthdate").first()
    """

    def __init__(self, client: Client, resource_type: str) -> None:
        self.client = client
        self.resource_type = resource_type
        self.params: dict[str, Any] = {}
        self._limit: int | None = None
        self._sort: str | None = None

    def search(self, params: Mapping[str, Any] | None = None, **kwargs: Any) -> SearchSet:
        """Merge search parameters; later values for the same key win."""
        self.params.update(params or {})
        self.params.update(kwargs)
        return self

    def limit(self, n: int) -> SearchSet:
        self._limit = n
        return self

    def sort(self, field: str) -> SearchSet:
        self._sort = field
        return self

    def query_string(self) -> str:
        """Encoded parameters, then ``_count``, then ``_sort``."""
        parts = [encode(self.params)]
        if self._limit is not None:
            parts.append(f"_count={quote(self._limit)}")
        if self._sort is not None:
            parts.append(f"_sort={quote(self._sort)}")
        return "&".join(part for part in parts if part)

    def fetch(self) -> dict:
        """Run the search and return the raw Bundle."""
        return self._fetch()

    def _fetch(self) -> dict:
        query = self.query_string()
        path = f"/{self.resource_type}?{query}" if query else f"/{self.resource_type}"
        return self.client.transport.get(path)

    def first(self) -> Resource | None:
        """Fetch a single match, or None when the Bundle has no entries."""
        self.limit(1)
        bundle = self._fetch()
        found = entries(bundle)
        if found and found[0].get("resource") is not None:
            return Resource(self.resource_type, found[0]["resource"])
        return None

    def __repr__(self) -> str:
        return f"<SearchSet {self.resource_type}?{self.query_string()}>"
