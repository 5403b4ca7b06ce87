"""Lazy pointer to a FHIR resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .client import Client


@dataclass(frozen=True)
class Reference:
    """``Type/id`` pointer bound to a client. Nothing is cached: every
    ``to_resource()`` call fetches again."""

    client: Client
    resource_type: str
    id: str

    def to_resource(self) -> Any:
        return self.client.get(self.resource_type, self.id)

    def delete(self) -> Any:
        return self.client.delete(self.resource_type, self.id)

    def as_string(self) -> str:
        return f"{self.resource_type}/{self.id}"

    def __str__(self) -> str:
        return self.as_string()
