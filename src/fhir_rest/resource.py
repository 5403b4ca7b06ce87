"""FHIR resource wrapper with dotted-path access."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from .errors import PreconditionError
from .util.serializer import deep_copy, get_by_path, set_by_path


RESOURCE_TYPE_KEY = "resourceType"


class Resource(MutableMapping):
    """A FHIR resource: a mapping of field name to JSON value tagged with ``resourceType``.

    The resource type is fixed at construction; ``id`` stays absent until the
    server assigns one.
    """

    def __init__(self, resource_type: str, fields: Mapping[str, Any] | None = None) -> None:
        if not resource_type:
            raise PreconditionError("resource_type must not be empty")
        self._data: dict[str, Any] = dict(fields or {})
        self._data[RESOURCE_TYPE_KEY] = resource_type

    @property
    def resource_type(self) -> str:
        return self._data[RESOURCE_TYPE_KEY]

    @property
    def id(self) -> str | None:
        return self._data.get("id")

    @id.setter
    def id(self, value: str | None) -> None:
        if value is None:
            self._data.pop("id", None)
        else:
            self._data["id"] = value

    def get(self, path: str, default: Any = None) -> Any:  # type: ignore[override]
        """Return the value at a dotted path such as ``"name.family"``."""
        return get_by_path(self._data, path, default)

    def set(self, path: str, value: Any) -> None:
        """Assign ``value`` at a dotted path, creating intermediate objects."""
        if path.strip(".") == RESOURCE_TYPE_KEY:
            self[RESOURCE_TYPE_KEY] = value
            return
        set_by_path(self._data, path, value)

    def serialize(self) -> dict[str, Any]:
        """Return a deep copy of the resource suitable for the request body."""
        return deep_copy(self._data)

    # ------------------------------------------------------------------
    # MutableMapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key == RESOURCE_TYPE_KEY and value != self.resource_type:
            raise PreconditionError(
                f"resourceType is immutable (is {self.resource_type!r}, got {value!r})"
            )
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        if key == RESOURCE_TYPE_KEY:
            raise PreconditionError("resourceType cannot be removed")
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<Resource {self.resource_type}/{self.id or '(new)'}>"
