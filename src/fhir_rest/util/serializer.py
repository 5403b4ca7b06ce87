"""Dotted-path access into nested resource mappings."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from ..errors import PreconditionError


def get_by_path(root: Any, path: str, default: Any = None) -> Any:
    """Return the value at a dotted ``path`` (e.g. ``"name.family"``).

    Only nested mappings are descended. A missing key, a ``None`` value or a
    non-mapping intermediate yields ``default``. Never raises.
    """
    current = root
    for segment in _segments(path):
        if not isinstance(current, Mapping):
            return default
        current = current.get(segment)
    if current is None:
        return default
    return current


def set_by_path(root: MutableMapping, path: str, value: Any) -> None:
    """Assign ``value`` at a dotted ``path``, creating intermediate dicts as needed.

    Raises:
        PreconditionError: if ``path`` is empty or an intermediate segment
            already holds a non-mapping value.
    """
    segments = _segments(path)
    if not segments:
        raise PreconditionError("path must contain at least one segment")

    current = root
    for segment in segments[:-1]:
        child = current.get(segment)
        if child is None:
            child = {}
            current[segment] = child
        elif not isinstance(child, MutableMapping):
            raise PreconditionError(
                f"cannot set {path!r}: segment {segment!r} holds a {type(child).__name__}"
            )
        current = child
    current[segments[-1]] = value


def deep_copy(value: Any) -> Any:
    """Recursively copy mappings (to dict) and sequences (to list); scalars pass through."""
    if isinstance(value, Mapping):
        return {key: deep_copy(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [deep_copy(item) for item in value]
    return value


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split(".") if segment]
