"""Synchronous FHIR REST client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests
from pydantic import ValidationError

from .backends.base_transport import Transport
from .backends.google_healthcare import GoogleHealthcareTransport
from .backends.http_transport import HttpTransport
from .config import ClientConfig
from .errors import ConfigError, PreconditionError
from .reference import Reference
from .resource import Resource
from .searchset import SearchSet
from .util.serializer import deep_copy

logger = logging.getLogger(__name__)


class Client:
    """FHIR client that performs CRUD, search and reference lookups.

    The transport backend is chosen once from ``config.backend`` and kept
    for the client's lifetime.

    Args:
        config: A ClientConfig, or a mapping of its fields.
        transport: Use this transport instead of building one from config.
        session: requests.Session handed to the built transport.
        **options: ClientConfig fields, merged over ``config``.

    Raises:
        ConfigError: if no configuration is given, it fails validation, or
            the selected backend is missing its required fields.
    """

    mode = "sync"

    def __init__(
        self,
        config: ClientConfig | Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        session: requests.Session | None = None,
        **options: Any,
    ) -> None:
        self.config = _resolve_config(
            config, options, mode=self.mode, required=transport is None
        )

        if transport is not None:
            self.transport = transport
            self.base_url = getattr(transport, "base_url", None)
        else:
            self.transport = self._build_transport(session)
        logger.debug("FHIR client using %s (%s mode)", type(self.transport).__name__, self.mode)

    def _build_transport(self, session: requests.Session | None) -> Transport:
        cfg = self.config
        if cfg.backend == "google_healthcare":
            if cfg.google_config is None:
                raise ConfigError("google_config required for Google Healthcare backend")
            self.base_url = f"google_healthcare://{cfg.google_config.project_id}"
            return GoogleHealthcareTransport(
                cfg.google_config,
                headers=cfg.headers,
                session=session,
                timeout=cfg.timeout,
                verify=cfg.verify,
            )

        if not cfg.base_url:
            raise ConfigError("base_url required for standard HTTP backend")
        self.base_url = cfg.base_url.rstrip("/")
        return HttpTransport(
            self.base_url,
            headers=cfg.headers,
            session=session,
            timeout=cfg.timeout,
            verify=cfg.verify,
        )

    @property
    def is_google_healthcare(self) -> bool:
        return isinstance(self.transport, GoogleHealthcareTransport)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, resource: Resource) -> tuple[Resource, Any]:
        """POST the resource; a server-assigned id is written back onto it."""
        body = self.transport.post(_path(resource.resource_type), resource.serialize())
        if isinstance(body, Mapping) and body.get("id"):
            resource.id = body["id"]
        return resource, body

    def save(self, resource: Resource) -> tuple[Resource, Any]:
        """PUT the resource to its instance URL. Requires ``resource.id``."""
        if not resource.id:
            raise PreconditionError("resource.id required for save")
        body = self.transport.put(
            _path(resource.resource_type, resource.id), resource.serialize()
        )
        return resource, body

    def get(self, resource_type: str, resource_id: str) -> Resource:
        data = self.transport.get(_path(resource_type, resource_id))
        return Resource(resource_type, data)

    def patch(self, resource_type: str, resource_id: str, patch_body: Any) -> Any:
        return self.transport.patch(_path(resource_type, resource_id), deep_copy(patch_body))

    def delete(self, resource_type: str, resource_id: str) -> Any:
        return self.transport.delete(_path(resource_type, resource_id))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def resources(self, resource_type: str) -> SearchSet:
        return SearchSet(self, resource_type)

    def reference(self, resource_type: str, resource_id: str) -> Reference:
        return Reference(self, resource_type, resource_id)

    # ------------------------------------------------------------------
    # Google Healthcare helpers
    # ------------------------------------------------------------------

    def google_search(self, resource_type: str, params: dict[str, Any] | None = None) -> Any:
        return self._google("google_search").search_resources(resource_type, params)

    def google_create_resource(self, resource_type: str, resource_data: dict) -> Any:
        return self._google("google_create_resource").create_resource(
            resource_type, deep_copy(resource_data)
        )

    def google_get_resource(self, resource_type: str, resource_id: str) -> Any:
        return self._google("google_get_resource").get_resource(resource_type, resource_id)

    def google_update_resource(
        self, resource_type: str, resource_id: str, resource_data: dict
    ) -> Any:
        return self._google("google_update_resource").update_resource(
            resource_type, resource_id, deep_copy(resource_data)
        )

    def google_delete_resource(self, resource_type: str, resource_id: str) -> Any:
        return self._google("google_delete_resource").delete_resource(resource_type, resource_id)

    def _google(self, method_name: str) -> GoogleHealthcareTransport:
        if not self.is_google_healthcare:
            raise PreconditionError(
                f"{method_name} only available with Google Healthcare backend"
            )
        return self.transport  # type: ignore[return-value]


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------

def _path(resource_type: str, resource_id: str | None = None) -> str:
    if resource_id:
        return f"/{resource_type}/{resource_id}"
    return f"/{resource_type}"


def _resolve_config(
    config: ClientConfig | Mapping[str, Any] | None,
    options: dict[str, Any],
    mode: str,
    required: bool = True,
) -> ClientConfig:
    if required and config is None and not options:
        raise ConfigError("Configuration options required")

    if isinstance(config, ClientConfig):
        fields = {name: getattr(config, name) for name in config.model_fields_set}
    else:
        fields = dict(config or {})
    fields.update(options)
    fields["mode"] = mode

    try:
        return ClientConfig.model_validate(fields)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
