"""Google Cloud Healthcare API FHIR store transport.

Requests go to::

    {api_base}/projects/{project}/locations/{location}/datasets/{dataset}/fhirStores/{store}/fhir/R4{path}

Every request carries a bearer token. Tokens come from a static
``access_token`` or from a caller-supplied ``token_provider``; provider
tokens are cached and refreshed shortly before they expire.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from ..config import GoogleHealthcareConfig
from ..errors import ConfigError
from ..util.params import encode
from .base_transport import Transport

logger = logging.getLogger(__name__)

_DEFAULT_TOKEN_LIFETIME_S = 3600
_REFRESH_MARGIN_S = 60


class GoogleHealthcareTransport(Transport):
    """FHIR transport for a Google Cloud Healthcare FHIR store."""

    def __init__(
        self,
        config: GoogleHealthcareConfig,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        verify: bool = True,
    ) -> None:
        super().__init__(headers=headers, session=session, timeout=timeout, verify=verify)
        if not config.access_token and config.token_provider is None:
            raise ConfigError("google_config requires access_token or token_provider")

        self.config = config
        self.fhir_store_path = (
            f"{config.api_base.rstrip('/')}/projects/{config.project_id}"
            f"/locations/{config.location}/datasets/{config.dataset_id}"
            f"/fhirStores/{config.fhir_store_id}"
        )
        self._access_token: str | None = config.access_token
        # static tokens never expire
        self._token_expires_at: float = float("inf") if config.access_token else 0.0

    def url_for(self, path: str) -> str:
        return f"{self.fhir_store_path}/fhir/R4{path}"

    def extra_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.authenticate()}"}

    def authenticate(self) -> str:
        """Return a valid access token, asking the provider for a new one if needed."""
        if self._access_token and time.time() < self._token_expires_at - _REFRESH_MARGIN_S:
            return self._access_token

        provided = self.config.token_provider()
        if isinstance(provided, tuple):
            token, expires_in = provided
        else:
            token, expires_in = provided, _DEFAULT_TOKEN_LIFETIME_S
        if not token:
            raise ConfigError("token_provider returned an empty access token")

        self._access_token = str(token).strip()
        self._token_expires_at = time.time() + float(expires_in)
        logger.info(
            "Refreshed Google Healthcare access token for project %s (expires in %ss)",
            self.config.project_id,
            expires_in,
        )
        return self._access_token

    # ------------------------------------------------------------------
    # Store-level convenience helpers
    # ------------------------------------------------------------------

    def search_resources(self, resource_type: str, params: dict[str, Any] | None = None) -> Any:
        query = encode(params or {})
        return self.get(f"/{resource_type}?{query}" if query else f"/{resource_type}")

    def get_resource(self, resource_type: str, resource_id: str) -> Any:
        return self.get(f"/{resource_type}/{resource_id}")

    def create_resource(self, resource_type: str, resource_data: dict) -> Any:
        return self.post(f"/{resource_type}", resource_data)

    def update_resource(self, resource_type: str, resource_id: str, resource_data: dict) -> Any:
        return self.put(f"/{resource_type}/{resource_id}", resource_data)

    def delete_resource(self, resource_type: str, resource_id: str) -> Any:
        return self.delete(f"/{resource_type}/{resource_id}")
