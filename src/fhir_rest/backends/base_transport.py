"""Abstract transport shared by all FHIR backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from ..errors import HttpError, TransportError

logger = logging.getLogger(__name__)

FHIR_JSON = "application/fhir+json"


class Transport(ABC):
    """Sends an HTTP verb to a FHIR path and returns decoded JSON.

    Subclasses decide where requests go (``url_for``) and may add headers
    (``extra_headers``); status handling and decoding live here.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        verify: bool = True,
    ) -> None:
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict(
            {"Content-Type": FHIR_JSON, "Accept": FHIR_JSON}
        )
        self.headers.update(headers or {})
        self._session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify

    @abstractmethod
    def url_for(self, path: str) -> str:
        """Return the absolute URL for a FHIR path such as ``/Patient/123``."""

    def extra_headers(self) -> dict[str, str]:
        """Per-request headers added on top of the defaults (e.g. auth)."""
        return {}

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, body: Any) -> Any:
        return self.request("POST", path, body)

    def put(self, path: str, body: Any) -> Any:
        return self.request("PUT", path, body)

    def patch(self, path: str, body: Any) -> Any:
        return self.request("PATCH", path, body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(self, method: str, path: str, body: Any = None) -> Any:
        """Perform one round-trip.

        Returns:
            Decoded JSON body, or {} for an empty body.

        Raises:
            HttpError: status code >= 400.
            TransportError: connection, TLS or timeout failure.
        """
        url = self.url_for(path)
        headers = CaseInsensitiveDict(self.headers)
        headers.update(self.extra_headers())

        logger.debug("FHIR %s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                json=body,
                headers=dict(headers),
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        data = _decode(response)
        if response.status_code >= 400:
            logger.warning("FHIR %s %s returned HTTP %s", method, url, response.status_code)
            raise HttpError(response.status_code, data, dict(response.headers))
        return data


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        logger.warning(
            "Response from %s is not JSON (HTTP %s); treating body as empty",
            response.url,
            response.status_code,
        )
        return {}
