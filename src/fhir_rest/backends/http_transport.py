"""Generic FHIR R4 HTTP transport."""

from __future__ import annotations

import requests

from .base_transport import Transport


class HttpTransport(Transport):
    """Plain HTTP(S) transport against a FHIR base URL."""

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        verify: bool = True,
    ) -> None:
        super().__init__(headers=headers, session=session, timeout=timeout, verify=verify)
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"
