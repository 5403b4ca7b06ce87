"""Exception hierarchy for the FHIR REST client."""

from __future__ import annotations

from typing import Any


class FHIRClientError(Exception):
    """Base class for every error raised by fhir_rest."""


class ConfigError(FHIRClientError, ValueError):
    """Raised at client construction when required configuration is missing or invalid."""


class PreconditionError(FHIRClientError):
    """Raised when an operation is invoked against invalid object state."""


class TransportError(FHIRClientError):
    """Raised on network failures below the HTTP layer (DNS, TLS, timeouts)."""


class HttpError(FHIRClientError):
    """Raised for any response with a status code >= 400.

    Attributes:
        status: Numeric HTTP status code.
        body: Decoded response body, usually an OperationOutcome.
              Empty dict when the body was absent or not JSON.
        headers: Response headers.
    """

    def __init__(
        self,
        status: int,
        body: Any = None,
        headers: dict[str, str] | None = None,
        message: str | None = None,
    ) -> None:
        self.status = status
        self.body = {} if body is None else body
        self.headers = dict(headers or {})
        super().__init__(message or _describe(status, self.body))

    @property
    def issues(self) -> list[dict]:
        """OperationOutcome issues carried by the error body, if any."""
        if isinstance(self.body, dict):
            return list(self.body.get("issue") or [])
        return []


def _describe(status: int, body: Any) -> str:
    text = f"FHIR server responded with HTTP {status}"
    if isinstance(body, dict):
        for issue in body.get("issue") or []:
            if not isinstance(issue, dict):
                continue
            diagnostics = issue.get("diagnostics") or (issue.get("details") or {}).get("text")
            if diagnostics:
                return f"{text}: {diagnostics}"
    return text
