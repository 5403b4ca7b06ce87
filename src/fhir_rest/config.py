"""Pydantic models for client configuration.

Configuration is consumed fully resolved: nothing in this package reads
environment variables or config files.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, Field


GOOGLE_HEALTHCARE_BASE = "https://healthcare.googleapis.com/v1"


class GoogleHealthcareConfig(BaseModel):
    """Identifiers and credentials for a Google Cloud Healthcare FHIR store."""

    project_id: str = Field(..., min_length=1, description="GCP project ID")
    location: str = Field(..., min_length=1, description="Dataset region, e.g. us-central1")
    dataset_id: str = Field(..., min_length=1, description="Healthcare dataset ID")
    fhir_store_id: str = Field(..., min_length=1, description="FHIR store ID")
    api_base: str = Field(default=GOOGLE_HEALTHCARE_BASE, description="Healthcare API root URL")
    access_token: Optional[str] = Field(default=None, description="Static bearer token")
    token_provider: Optional[Callable[[], Any]] = Field(
        default=None,
        description="Returns a token string or a (token, expires_in_seconds) tuple",
    )


class ClientConfig(BaseModel):
    """Backend selection plus connection parameters for a Client."""

    backend: Literal["http", "google_healthcare"] = Field(default="http")
    base_url: Optional[str] = Field(default=None, description="FHIR base URL for the http backend")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    timeout: Optional[float] = Field(default=None, description="Per-request timeout in seconds")
    verify: bool = Field(default=True, description="Verify TLS certificates")
    google_config: Optional[GoogleHealthcareConfig] = Field(default=None)
    mode: Literal["sync", "async"] = Field(default="sync")
