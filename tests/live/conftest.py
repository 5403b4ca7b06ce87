"""Skip guards for live tests.

Live tests talk to a real FHIR R4 server and are skipped unless the server
is configured through environment variables. They never fail because of
missing config.

Environment variables:
  FHIR_LIVE_BASE_URL       Base URL of a writable FHIR R4 server
                           (e.g. https://hapi.fhir.org/baseR4)
  FHIR_LIVE_TOKEN          Optional bearer token sent as Authorization

Run:
  export FHIR_LIVE_BASE_URL=https://hapi.fhir.org/baseR4
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os

import pytest

from fhir_rest import AsyncClient, Client


@pytest.fixture(scope="session")
def live_options() -> dict:
    base_url = os.environ.get("FHIR_LIVE_BASE_URL", "")
    if not base_url:
        pytest.skip("FHIR_LIVE_BASE_URL not set")
    headers = {}
    token = os.environ.get("FHIR_LIVE_TOKEN", "")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return {"base_url": base_url, "headers": headers, "timeout": 30}


@pytest.fixture
def live_client(live_options: dict) -> Client:
    return Client(**live_options)


@pytest.fixture
def live_async_client(live_options: dict) -> AsyncClient:
    return AsyncClient(**live_options)
