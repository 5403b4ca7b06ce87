"""Shared pytest fixtures, mock factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline. Transport is a MagicMock or requests_mock.
              Always run.

  integration Full Client -> HttpTransport -> requests stack against a
              requests_mock server. Always run.

  quality     Property-based invariants (Hypothesis). Always run offline.

  live        Real FHIR server. Skipped unless FHIR_LIVE_BASE_URL is set.
              See tests/live/conftest.py for guards.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from fhir_rest.backends.base_transport import Transport
from fhir_rest.client import Client
from fhir_rest.resource import Resource

BASE_URL = "https://fhir.example.com/r4"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-server integration tests")
    config.addinivalue_line("markers", "quality: property-based invariants")
    config.addinivalue_line("markers", "live: requires a real FHIR server (skipped by default)")


# ---------------------------------------------------------------------------
# Bundle factory
# ---------------------------------------------------------------------------

def make_bundle(*resources: dict) -> dict:
    """Build a searchset Bundle wrapping the given resources."""
    return {
        "resourceType": "Bundle",
        "type": "searchset",
        "total": len(resources),
        "entry": [{"resource": r} for r in resources],
    }


@pytest.fixture
def patient_data() -> dict:
    return {
        "resourceType": "Patient",
        "id": "p-001",
        "name": [{"family": "Smith", "given": ["John", "Q"]}],
        "birthDate": "1970-01-01",
        "address": {"city": "Boston", "state": "MA"},
    }


@pytest.fixture
def search_bundle(patient_data: dict) -> dict:
    second = dict(patient_data, id="p-002", birthDate="1981-05-05")
    return make_bundle(patient_data, second)


@pytest.fixture
def empty_bundle() -> dict:
    return make_bundle()


@pytest.fixture
def new_patient() -> Resource:
    """A Patient that has not been sent to the server yet (no id)."""
    return Resource("Patient", {"name": [{"family": "Smith", "given": ["John"]}], "active": True})


# ---------------------------------------------------------------------------
# Transport stubs
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_transport() -> MagicMock:
    """A Transport stub. Set .get/.post/... return_value or side_effect per test."""
    transport = MagicMock(spec=Transport)
    transport.get.return_value = {}
    transport.post.return_value = {}
    transport.put.return_value = {}
    transport.patch.return_value = {}
    transport.delete.return_value = {}
    return transport


@pytest.fixture
def stub_client(mock_transport: MagicMock) -> Client:
    return Client(transport=mock_transport)
