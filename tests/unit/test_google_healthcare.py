"""Unit tests for the Google Cloud Healthcare FHIR store transport."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests_mock as req_mock

from fhir_rest.backends.google_healthcare import GoogleHealthcareTransport
from fhir_rest.config import GoogleHealthcareConfig
from fhir_rest.errors import ConfigError


STORE_URL = (
    "https://healthcare.googleapis.com/v1/projects/demo-project/locations/us-central1"
    "/datasets/clinical/fhirStores/primary"
)
FHIR_URL = f"{STORE_URL}/fhir/R4"


def _config(**overrides) -> GoogleHealthcareConfig:
    fields = {
        "project_id": "demo-project",
        "location": "us-central1",
        "dataset_id": "clinical",
        "fhir_store_id": "primary",
    }
    fields.update(overrides)
    return GoogleHealthcareConfig(**fields)


class TestGoogleHealthcareConstruction:
    def test_fhir_store_path(self) -> None:
        transport = GoogleHealthcareTransport(_config(access_token="tok"))
        assert transport.fhir_store_path == STORE_URL
        assert transport.url_for("/Patient/p-1") == f"{FHIR_URL}/Patient/p-1"

    def test_custom_api_base(self) -> None:
        transport = GoogleHealthcareTransport(
            _config(access_token="tok", api_base="http://localhost:8080/v1/")
        )
        assert transport.fhir_store_path.startswith("http://localhost:8080/v1/projects/")

    def test_requires_a_token_source(self) -> None:
        with pytest.raises(ConfigError, match="access_token or token_provider"):
            GoogleHealthcareTransport(_config())


class TestGoogleHealthcareAuth:
    def test_static_token_is_sent_as_bearer(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{FHIR_URL}/Patient/p-1", json={"resourceType": "Patient", "id": "p-1"})
            GoogleHealthcareTransport(_config(access_token="static-tok")).get("/Patient/p-1")
            assert m.last_request.headers["Authorization"] == "Bearer static-tok"
            assert m.last_request.headers["Content-Type"] == "application/fhir+json"

    def test_provider_token_is_cached(self) -> None:
        provider = MagicMock(return_value=("prov-tok", 3600))
        transport = GoogleHealthcareTransport(_config(token_provider=provider))
        assert transport.authenticate() == "prov-tok"
        assert transport.authenticate() == "prov-tok"
        provider.assert_called_once()

    def test_bare_string_token_assumed_one_hour(self) -> None:
        provider = MagicMock(return_value="  tok-with-newline\n")
        transport = GoogleHealthcareTransport(_config(token_provider=provider))
        with patch("fhir_rest.backends.google_healthcare.time.time", return_value=1000.0):
            assert transport.authenticate() == "tok-with-newline"
        # still valid 59 minutes later, refreshed inside the 60s margin
        with patch("fhir_rest.backends.google_healthcare.time.time", return_value=1000.0 + 3500):
            transport.authenticate()
        assert provider.call_count == 1
        with patch("fhir_rest.backends.google_healthcare.time.time", return_value=1000.0 + 3550):
            transport.authenticate()
        assert provider.call_count == 2

    def test_refreshes_after_expiry(self) -> None:
        provider = MagicMock(side_effect=[("first", 120), ("second", 120)])
        transport = GoogleHealthcareTransport(_config(token_provider=provider))
        with patch("fhir_rest.backends.google_healthcare.time.time", return_value=0.0):
            assert transport.authenticate() == "first"
        with patch("fhir_rest.backends.google_healthcare.time.time", return_value=100.0):
            assert transport.authenticate() == "second"

    def test_refreshed_token_used_on_requests(self) -> None:
        provider = MagicMock(side_effect=[("first", 0), ("second", 3600)])
        transport = GoogleHealthcareTransport(_config(token_provider=provider))
        with req_mock.Mocker() as m:
            m.get(f"{FHIR_URL}/Patient/p-1", json={})
            transport.get("/Patient/p-1")
            assert m.last_request.headers["Authorization"] == "Bearer first"
            transport.get("/Patient/p-1")
            assert m.last_request.headers["Authorization"] == "Bearer second"

    def test_empty_provider_token_raises(self) -> None:
        transport = GoogleHealthcareTransport(_config(token_provider=lambda: ""))
        with pytest.raises(ConfigError, match="empty access token"):
            transport.authenticate()


class TestGoogleHealthcareHelpers:
    def _transport(self) -> GoogleHealthcareTransport:
        return GoogleHealthcareTransport(_config(access_token="tok"))

    def test_search_resources_encodes_params(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{FHIR_URL}/Patient", json={"resourceType": "Bundle", "total": 0})
            bundle = self._transport().search_resources("Patient", {"family": "O Brien", "given": ["A", "B"]})
            assert m.last_request.url.endswith("/Patient?family=O%20Brien&given=A&given=B")
        assert bundle["total"] == 0

    def test_search_resources_without_params(self) -> None:
        with req_mock.Mocker() as m:
            m.get(f"{FHIR_URL}/Patient", json={"resourceType": "Bundle"})
            self._transport().search_resources("Patient")
            assert m.last_request.url == f"{FHIR_URL}/Patient"

    def test_crud_helpers(self) -> None:
        transport = self._transport()
        with req_mock.Mocker() as m:
            m.post(f"{FHIR_URL}/Patient", json={"id": "new"}, status_code=201)
            m.get(f"{FHIR_URL}/Patient/new", json={"id": "new"})
            m.put(f"{FHIR_URL}/Patient/new", json={"id": "new", "active": True})
            m.delete(f"{FHIR_URL}/Patient/new", status_code=200, json={})

            assert transport.create_resource("Patient", {"resourceType": "Patient"}) == {"id": "new"}
            assert transport.get_resource("Patient", "new") == {"id": "new"}
            assert transport.update_resource("Patient", "new", {"active": True})["active"] is True
            assert transport.delete_resource("Patient", "new") == {}
            assert [r.method for r in m.request_history] == ["POST", "GET", "PUT", "DELETE"]
