"""Tests for the HTTP service — state endpoints and quote endpoints.

Store, baseline config and settings are swapped in through FastAPI
dependency overrides so nothing touches the real data directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from srs_pricing.api.server import app, get_engine_config, get_store
from srs_pricing.api.settings import ServiceSettings, get_settings
from srs_pricing.config import EngineConfig
from srs_pricing.persistence import JsonFileSettingsStore


@pytest.fixture
def client(tmp_path: Path, two_layer_config: EngineConfig):
    store = JsonFileSettingsStore(tmp_path / "state.json")
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_engine_config] = lambda: two_layer_config
    app.dependency_overrides[get_settings] = lambda: ServiceSettings(lock_password="s3cret")
    yield TestClient(app)
    app.dependency_overrides.clear()


SCENARIO = {"monthly_rate": 20, "commit_years": 5, "contract_years": 5}


# ═══════════════════════════════════════════════════════════════════════════
# State
# ═══════════════════════════════════════════════════════════════════════════


class TestState:

    def test_health(self, client: TestClient):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    def test_empty_state(self, client: TestClient):
        assert client.get("/api/state").json() == {"config": {}, "ui": {}}

    def test_put_state(self, client: TestClient):
        body = {"config": {"pricing": {"rounding_increment": 50}}, "ui": {"tab": "terms"}}
        assert client.put("/api/state", json=body).json() == {"ok": True}
        assert client.get("/api/state").json() == body
        assert client.get("/api/config").json() == body["config"]
        assert client.get("/api/ui").json() == body["ui"]

    def test_put_state_missing_parts(self, client: TestClient):
        client.put("/api/state", json={"ui": {"tab": "quote"}})
        assert client.get("/api/state").json() == {"config": {}, "ui": {"tab": "quote"}}

    def test_put_config_and_ui_separately(self, client: TestClient):
        client.put("/api/config", json={"a": 1})
        client.put("/api/ui", json={"b": 2})
        assert client.get("/api/state").json() == {"config": {"a": 1}, "ui": {"b": 2}}

    def test_put_config_empty_body(self, client: TestClient):
        client.put("/api/config", json={"a": 1})
        client.put("/api/config")
        assert client.get("/api/config").json() == {}

    def test_lock_password(self, client: TestClient):
        assert client.get("/api/lock-password").json() == {"password": "s3cret"}


# ═══════════════════════════════════════════════════════════════════════════
# Quotes
# ═══════════════════════════════════════════════════════════════════════════


class TestQuote:

    def test_defaults_endpoint(self, client: TestClient, two_layer_config: EngineConfig):
        data = client.get("/api/config/defaults").json()
        assert data["pricing"]["year2_basis"] == "fixed_list"
        assert EngineConfig(**data) == two_layer_config

    def test_quote(self, client: TestClient):
        resp = client.post("/api/quote", json={"scenario": SCENARIO})
        assert resp.status_code == 200
        data = resp.json()
        assert data["year1_price"] == 3_000
        assert data["year2_price"] == 1_100
        assert data["contract_price"] == 7_400
        assert data["scenario"]["existing_fleet_units"] == 0

    def test_quote_with_overrides(self, client: TestClient):
        resp = client.post(
            "/api/quote",
            json={"scenario": SCENARIO, "config": {"pricing": {"rounding_increment": 100}}},
        )
        assert resp.status_code == 200
        assert resp.json()["year1_price"] % 100 == 0

    def test_unoffered_contract(self, client: TestClient):
        resp = client.post("/api/quote", json={"scenario": {**SCENARIO, "contract_years": 7}})
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidScenarioError"
        assert "7-year" in resp.json()["detail"]

    def test_invalid_override(self, client: TestClient):
        resp = client.post(
            "/api/quote",
            json={"scenario": SCENARIO, "config": {"pricing": {"rounding_increment": -5}}},
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "ConfigurationError"

    def test_invalid_scenario(self, client: TestClient):
        resp = client.post("/api/quote", json={"scenario": {**SCENARIO, "monthly_rate": 0}})
        assert resp.status_code == 422

    def test_terms(self, client: TestClient):
        resp = client.post("/api/quote/terms", json={"monthly_rate": 20, "commit_years": 5})
        assert resp.status_code == 200
        rows = resp.json()
        assert [r["contract_years"] for r in rows] == [1, 3, 5, 10]
        five = rows[2]
        assert five["year1_price"] == 3_000
        assert five["contract_price"] == 7_400

    def test_contract_table_override_drops_terms(self, client: TestClient):
        table = {"contract_discounts": {"1": 0.0, "5": 0.05}}
        resp = client.post("/api/quote/terms", json={"monthly_rate": 20, "commit_years": 5, "config": table})
        assert resp.status_code == 200
        assert [r["contract_years"] for r in resp.json()] == [1, 5]

        resp = client.post(
            "/api/quote", json={"scenario": {**SCENARIO, "contract_years": 3}, "config": table},
        )
        assert resp.status_code == 422
        assert resp.json()["error"] == "InvalidScenarioError"

    def test_terms_with_stored_blob_ignored(self, client: TestClient):
        # the stored config blob belongs to the UI; quotes use only the request overrides
        client.put("/api/config", json={"pricing": {"rounding_increment": 1000}})
        resp = client.post("/api/quote", json={"scenario": SCENARIO})
        assert resp.json()["year1_price"] == 3_000
