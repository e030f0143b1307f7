"""Tests for assignment snapshots."""

from __future__ import annotations

import re

import pytest
from fastapi.testclient import TestClient

from guardmap import errors
from guardmap.main import create_app
from guardmap.services import snapshot_service
from guardmap.services.snapshot_service import generate_token, parse_payload

TOKEN_RE = re.compile(r"^[0-9a-f]{32}$")


def _assignments(location_id: int) -> dict:
    return {
        str(location_id): [
            {"id": 1, "name": "Ali", "role": "قائد فريق", "phone": "0501234567"},
            {"id": 2, "name": "Saad", "role": "رجل أمن ثاني"},
        ]
    }


class TestCreateSnapshot:
    def test_create_returns_token_and_url(self, client, settings):
        resp = client.post("/api/snapshots", json={"assignments": _assignments(7)})
        assert resp.status_code == 201
        body = resp.json()
        assert TOKEN_RE.match(body["token"])
        assert body["url"] == f"{settings.public_base_url}/view/s/{body['token']}"

    def test_url_falls_back_to_request_host(self, settings):
        app = create_app(settings.model_copy(update={"public_base_url": None}))
        with TestClient(app) as tc:
            body = tc.post("/api/snapshots", json={"assignments": {}}).json()
        assert body["url"] == f"http://testserver/view/s/{body['token']}"

    def test_tokens_are_unique(self, client):
        tokens = {
            client.post("/api/snapshots", json={"assignments": {}}).json()["token"]
            for _ in range(5)
        }
        assert len(tokens) == 5

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"assignments": []},
            {"assignments": "Gate 1"},
            {"assignments": None},
            [1, 2, 3],
            {"assignments": {"7": [{"id": 1, "name": "Ali", "role": "guard"}]}},
            {"assignments": {"gate": []}},
        ],
    )
    def test_malformed_payload_is_400(self, client, payload):
        resp = client.post("/api/snapshots", json=payload)
        assert resp.status_code == 400
        assert resp.json()["code"] == "validation_error"

    def test_randomness_failure_is_reported(self, client, monkeypatch):
        def _broken(nbytes=None):
            raise OSError("no entropy")

        monkeypatch.setattr(snapshot_service.secrets, "token_hex", _broken)
        resp = client.post("/api/snapshots", json={"assignments": {}})
        assert resp.status_code == 500
        assert resp.json()["code"] == "randomness_failure"


class TestGetSnapshot:
    def test_round_trip(self, client):
        locations = [
            {"id": 7, "name": "Gate 1", "latitude": "24.7365", "longitude": 46.5762, "locationType": "security"}
        ]
        token = client.post(
            "/api/snapshots",
            json={"assignments": _assignments(7), "locations": locations},
        ).json()["token"]

        resp = client.get(f"/api/snapshots/{token}")
        assert resp.status_code == 200
        body = resp.json()
        assert body["assignments"] == _assignments(7)
        assert body["locations"] == locations
        assert "createdAt" in body

    def test_unknown_keys_are_kept(self, client):
        assignments = {
            "5": [
                {"id": 1, "name": "Sara", "role": "قائد فريق", "shift": "night"},
                {"id": 2, "name": "Saad", "role": "رجل أمن ثاني", "personnel_type": "security"},
            ]
        }
        locations = [
            {"id": 5, "name": "Gate 5", "latitude": "24.7365", "longitude": "46.5762", "locationType": "security", "color": "red"}
        ]
        token = client.post(
            "/rpc/snapshots.create",
            json={"assignments": assignments, "locations": locations},
        ).json()["token"]

        body = client.get(f"/api/snapshots/{token}").json()
        assert body["assignments"] == assignments
        assert body["locations"] == locations

    def test_unknown_token_is_404(self, client):
        resp = client.get(f"/api/snapshots/{'0' * 32}")
        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"

    def test_gate_2_survives_location_delete(self, client, make_location):
        """A shared snapshot keeps showing Gate 2 after the location is gone."""
        gate_2 = make_location(name="Gate 2", latitude="24.7338", longitude="46.5724")
        locations = [
            {"id": gate_2, "name": "Gate 2", "latitude": "24.7338", "longitude": "46.5724", "locationType": "security"}
        ]
        token = client.post(
            "/api/snapshots",
            json={"assignments": _assignments(gate_2), "locations": locations},
        ).json()["token"]
        before = client.get(f"/api/snapshots/{token}").json()

        assert client.delete(f"/api/locations/{gate_2}").status_code == 204

        after = client.get(f"/api/snapshots/{token}").json()
        assert after == before
        assert after["assignments"][str(gate_2)][0]["name"] == "Ali"

    def test_geojson_view(self, client):
        locations = [
            {"id": 7, "name": "Gate 1", "latitude": "24.7365", "longitude": "46.5762", "locationType": "security"},
            {"id": 8, "name": "Broken", "latitude": "north", "longitude": "46.5", "locationType": "traffic"},
        ]
        token = client.post(
            "/api/snapshots",
            json={"assignments": _assignments(7), "locations": locations},
        ).json()["token"]

        collection = client.get(f"/api/snapshots/{token}/geojson").json()
        assert collection["type"] == "FeatureCollection"
        assert len(collection["features"]) == 1
        feature = collection["features"][0]
        assert feature["properties"]["radius"] == 100
        assert [p["name"] for p in feature["properties"]["personnel"]] == ["Ali", "Saad"]
        assert collection["properties"]["createdAtLocal"].endswith("+03:00")


class TestSnapshotHelpers:
    def test_generate_token_shape(self):
        assert TOKEN_RE.match(generate_token())

    def test_generate_token_wraps_missing_entropy_source(self, monkeypatch):
        def _broken(nbytes=None):
            raise NotImplementedError

        monkeypatch.setattr(snapshot_service.secrets, "token_hex", _broken)
        with pytest.raises(errors.RandomnessFailureError):
            generate_token()

    def test_parse_payload_rejects_non_mapping(self):
        with pytest.raises(errors.ValidationError):
            parse_payload({"assignments": ["Gate 1"]})

    def test_parse_payload_keys_location_ids(self):
        payload = parse_payload({"assignments": {"12": []}})
        assert payload.assignments == {12: []}
