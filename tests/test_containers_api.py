"""
API tests for the container processing endpoints.

Run: pytest tests/test_containers_api.py -v
"""

import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from config import settings
from tests.factories import EventFactory, ShipmentFactory
import services.container_processor_service as processor_module


@pytest.fixture(autouse=True)
def reset_singleton():
    processor_module._container_processor_service = None
    yield
    processor_module._container_processor_service = None


# ===================
# APP ENDPOINTS
# ===================

class TestAppEndpoints:
    """Tests for / and /health"""

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_endpoints(self, test_client):
        data = test_client.get("/").json()
        assert data["endpoints"]["process"] == "/api/containers/process"
        assert "port_arrival" in data["event_types"]

    def test_unexpected_error_returns_500(self):
        from main import app

        client = TestClient(app, raise_server_exceptions=False)
        with patch("routes.containers.get_container_processor_service") as mock:
            mock.return_value.process.side_effect = RuntimeError("boom")
            response = client.post("/api/containers/process", json=[EventFactory.create()])

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


# ===================
# POST /process
# ===================

class TestProcessEvents:
    """Tests for POST /api/containers/process"""

    def test_happy_path(self, test_client, happy_path_events):
        response = test_client.post("/api/containers/process", json=happy_path_events)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["containers_processed"] == 1
        assert "file_path" not in data

        summary = data["results"][0]
        assert summary["current_status"] == "departed"
        assert summary["timeline"][0]["delay_minutes"] == 150
        assert "delay_minutes" not in summary["timeline"][1]
        assert summary["anomalies"] == [{
            "type": "late_arrival",
            "message": "Container arrived 150 minutes after expected time",
        }]

    def test_validation_rejection(self, test_client):
        events = [EventFactory.port_arrival(container_id=None), EventFactory.create(location="  ")]
        response = test_client.post("/api/containers/process", json=events)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Validation failed",
            "validation_errors": [
                "Event 0: container_id is required and must not be empty",
                "Event 1: location is required and must not be empty",
            ],
        }

    def test_non_array_body(self, test_client):
        response = test_client.post("/api/containers/process", json={"container_id": "CONT001"})

        assert response.status_code == 400
        error = response.json()["detail"]["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["message"] == "Input must be an array of events"

    def test_empty_array(self, test_client):
        response = test_client.post("/api/containers/process", json=[])

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["message"] == "Input must be a non-empty array of events"

    def test_batch_too_large(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "max_events_per_request", 1)
        response = test_client.post(
            "/api/containers/process",
            json=[EventFactory.create(), EventFactory.create()],
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["code"] == "BATCH_TOO_LARGE"


# ===================
# POST /process-batch
# ===================

class TestProcessBatch:
    """Tests for POST /api/containers/process-batch"""

    def test_shipments(self, test_client, sample_shipments):
        response = test_client.post("/api/containers/process-batch", json=sample_shipments)

        assert response.status_code == 200
        data = response.json()
        assert data["containers_processed"] == 2
        assert [r["container_id"] for r in data["results"]] == ["MSCU1234567", "MAEU7654321"]
        assert data["results"][1]["current_status"] == "picked_up"

    def test_no_events(self, test_client):
        response = test_client.post(
            "/api/containers/process-batch",
            json=[ShipmentFactory.create(container_id="MSCU1234567")],
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["code"] == "NO_EVENTS_FOUND"

    def test_event_limit_applies_after_flattening(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "max_events_per_request", 2)
        shipments = [ShipmentFactory.create(
            container_id="MSCU1234567",
            events=[EventFactory.create(container_id=None) for _ in range(3)],
        )]
        response = test_client.post("/api/containers/process-batch", json=shipments)

        assert response.status_code == 400
        error = response.json()["detail"]["error"]
        assert error["code"] == "BATCH_TOO_LARGE"
        assert error["details"] == {"received": 3, "max": 2}

    def test_validation_rejection(self, test_client):
        shipments = [ShipmentFactory.create(
            container_id="MSCU1234567",
            events=[EventFactory.create(container_id=None, event_type="customs_hold")],
        )]
        response = test_client.post("/api/containers/process-batch", json=shipments)

        assert response.status_code == 400
        assert response.json()["validation_errors"] == [
            "Event 0: metadata is required for event_type 'customs_hold'"
        ]


# ===================
# POST /process-file
# ===================

class TestProcessFile:
    """Tests for POST /api/containers/process-file"""

    def test_absolute_path(self, test_client, shipments_file):
        response = test_client.post(
            "/api/containers/process-file",
            json={"file_path": str(shipments_file)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["file_path"] == str(shipments_file.resolve())
        assert data["containers_processed"] == 2

    def test_relative_path(self, test_client, shipments_file, monkeypatch):
        monkeypatch.setattr(settings, "shipment_files_dir", str(shipments_file.parent))
        response = test_client.post(
            "/api/containers/process-file",
            json={"file_path": "shipments.json"},
        )

        assert response.status_code == 200
        assert response.json()["file_path"] == str(shipments_file.resolve())

    def test_file_not_found(self, test_client, tmp_path):
        response = test_client.post(
            "/api/containers/process-file",
            json={"file_path": str(tmp_path / "missing.json")},
        )

        assert response.status_code == 404
        assert response.json()["detail"]["error"]["code"] == "SHIPMENT_FILE_NOT_FOUND"

    def test_invalid_json(self, test_client, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("not json", encoding="utf-8")
        response = test_client.post("/api/containers/process-file", json={"file_path": str(path)})

        assert response.status_code == 400
        assert response.json()["detail"]["error"]["code"] == "SHIPMENT_FILE_INVALID_JSON"

    def test_validation_rejection_echoes_file_path(self, test_client, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps([ShipmentFactory.create(
            container_id="MSCU1234567",
            events=[EventFactory.create(container_id=None, timestamp="2024-11-15 08:00:00")],
        )]), encoding="utf-8")
        response = test_client.post("/api/containers/process-file", json={"file_path": str(path)})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation failed"
        assert data["file_path"] == str(path.resolve())
        assert data["validation_errors"][0].startswith("Event 0: timestamp must be")

    def test_missing_file_path(self, test_client):
        response = test_client.post("/api/containers/process-file", json={})
        assert response.status_code == 422
