"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import json
import pytest

from tests.factories import EventFactory, ShipmentFactory


# ===================
# SAMPLE DATA
# ===================

@pytest.fixture
def happy_path_events() -> list[dict]:
    """One container: arrival (150 min late), clearance, departure."""
    return [
        EventFactory.port_arrival(
            container_id="CONT001",
            timestamp="2024-11-15T08:30:00Z",
            location="Port of Singapore",
            expected_arrival="2024-11-15T06:00:00Z",
        ),
        EventFactory.customs_clearance(
            container_id="CONT001",
            timestamp="2024-11-15T12:00:00Z",
            location="Customs, Port of Singapore",
            extra_metadata={"clearance_time": 180},
        ),
        EventFactory.port_departure(
            container_id="CONT001",
            timestamp="2024-11-16T10:00:00Z",
            location="Port of Singapore",
        ),
    ]


@pytest.fixture
def sample_shipments() -> list[dict]:
    """Two shipments with embedded events (no container_id on events)."""
    return [
        ShipmentFactory.create(
            container_id="MSCU1234567",
            events=[
                EventFactory.port_arrival(timestamp="2024-11-15T08:30:00Z", container_id=None),
                EventFactory.customs_clearance(timestamp="2024-11-15T12:00:00Z", container_id=None),
            ],
        ),
        ShipmentFactory.create(
            container_id="MAEU7654321",
            events=[
                EventFactory.lcl_pickup(timestamp="2024-11-14T09:00:00Z", container_id=None),
            ],
        ),
    ]


@pytest.fixture
def shipments_file(tmp_path, sample_shipments) -> Path:
    """Shipments written to a JSON file."""
    path = tmp_path / "shipments.json"
    path.write_text(json.dumps(sample_shipments), encoding="utf-8")
    return path


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.post("/api/containers/process", json=[...])
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
