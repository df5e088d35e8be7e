"""
Business logic services.

Each service handles one part of container event processing.
"""

from services.event_validator import validate_event, validate_events
from services.anomaly_service import AnomalyService, get_anomaly_service
from services.status_service import get_current_status, calculate_journey_progress
from services.timeline_service import build_timeline
from services.container_processor_service import (
    ContainerProcessorService,
    get_container_processor_service,
    group_by_container,
)
from services.shipment_loader_service import (
    require_event_list,
    flatten_shipments,
    resolve_file_path,
    load_shipments_file,
    load_events_from_file,
)

__all__ = [
    "validate_event",
    "validate_events",
    "AnomalyService",
    "get_anomaly_service",
    "get_current_status",
    "calculate_journey_progress",
    "build_timeline",
    "ContainerProcessorService",
    "get_container_processor_service",
    "group_by_container",
    "require_event_list",
    "flatten_shipments",
    "resolve_file_path",
    "load_shipments_file",
    "load_events_from_file",
]
