"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.event import (
    EventType,
    EventTypeRule,
    EVENT_CATALOG,
    VALID_EVENT_TYPES,
    TrackingEvent,
    get_event_rule,
)
from models.container_summary import (
    AnomalyType,
    Anomaly,
    AnomalyResponse,
    TimelineEntry,
    ContainerSummary,
    ProcessingResponse,
    ProcessFileRequest,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Events
    "EventType",
    "EventTypeRule",
    "EVENT_CATALOG",
    "VALID_EVENT_TYPES",
    "TrackingEvent",
    "get_event_rule",

    # Summaries
    "AnomalyType",
    "Anomaly",
    "AnomalyResponse",
    "TimelineEntry",
    "ContainerSummary",
    "ProcessingResponse",
    "ProcessFileRequest",
]
