"""
Container summary schemas returned by the processing engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema
from models.event import EventType


class AnomalyType(str, Enum):
    """Kinds of anomaly the detector reports."""
    LATE_ARRIVAL = "late_arrival"
    UNUSUAL_GAP = "unusual_gap"
    DUPLICATE_EVENT = "duplicate_event"
    OUT_OF_SEQUENCE = "out_of_sequence"


@dataclass
class Anomaly:
    """Single detected anomaly, with the event that triggered it."""
    type: AnomalyType
    message: str
    timestamp: str
    event_index: int


# ===================
# SUMMARY SCHEMAS
# ===================

class AnomalyResponse(BaseSchema):
    """Anomaly as exposed in a container summary."""

    type: AnomalyType = Field(..., description="Anomaly kind")
    message: str = Field(..., description="Human-readable explanation")


class TimelineEntry(BaseSchema):
    """One event on a container's timeline."""

    # Values are echoed exactly as the event carried them
    model_config = ConfigDict(str_strip_whitespace=False)

    event_type: EventType = Field(..., description="Event type")
    timestamp: str = Field(..., description="Event timestamp (ISO 8601 UTC)")
    location: str = Field(..., description="Event location")
    delay_minutes: Optional[int] = Field(
        None,
        description="Minutes late vs. expected_arrival (port arrivals only)"
    )


class ContainerSummary(BaseSchema):
    """
    Derived state of one container.

    Built from every event sharing the container_id, in chronological order.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    container_id: str = Field(..., description="Container identifier")
    current_status: str = Field(..., description="Status implied by the latest event")
    current_location: str = Field(..., description="Location of the latest event")
    last_event_time: str = Field(..., description="Timestamp of the latest event")
    total_events: int = Field(..., ge=1, description="Events recorded for the container")
    timeline: list[TimelineEntry] = Field(default_factory=list)
    anomalies: list[AnomalyResponse] = Field(default_factory=list)
    journey_progress: int = Field(..., ge=0, le=100, description="Journey completion (0-100)")


class ProcessingResponse(BaseSchema):
    """Successful processing result for API and CLI."""

    success: bool = True
    file_path: Optional[str] = Field(None, description="Source file, for file processing")
    containers_processed: int = Field(..., ge=0)
    results: list[ContainerSummary]

    @classmethod
    def create(
        cls,
        results: list[ContainerSummary],
        file_path: Optional[str] = None
    ) -> "ProcessingResponse":
        """Wrap summaries with the container count."""
        return cls(
            file_path=file_path,
            containers_processed=len(results),
            results=results
        )


class ProcessFileRequest(BaseSchema):
    """Request body for processing a shipment file on the server."""

    file_path: str = Field(..., min_length=1, description="Absolute or relative path to a shipments JSON file")
