"""
Container Processor Service - turns an event batch into container summaries.

Flow:
1. Validate the whole batch (all errors collected; any error rejects it all)
2. Group events by container_id, in order of first appearance
3. Per container: sort chronologically, then derive timeline, anomalies,
   status and journey progress

Stateless: the same batch always produces the same summaries.
"""

from collections import OrderedDict
from typing import Any, Iterable, Optional, Sequence
import structlog

from models.event import TrackingEvent
from models.container_summary import AnomalyResponse, ContainerSummary
from services.anomaly_service import AnomalyService, get_anomaly_service
from services.event_validator import validate_events
from services.status_service import get_current_status, calculate_journey_progress
from services.timeline_service import build_timeline
from utils.time_utils import sort_chronologically
from exceptions import EventValidationError

logger = structlog.get_logger(__name__)


def group_by_container(events: Iterable[TrackingEvent]) -> "OrderedDict[str, list[TrackingEvent]]":
    """
    Partition events by container_id.

    Containers keep the order in which they first appear; events keep
    their batch order within each container.
    """
    groups: OrderedDict[str, list[TrackingEvent]] = OrderedDict()
    for event in events:
        groups.setdefault(event.container_id, []).append(event)
    return groups


class ContainerProcessorService:
    """Service for processing tracking event batches."""

    def __init__(self, anomaly_service: Optional[AnomalyService] = None):
        """Initialize the processor."""
        self.anomaly_service = anomaly_service or get_anomaly_service()

    def process(self, events: Sequence[Any]) -> list[ContainerSummary]:
        """
        Validate a batch and summarize each container.

        Args:
            events: Raw events (dicts decoded from JSON), in batch order

        Returns:
            One ContainerSummary per container, in first-appearance order

        Raises:
            EventValidationError: If any event is invalid (no partial results)
        """
        logger.info("events_processing_started", total_events=len(events))

        errors = validate_events(events)
        if errors:
            logger.warning(
                "event_validation_failed",
                total_events=len(events),
                error_count=len(errors)
            )
            raise EventValidationError(errors)

        tracking_events = [TrackingEvent.from_raw(event) for event in events]
        groups = group_by_container(tracking_events)

        summaries = [
            self.summarize(container_id, container_events)
            for container_id, container_events in groups.items()
        ]

        logger.info(
            "events_processing_completed",
            total_events=len(tracking_events),
            containers_processed=len(summaries),
            anomalies=sum(len(summary.anomalies) for summary in summaries)
        )

        return summaries

    def summarize(self, container_id: str, events: Sequence[TrackingEvent]) -> ContainerSummary:
        """
        Build the summary of one container.

        Args:
            container_id: Container identifier
            events: Non-empty list of the container's events, any order

        Returns:
            ContainerSummary
        """
        sorted_events = sort_chronologically(events)
        last_event = sorted_events[-1]
        anomalies = self.anomaly_service.detect(sorted_events)

        return ContainerSummary(
            container_id=container_id,
            current_status=get_current_status(last_event),
            current_location=last_event.location,
            last_event_time=last_event.timestamp,
            total_events=len(sorted_events),
            timeline=build_timeline(sorted_events),
            anomalies=[
                AnomalyResponse(type=anomaly.type, message=anomaly.message)
                for anomaly in anomalies
            ],
            journey_progress=calculate_journey_progress(sorted_events),
        )


# Singleton instance
_container_processor_service: Optional[ContainerProcessorService] = None


def get_container_processor_service() -> ContainerProcessorService:
    """Get the singleton container processor service instance."""
    global _container_processor_service
    if _container_processor_service is None:
        _container_processor_service = ContainerProcessorService()
    return _container_processor_service
