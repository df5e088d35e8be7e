"""
Timeline builder for container summaries.
"""

from typing import Sequence

from models.event import EventType, TrackingEvent
from models.container_summary import TimelineEntry
from utils.time_utils import calculate_delay_minutes


def build_timeline(sorted_events: Sequence[TrackingEvent]) -> list[TimelineEntry]:
    """
    Project events into timeline entries, keeping their order.

    Port arrivals with a parseable metadata.expected_arrival get delay_minutes.
    """
    timeline = []
    for event in sorted_events:
        entry = TimelineEntry(
            event_type=event.event_type,
            timestamp=event.timestamp,
            location=event.location,
        )

        if event.event_type == EventType.PORT_ARRIVAL and event.metadata.get("expected_arrival"):
            delay = calculate_delay_minutes(event.occurred_at, event.metadata["expected_arrival"])
            if delay is not None:
                entry.delay_minutes = delay

        timeline.append(entry)

    return timeline
