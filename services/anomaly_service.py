"""
Anomaly Service - detects timing and sequencing problems in a container's events.

Four independent rules, all applied (one event can trigger several):
1. Late arrival: port_arrival more than 2 hours after metadata.expected_arrival
2. Unusual gap: more than 24 hours since the previous event
3. Duplicate event: same event type repeated within 1 hour
4. Out of sequence: next event type not allowed after the current one
"""

import structlog
from typing import Iterable, Optional

from config.tracking import (
    LATE_ARRIVAL_THRESHOLD_MINUTES,
    UNUSUAL_GAP_HOURS,
    DUPLICATE_WINDOW_HOURS,
)
from models.event import EventType, TrackingEvent
from models.container_summary import Anomaly, AnomalyType
from utils.time_utils import (
    calculate_delay_minutes,
    calculate_gap_hours,
    round_half_up,
    sort_chronologically,
)

logger = structlog.get_logger(__name__)


class AnomalyService:
    """
    Evaluates anomaly rules over one container's events.

    Thresholds default to config.tracking and can be overridden per instance.
    """

    def __init__(
        self,
        late_arrival_minutes: int = LATE_ARRIVAL_THRESHOLD_MINUTES,
        gap_hours: float = UNUSUAL_GAP_HOURS,
        duplicate_window_hours: float = DUPLICATE_WINDOW_HOURS,
    ):
        """Initialize the anomaly service with its thresholds."""
        self.late_arrival_minutes = late_arrival_minutes
        self.gap_hours = gap_hours
        self.duplicate_window_hours = duplicate_window_hours

    def detect(self, events: Iterable[TrackingEvent]) -> list[Anomaly]:
        """
        Detect anomalies for a single container.

        Events are sorted chronologically (stable) first. Rules 1-3 run
        per event in sorted order, then rule 4 runs over adjacent pairs.

        Args:
            events: All events of one container, in any order

        Returns:
            Anomalies in detection order
        """
        sorted_events = sort_chronologically(events)
        anomalies: list[Anomaly] = []

        for index, event in enumerate(sorted_events):
            late = self._check_late_arrival(event, index)
            if late:
                anomalies.append(late)

            if index > 0:
                gap = self._check_gap(sorted_events[index - 1], event, index)
                if gap:
                    anomalies.append(gap)

            duplicate = self._check_duplicate(sorted_events, index)
            if duplicate:
                anomalies.append(duplicate)

        for index in range(len(sorted_events) - 1):
            out_of_sequence = self._check_sequence(sorted_events[index], sorted_events[index + 1], index + 1)
            if out_of_sequence:
                anomalies.append(out_of_sequence)

        if anomalies:
            logger.debug(
                "anomalies_detected",
                container_id=sorted_events[0].container_id,
                count=len(anomalies),
                types=sorted({anomaly.type.value for anomaly in anomalies})
            )

        return anomalies

    # ===================
    # RULES
    # ===================

    def _check_late_arrival(self, event: TrackingEvent, index: int) -> Optional[Anomaly]:
        if event.event_type != EventType.PORT_ARRIVAL:
            return None

        expected = event.metadata.get("expected_arrival")
        if not expected:
            return None

        delay = calculate_delay_minutes(event.occurred_at, expected)
        if delay is None or delay <= self.late_arrival_minutes:
            return None

        return Anomaly(
            type=AnomalyType.LATE_ARRIVAL,
            message=f"Container arrived {delay} minutes after expected time",
            timestamp=event.timestamp,
            event_index=index,
        )

    def _check_gap(self, previous: TrackingEvent, current: TrackingEvent, index: int) -> Optional[Anomaly]:
        gap_hours = calculate_gap_hours(previous.occurred_at, current.occurred_at)
        if gap_hours <= self.gap_hours:
            return None

        return Anomaly(
            type=AnomalyType.UNUSUAL_GAP,
            message=(
                f"More than {round_half_up(gap_hours)} hours gap between events "
                f"({previous.event_type.value} and {current.event_type.value})"
            ),
            timestamp=current.timestamp,
            event_index=index,
        )

    def _check_duplicate(self, sorted_events: list[TrackingEvent], index: int) -> Optional[Anomaly]:
        """
        Compare with the next event of the same type only.

        The scan stops at the first same-type match even when it is outside
        the window, so a closer repeat further down is not reported here.
        """
        current = sorted_events[index]
        for later_index in range(index + 1, len(sorted_events)):
            later = sorted_events[later_index]
            if later.event_type != current.event_type:
                continue

            gap_hours = calculate_gap_hours(current.occurred_at, later.occurred_at)
            if gap_hours <= self.duplicate_window_hours:
                return Anomaly(
                    type=AnomalyType.DUPLICATE_EVENT,
                    message=(
                        f"Duplicate {current.event_type.value} event detected "
                        f"within {self._window_text()}"
                    ),
                    timestamp=later.timestamp,
                    event_index=later_index,
                )
            return None

        return None

    def _window_text(self) -> str:
        """Duplicate window for messages: "1 hour", "2 hours", "0.5 hours"."""
        hours = self.duplicate_window_hours
        if float(hours).is_integer():
            hours = int(hours)
        return "1 hour" if hours == 1 else f"{hours} hours"

    def _check_sequence(self, current: TrackingEvent, following: TrackingEvent, index: int) -> Optional[Anomaly]:
        allowed = current.rule.successors
        # Empty successor set: no constraint on what follows
        if not allowed or following.event_type in allowed:
            return None

        return Anomaly(
            type=AnomalyType.OUT_OF_SEQUENCE,
            message=(
                f"Out of sequence: {following.event_type.value} follows "
                f"{current.event_type.value} unexpectedly"
            ),
            timestamp=following.timestamp,
            event_index=index,
        )


# Singleton instance
_anomaly_service: Optional[AnomalyService] = None


def get_anomaly_service() -> AnomalyService:
    """Get the singleton anomaly service instance."""
    global _anomaly_service
    if _anomaly_service is None:
        _anomaly_service = AnomalyService()
    return _anomaly_service
