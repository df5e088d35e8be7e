"""
Container status and journey progress.

Status comes from the latest event's catalog entry. Progress walks the
chronological events against an ordered milestone template.
"""

from typing import Sequence

from config.tracking import DEFAULT_STATUS, JOURNEY_MILESTONES, MAX_PROGRESS_PCT
from models.event import TrackingEvent, get_event_rule
from utils.time_utils import round_half_up


def get_current_status(last_event: TrackingEvent) -> str:
    """
    Status label for a container whose latest event is last_event.

    Args:
        last_event: Chronologically last event of the container

    Returns:
        Catalog status label, or DEFAULT_STATUS for an unmapped type
    """
    rule = get_event_rule(last_event.event_type)
    return rule.status if rule else DEFAULT_STATUS


def calculate_journey_progress(
    sorted_events: Sequence[TrackingEvent],
    milestones: Sequence[str] = JOURNEY_MILESTONES,
) -> int:
    """
    Percentage of journey milestones reached, in order.

    A pointer moves through the template; an event consumes the
    milestone under the pointer when the types match. Each template
    position is consumed once, so a type listed twice (origin and
    destination port_arrival) needs two matching events.

    Example (5 milestones):
        port_arrival, customs_clearance → 40
        port_arrival, port_departure → 20 (customs_clearance not reached yet)

    Args:
        sorted_events: Events in chronological order
        milestones: Ordered milestone event types

    Returns:
        Integer 0-100
    """
    if not sorted_events or not milestones:
        return 0

    reached = 0
    for event in sorted_events:
        if reached < len(milestones) and event.event_type.value == milestones[reached]:
            reached += 1

    return min(round_half_up(reached / len(milestones) * 100), MAX_PROGRESS_PCT)
