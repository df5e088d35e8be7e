"""
Tracking event schemas and the event type catalog.

The catalog is the single source of truth for each event type:
required metadata, the status it puts a container in, and which
event types may legitimately follow it.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import Field

from models.base import FrozenSchema
from utils.time_utils import parse_timestamp


class EventType(str, Enum):
    """Recognized tracking event types."""
    PORT_ARRIVAL = "port_arrival"
    PORT_DEPARTURE = "port_departure"
    CUSTOMS_CLEARANCE = "customs_clearance"
    CUSTOMS_HOLD = "customs_hold"
    CUSTOMS_INSPECTION = "customs_inspection"
    DOCUMENTATION_HOLD = "documentation_hold"
    ROAD_CHECKPOINT = "road_checkpoint"
    LCL_PICKUP = "lcl_pickup"
    LCL_CONSOLIDATION = "lcl_consolidation"
    LCL_DECONSOLIDATION = "lcl_deconsolidation"
    LCL_DELIVERY = "lcl_delivery"
    LCL_DAMAGE_INSPECTION = "lcl_damage_inspection"
    TRANSSHIPMENT_ARRIVAL = "transshipment_arrival"
    TRANSSHIPMENT_LOADING = "transshipment_loading"
    IN_TRANSIT = "in_transit"


VALID_EVENT_TYPES = [event_type.value for event_type in EventType]


# ===================
# EVENT TYPE CATALOG
# ===================

@dataclass(frozen=True)
class EventTypeRule:
    """
    Everything the engine knows about one event type.

    An empty successors set means any event type may follow.
    """
    event_type: EventType
    status: str
    required_metadata: tuple[str, ...] = ()
    successors: frozenset[EventType] = frozenset()


_RULES = (
    EventTypeRule(
        EventType.PORT_ARRIVAL,
        status="at_port",
        required_metadata=("port_code",),  # expected_arrival is optional
        successors=frozenset({
            EventType.CUSTOMS_CLEARANCE,
            EventType.CUSTOMS_HOLD,
            EventType.CUSTOMS_INSPECTION,
            EventType.DOCUMENTATION_HOLD,
            EventType.PORT_DEPARTURE,
        }),
    ),
    EventTypeRule(
        EventType.PORT_DEPARTURE,
        status="departed",
        required_metadata=("port_code",),
        successors=frozenset({
            EventType.IN_TRANSIT,
            EventType.TRANSSHIPMENT_ARRIVAL,
            EventType.PORT_ARRIVAL,
        }),
    ),
    EventTypeRule(
        EventType.CUSTOMS_CLEARANCE,
        status="cleared_customs",
        required_metadata=("clearance_status",),
        successors=frozenset({EventType.PORT_DEPARTURE, EventType.IN_TRANSIT}),
    ),
    EventTypeRule(
        EventType.CUSTOMS_HOLD,
        status="held_by_customs",
        required_metadata=("hold_reason",),
        successors=frozenset({EventType.CUSTOMS_CLEARANCE, EventType.CUSTOMS_INSPECTION}),
    ),
    EventTypeRule(
        EventType.CUSTOMS_INSPECTION,
        status="under_customs_inspection",
        successors=frozenset({EventType.CUSTOMS_CLEARANCE}),
    ),
    EventTypeRule(
        EventType.DOCUMENTATION_HOLD,
        status="documentation_hold",
        successors=frozenset({EventType.CUSTOMS_CLEARANCE, EventType.PORT_DEPARTURE}),
    ),
    EventTypeRule(
        EventType.ROAD_CHECKPOINT,
        status="in_transit_road",  # checkpoint_id is optional
        successors=frozenset({
            EventType.PORT_ARRIVAL,
            EventType.CUSTOMS_CLEARANCE,
            EventType.LCL_CONSOLIDATION,
        }),
    ),
    EventTypeRule(
        EventType.LCL_PICKUP,
        status="picked_up",
        successors=frozenset({
            EventType.LCL_CONSOLIDATION,
            EventType.ROAD_CHECKPOINT,
            EventType.PORT_ARRIVAL,
        }),
    ),
    EventTypeRule(
        EventType.LCL_CONSOLIDATION,
        status="consolidating",
        successors=frozenset({EventType.PORT_DEPARTURE, EventType.TRANSSHIPMENT_ARRIVAL}),
    ),
    EventTypeRule(
        EventType.LCL_DECONSOLIDATION,
        status="deconsolidating",
        successors=frozenset({EventType.LCL_DELIVERY, EventType.PORT_DEPARTURE}),
    ),
    EventTypeRule(
        EventType.LCL_DELIVERY,
        status="delivered",
    ),
    EventTypeRule(
        EventType.LCL_DAMAGE_INSPECTION,
        status="damage_inspection",
        successors=frozenset({EventType.LCL_DELIVERY}),
    ),
    EventTypeRule(
        EventType.TRANSSHIPMENT_ARRIVAL,
        status="at_transshipment_port",
        required_metadata=("port_code",),
        successors=frozenset({
            EventType.PORT_DEPARTURE,
            EventType.TRANSSHIPMENT_LOADING,
            EventType.IN_TRANSIT,
        }),
    ),
    EventTypeRule(
        EventType.TRANSSHIPMENT_LOADING,
        status="transshipment_loading",
        successors=frozenset({EventType.PORT_DEPARTURE, EventType.IN_TRANSIT}),
    ),
    EventTypeRule(
        EventType.IN_TRANSIT,
        status="in_transit",
        required_metadata=("voyage_status",),
        successors=frozenset({EventType.PORT_ARRIVAL, EventType.TRANSSHIPMENT_ARRIVAL}),
    ),
)


def _build_catalog(rules: tuple[EventTypeRule, ...]) -> dict[EventType, EventTypeRule]:
    """Index rules by event type, refusing duplicates and gaps."""
    catalog: dict[EventType, EventTypeRule] = {}
    for rule in rules:
        if rule.event_type in catalog:
            raise ValueError(f"Duplicate catalog entry for {rule.event_type.value}")
        catalog[rule.event_type] = rule

    missing = set(EventType) - set(catalog)
    if missing:
        raise ValueError(
            "Catalog is missing event types: "
            + ", ".join(sorted(event_type.value for event_type in missing))
        )
    return catalog


EVENT_CATALOG = _build_catalog(_RULES)


def get_event_rule(event_type: Any) -> EventTypeRule | None:
    """
    Look up the catalog rule for an event type.

    Args:
        event_type: EventType or its string value

    Returns:
        EventTypeRule, or None if the value is not a recognized type
    """
    try:
        return EVENT_CATALOG[EventType(event_type)]
    except ValueError:
        return None


# ===================
# EVENT SCHEMAS
# ===================

class TrackingEvent(FrozenSchema):
    """
    A validated tracking event.

    Only built after the whole batch passed validation, so
    occurred_at is always a timezone-aware UTC datetime.
    """

    container_id: str = Field(..., min_length=1, description="Container identifier")
    event_type: EventType = Field(..., description="Event type")
    timestamp: str = Field(..., description="Original ISO 8601 UTC timestamp")
    occurred_at: datetime = Field(..., description="Parsed timestamp")
    location: str = Field(..., min_length=1, description="Where the event happened")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Type-specific fields")

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TrackingEvent":
        """Build from a raw event mapping that already passed validation."""
        metadata = raw.get("metadata")
        return cls(
            container_id=raw["container_id"],
            event_type=raw["event_type"],
            timestamp=raw["timestamp"],
            occurred_at=parse_timestamp(raw["timestamp"]),
            location=raw["location"],
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        )

    @property
    def rule(self) -> EventTypeRule:
        """Catalog rule for this event's type."""
        return EVENT_CATALOG[self.event_type]
