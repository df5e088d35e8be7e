"""
Test data factories.

Uses factory pattern to generate consistent raw event payloads.
"""

from typing import Any, Optional

from models.event import TrackingEvent


class EventFactory:
    """
    Factory for creating raw tracking event dicts.

    Usage:
        # Create with defaults
        event = EventFactory.create()

        # Create with overrides
        event = EventFactory.create(event_type="customs_hold", metadata={"hold_reason": "docs"})

        # Typed helpers fill required metadata
        event = EventFactory.port_arrival(expected_arrival="2024-11-15T06:00:00Z")
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        container_id: Optional[str] = "CONT001",
        event_type: str = "road_checkpoint",
        timestamp: str = "2024-11-15T08:00:00Z",
        location: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> dict:
        """
        Create a single event dict.

        Args:
            container_id: Container ID (None leaves the key out)
            event_type: One of the catalog event types
            timestamp: ISO 8601 UTC timestamp
            location: Location (auto-generated if not provided)
            metadata: Metadata dict (None leaves the key out)

        Returns:
            Event dict matching the API input format
        """
        counter = cls._next_counter()
        event: dict[str, Any] = {
            "event_type": event_type,
            "timestamp": timestamp,
            "location": location or f"Location {counter}",
        }
        if container_id is not None:
            event["container_id"] = container_id
        if metadata is not None:
            event["metadata"] = metadata
        return event

    @classmethod
    def port_arrival(cls, expected_arrival: Optional[str] = None, port_code: str = "SG", **overrides) -> dict:
        """Create a port_arrival event."""
        metadata = {"port_code": port_code}
        if expected_arrival:
            metadata["expected_arrival"] = expected_arrival
        overrides.setdefault("location", "Port of Singapore")
        return cls.create(event_type="port_arrival", metadata=metadata, **overrides)

    @classmethod
    def port_departure(cls, port_code: str = "SG", **overrides) -> dict:
        """Create a port_departure event."""
        overrides.setdefault("location", "Port of Singapore")
        return cls.create(event_type="port_departure", metadata={"port_code": port_code}, **overrides)

    @classmethod
    def customs_clearance(
        cls,
        clearance_status: str = "approved",
        extra_metadata: Optional[dict[str, Any]] = None,
        **overrides
    ) -> dict:
        """Create a customs_clearance event."""
        metadata = {"clearance_status": clearance_status, **(extra_metadata or {})}
        return cls.create(event_type="customs_clearance", metadata=metadata, **overrides)

    @classmethod
    def in_transit(cls, voyage_status: str = "on_schedule", **overrides) -> dict:
        """Create an in_transit event."""
        overrides.setdefault("location", "Pacific Ocean")
        return cls.create(event_type="in_transit", metadata={"voyage_status": voyage_status}, **overrides)

    @classmethod
    def lcl_pickup(cls, **overrides) -> dict:
        """Create an lcl_pickup event (no required metadata)."""
        return cls.create(event_type="lcl_pickup", **overrides)

    @classmethod
    def build(cls, event: Optional[dict] = None, **overrides) -> TrackingEvent:
        """Create a validated TrackingEvent (from a raw dict or create() overrides)."""
        return TrackingEvent.from_raw(event if event is not None else cls.create(**overrides))

    @classmethod
    def reset_counter(cls):
        """Reset the counter (call in test setup if needed)."""
        cls._counter = 0


class ShipmentFactory:
    """Factory for shipment dicts ({"container_id": ..., "events": [...]})."""

    @classmethod
    def create(cls, container_id: Optional[str] = "CONT001", events: Optional[list] = None) -> dict:
        """Create a shipment dict."""
        shipment: dict[str, Any] = {"events": events if events is not None else []}
        if container_id is not None:
            shipment["container_id"] = container_id
        return shipment
