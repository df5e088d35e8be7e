"""
Event batch validator.

Checks every event in a batch against the event type catalog and
collects all problems. Nothing stops early: each check runs on each
event, and each event is checked regardless of earlier failures.
"""

from typing import Any, Callable, Mapping, Sequence
import structlog

from models.event import VALID_EVENT_TYPES, get_event_rule
from utils.time_utils import is_utc_timestamp

logger = structlog.get_logger(__name__)

# (event, index, errors) -> None, appends to errors
EventCheck = Callable[[Mapping[str, Any], int, list[str]], None]


def _is_non_blank_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _check_container_id(event: Mapping[str, Any], index: int, errors: list[str]) -> None:
    if not _is_non_blank_string(event.get("container_id")):
        errors.append(f"Event {index}: container_id is required and must not be empty")


def _check_event_type(event: Mapping[str, Any], index: int, errors: list[str]) -> None:
    event_type = event.get("event_type")
    if not isinstance(event_type, str) or event_type not in VALID_EVENT_TYPES:
        errors.append(
            f"Event {index}: Invalid event_type '{event_type}'. "
            f"Must be one of: {', '.join(VALID_EVENT_TYPES)}"
        )


def _check_timestamp(event: Mapping[str, Any], index: int, errors: list[str]) -> None:
    if not is_utc_timestamp(event.get("timestamp")):
        errors.append(
            f"Event {index}: timestamp must be a valid ISO 8601 UTC timestamp "
            f"(e.g., 2024-11-15T08:30:00Z)"
        )


def _check_location(event: Mapping[str, Any], index: int, errors: list[str]) -> None:
    if not _is_non_blank_string(event.get("location")):
        errors.append(f"Event {index}: location is required and must not be empty")


def _check_metadata(event: Mapping[str, Any], index: int, errors: list[str]) -> None:
    event_type = event.get("event_type")
    rule = get_event_rule(event_type) if isinstance(event_type, str) else None
    if rule is None or not rule.required_metadata:
        return

    metadata = event.get("metadata")
    if not isinstance(metadata, Mapping):
        errors.append(f"Event {index}: metadata is required for event_type '{event_type}'")
        return

    # Presence only; values are not inspected
    for field in rule.required_metadata:
        if field not in metadata:
            errors.append(
                f"Event {index}: metadata.{field} is required for event_type '{event_type}'"
            )


EVENT_CHECKS: tuple[EventCheck, ...] = (
    _check_container_id,
    _check_event_type,
    _check_timestamp,
    _check_location,
    _check_metadata,
)


def validate_event(event: Any, index: int) -> list[str]:
    """
    Validate a single raw event.

    Args:
        event: Raw event (normally a dict decoded from JSON)
        index: Zero-based position of the event in its batch

    Returns:
        Error messages for this event, empty if it is valid
    """
    if not isinstance(event, Mapping):
        return [f"Event {index}: event must be an object"]

    errors: list[str] = []
    for check in EVENT_CHECKS:
        check(event, index, errors)
    return errors


def validate_events(events: Sequence[Any]) -> list[str]:
    """
    Validate a whole batch of raw events.

    Args:
        events: Raw events in batch order

    Returns:
        All error messages, in batch order; empty if the batch is valid
    """
    errors: list[str] = []
    invalid_events = 0
    for index, event in enumerate(events):
        event_errors = validate_event(event, index)
        if event_errors:
            invalid_events += 1
            errors.extend(event_errors)

    logger.debug(
        "event_batch_validated",
        total=len(events),
        invalid_events=invalid_events,
        errors=len(errors)
    )
    return errors
