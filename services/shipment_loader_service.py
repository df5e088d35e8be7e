"""
Shipment input helpers shared by the HTTP routes and the CLI.

Checks input shape before the engine runs and turns shipment lists
({"container_id": ..., "events": [...]}) into one flat event list.
"""

import json
from pathlib import Path
from typing import Any, Optional, Union
import structlog

from config import settings
from exceptions import (
    InvalidInputError,
    NoEventsFoundError,
    ShipmentFileNotFoundError,
    ShipmentFileParseError,
)

logger = structlog.get_logger(__name__)


def require_event_list(payload: Any, what: str = "events") -> list:
    """
    Ensure a payload is a non-empty list within the batch size limit.

    Args:
        payload: Decoded JSON body or file content
        what: Noun for error messages ("events", "shipments")

    Returns:
        The payload, unchanged

    Raises:
        InvalidInputError: If not a list, empty, or too large
    """
    if not isinstance(payload, list):
        raise InvalidInputError(
            message=f"Input must be an array of {what}",
            details={"received": type(payload).__name__}
        )

    if len(payload) == 0:
        raise InvalidInputError(message=f"Input must be a non-empty array of {what}")

    if len(payload) > settings.max_events_per_request:
        raise InvalidInputError(
            code="BATCH_TOO_LARGE",
            message=f"Too many {what} in one request",
            details={"received": len(payload), "max": settings.max_events_per_request}
        )

    return payload


def flatten_shipments(shipments: list) -> list:
    """
    Flatten shipments into one event list.

    Each embedded event is copied and stamped with its shipment's
    container_id. Shipments without a container_id are skipped.

    Args:
        shipments: List of {"container_id": str, "events": [...]}

    Returns:
        Events in shipment order, then event order
    """
    events = []
    for index, shipment in enumerate(shipments):
        if not isinstance(shipment, dict):
            logger.warning("shipment_skipped_not_object", shipment_index=index)
            continue

        container_id = shipment.get("container_id")
        if not container_id:
            logger.warning("shipment_skipped_missing_container_id", shipment_index=index)
            continue

        shipment_events = shipment.get("events")
        if not isinstance(shipment_events, list):
            logger.debug("shipment_without_events", shipment_index=index, container_id=container_id)
            continue

        for event in shipment_events:
            # Non-objects are kept so validation reports them by position
            events.append({**event, "container_id": container_id} if isinstance(event, dict) else event)

    logger.info("shipments_flattened", shipments=len(shipments), events=len(events))
    return events


def resolve_file_path(file_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve a shipment file path.

    Relative paths are taken from base_dir, then settings.shipment_files_dir,
    then the current working directory.
    """
    path = Path(file_path).expanduser()
    if not path.is_absolute():
        root = base_dir or settings.shipment_files_dir
        path = (Path(root) if root else Path.cwd()) / path
    return path.resolve()


def load_shipments_file(file_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> tuple[Path, list]:
    """
    Read a shipments JSON file.

    Args:
        file_path: Absolute or relative path
        base_dir: Override for the base of relative paths

    Returns:
        (resolved path, list of shipments)

    Raises:
        ShipmentFileNotFoundError: If the file does not exist
        ShipmentFileParseError: If the file is not valid JSON
        InvalidInputError: If the content is not a non-empty array
    """
    resolved = resolve_file_path(file_path, base_dir)
    if not resolved.is_file():
        logger.warning("shipment_file_not_found", file_path=str(resolved))
        raise ShipmentFileNotFoundError(str(resolved))

    try:
        with resolved.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("shipment_file_invalid_json", file_path=str(resolved), error=str(e))
        raise ShipmentFileParseError(str(resolved), str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error("shipment_file_read_failed", file_path=str(resolved), error=str(e))
        raise ShipmentFileParseError(str(resolved), f"Failed to read file: {e}") from e

    require_event_list(data, what="shipments")
    logger.info("shipment_file_loaded", file_path=str(resolved), shipments=len(data))
    return resolved, data


def load_events_from_file(file_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> tuple[Path, list, list]:
    """
    Read a shipments file and flatten it.

    Returns:
        (resolved path, shipments, flattened events)

    Raises:
        NoEventsFoundError: If no shipment contributes any event
        InvalidInputError: If the flattened events exceed the batch limit
    """
    resolved, shipments = load_shipments_file(file_path, base_dir)
    events = flatten_shipments(shipments)
    if not events:
        raise NoEventsFoundError(source="file")
    require_event_list(events, what="events")
    return resolved, shipments, events
