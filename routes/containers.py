"""
Container API Routes - process tracking event batches.

Endpoints accept events directly, shipments with embedded events,
or a path to a shipments JSON file on the server.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import JSONResponse
import structlog

from models.container_summary import ProcessingResponse, ProcessFileRequest
from services.container_processor_service import get_container_processor_service
from services.shipment_loader_service import (
    require_event_list,
    flatten_shipments,
    load_events_from_file,
)
from exceptions import AppError, EventValidationError, NoEventsFoundError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/containers", tags=["containers"])


def handle_error(e: AppError):
    """Convert input errors to HTTP responses."""
    raise HTTPException(status_code=e.status_code, detail=e.to_dict())


def rejection_response(e: EventValidationError, file_path: str | None = None) -> JSONResponse:
    """Return the engine's rejection body unchanged."""
    return JSONResponse(status_code=e.status_code, content=e.to_rejection(file_path))


# ===================
# PROCESSING ENDPOINTS
# ===================

@router.post(
    "/process",
    response_model=ProcessingResponse,
    response_model_exclude_none=True,
    summary="Process a batch of tracking events"
)
def process_events(payload: Any = Body(...)):
    """
    Process a JSON array of tracking events.

    Returns one summary per container, in first-appearance order.
    Any invalid event rejects the whole batch with status 400.
    """
    try:
        events = require_event_list(payload, what="events")
        results = get_container_processor_service().process(events)
    except EventValidationError as e:
        return rejection_response(e)
    except AppError as e:
        logger.warning("process_events_rejected", code=e.code, error=e.message)
        return handle_error(e)

    return ProcessingResponse.create(results)


@router.post(
    "/process-batch",
    response_model=ProcessingResponse,
    response_model_exclude_none=True,
    summary="Process shipments with embedded events"
)
def process_batch(payload: Any = Body(...)):
    """
    Process a JSON array of shipments.

    Each shipment is {"container_id": ..., "events": [...]}; its events
    are stamped with the shipment's container_id before processing.
    """
    try:
        shipments = require_event_list(payload, what="shipments")
        events = flatten_shipments(shipments)
        if not events:
            raise NoEventsFoundError()
        # The limit applies to flattened events as well as shipments
        require_event_list(events, what="events")
        results = get_container_processor_service().process(events)
    except EventValidationError as e:
        return rejection_response(e)
    except AppError as e:
        logger.warning("process_batch_rejected", code=e.code, error=e.message)
        return handle_error(e)

    return ProcessingResponse.create(results)


@router.post(
    "/process-file",
    response_model=ProcessingResponse,
    response_model_exclude_none=True,
    summary="Process a shipments JSON file on the server"
)
def process_file(data: ProcessFileRequest):
    """
    Process a shipments JSON file.

    Relative paths resolve against SHIPMENT_FILES_DIR (or the working
    directory). The resolved path is echoed in the response.
    """
    resolved = None
    try:
        resolved, _shipments, events = load_events_from_file(data.file_path)
        results = get_container_processor_service().process(events)
    except EventValidationError as e:
        return rejection_response(e, file_path=str(resolved))
    except AppError as e:
        logger.warning("process_file_rejected", file_path=data.file_path, code=e.code, error=e.message)
        return handle_error(e)

    return ProcessingResponse.create(results, file_path=str(resolved))
