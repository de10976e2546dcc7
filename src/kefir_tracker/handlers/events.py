"""
Module: events.py
Description: Batch timeline event endpoints.

Implements:
- POST /batches/{batch_id}/events
- GET /batches/{batch_id}/events?limit=
- DELETE /batches/{batch_id}/events/{timestamp}

Dependencies: FastAPI, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi import status as status_codes

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import ensure_user, get_event_service
from kefir_tracker.models.request import CreateEventRequest, EventListQuery
from kefir_tracker.services.events import EventService
from kefir_tracker.utils.validation import path_param, query_params

router = APIRouter(prefix="/batches/{batch_id}/events", tags=["events"])


@router.post("", status_code=status_codes.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: EventService = Depends(get_event_service)
) -> Dict[str, Any]:
    """
    Record an event on a batch.

    Example:
        POST /batches/{batch_id}/events
        {"type": "observation", "description": "Grains look active"}

        Response (201 Created):
        {"event": {"eventId": "...", "timestamp": "2024-01-15T10:30:00.000Z", ...}}
    """
    event = await service.create_event(batch_id, user.user_id, request)
    return {"event": event.to_api()}


@router.get("")
async def list_events(
    query: EventListQuery = Depends(query_params(EventListQuery)),
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: EventService = Depends(get_event_service)
) -> Dict[str, Any]:
    """List a batch's events, most recent first."""
    events = await service.list_events(batch_id, user.user_id, limit=query.limit)
    return {"events": [e.to_api() for e in events], "count": len(events)}


@router.delete("/{timestamp}")
async def delete_event(
    batch_id: str = Depends(path_param("batch_id")),
    timestamp: str = Depends(path_param("timestamp")),
    user: UserContext = Depends(ensure_user),
    service: EventService = Depends(get_event_service)
) -> Dict[str, Any]:
    await service.delete_event(batch_id, user.user_id, timestamp)
    return {"message": "Event deleted successfully"}
