"""
Module: reminders.py
Description: Reminder endpoints.

Implements:
- GET /batches/{batch_id}/reminders/suggestions
- POST /batches/{batch_id}/reminders/confirm
- GET /me/reminders?includeAll=
- DELETE /me/reminders/{reminder_id}

Dependencies: FastAPI, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi import status as status_codes

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import ensure_user, get_metrics_client, get_reminder_service
from kefir_tracker.models.request import ConfirmRemindersRequest, ReminderListQuery
from kefir_tracker.services.reminders import ReminderService
from kefir_tracker.utils.metrics import MetricsClient
from kefir_tracker.utils.validation import path_param, query_params

router = APIRouter(tags=["reminders"])


@router.get("/batches/{batch_id}/reminders/suggestions")
async def get_suggestions(
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: ReminderService = Depends(get_reminder_service)
) -> Dict[str, Any]:
    """Suggested reminder times for the batch's stage and target duration."""
    suggestions = await service.get_suggestions(batch_id, user.user_id)
    return {
        "suggestions": [
            s.model_dump(by_alias=True, exclude_none=True) for s in suggestions
        ]
    }


@router.post("/batches/{batch_id}/reminders/confirm", status_code=status_codes.HTTP_201_CREATED)
async def confirm_reminders(
    request: ConfirmRemindersRequest,
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: ReminderService = Depends(get_reminder_service),
    metrics_client: MetricsClient = Depends(get_metrics_client)
) -> Dict[str, Any]:
    """
    Schedule the reminders the user accepted.

    Example:
        POST /batches/{batch_id}/reminders/confirm
        {"reminders": [{"scheduledTime": "2030-01-02T08:00:00.000Z", "message": "Check kefir"}]}

        Response (201 Created):
        {"reminders": [{"reminderId": "...", "status": "pending", ...}], "count": 1}
    """
    reminders = await service.confirm_reminders(batch_id, user.user_id, request.reminders)
    metrics_client.reminders_scheduled(len(reminders))
    return {"reminders": [r.to_api() for r in reminders], "count": len(reminders)}


@router.get("/me/reminders")
async def list_reminders(
    query: ReminderListQuery = Depends(query_params(ReminderListQuery)),
    user: UserContext = Depends(ensure_user),
    service: ReminderService = Depends(get_reminder_service)
) -> Dict[str, Any]:
    reminders = await service.list_reminders(user.user_id, include_all=query.include_all)
    return {"reminders": [r.to_api() for r in reminders], "count": len(reminders)}


@router.delete("/me/reminders/{reminder_id}")
async def cancel_reminder(
    reminder_id: str = Depends(path_param("reminder_id")),
    user: UserContext = Depends(ensure_user),
    service: ReminderService = Depends(get_reminder_service)
) -> Dict[str, Any]:
    await service.cancel_reminder(reminder_id, user.user_id)
    return {"message": "Reminder cancelled successfully"}
