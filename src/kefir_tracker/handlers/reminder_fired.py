"""
Module: reminder_fired.py
Description: Lambda handler invoked by EventBridge Scheduler when a reminder fires.

The schedule's input carries the reminder's identifiers. This handler
records that the reminder fired; sending the push notification itself
happens elsewhere.

Key Components:
- lambda_handler(): Lambda entry point
- handle_reminder_fired(): Async body, separated for testing

Dependencies: asyncio, typing
Author: Kefir Tracker Team
"""

import asyncio
from typing import Any, Dict, Optional

from kefir_tracker.handlers.dependencies import get_entity_store, get_reminder_scheduler
from kefir_tracker.models.request import ReminderFiredPayload
from kefir_tracker.services.reminders import ReminderService
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.errors import NotFoundError
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.validation import ValidationError, parse_model

logger = get_logger(__name__)


def _build_service() -> ReminderService:
    store = get_entity_store()
    return ReminderService(EntityAccessors(store), store, get_reminder_scheduler())


async def handle_reminder_fired(
    event: Dict[str, Any],
    service: Optional[ReminderService] = None
) -> Dict[str, Any]:
    """
    Mark the fired reminder as sent.

    Args:
        event: Schedule input ``{reminderId, userId, batchId, message}``
        service: Reminder service (built from settings when omitted)

    Returns:
        ``{"status": "sent" | "skipped", "reminderId": ...}``

    Raises:
        ValidationError: If the payload is missing identifiers
    """
    try:
        payload = parse_model(ReminderFiredPayload, event)
    except ValidationError as e:
        logger.error("Invalid reminder payload", errors=e.errors)
        raise

    service = service or _build_service()

    try:
        reminder = await service.mark_reminder_sent(payload.user_id, payload.reminder_id)
    except NotFoundError:
        logger.warning(
            "Fired reminder no longer exists",
            reminder_id=payload.reminder_id,
            user_id=payload.user_id
        )
        return {"status": "skipped", "reminderId": payload.reminder_id}

    return {"status": reminder.status.value, "reminderId": payload.reminder_id}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Lambda entry point."""
    logger.info(
        "Reminder fired",
        reminder_id=(event or {}).get("reminderId"),
        batch_id=(event or {}).get("batchId")
    )
    return asyncio.run(handle_reminder_fired(event))
