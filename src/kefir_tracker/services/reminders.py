"""
Module: reminders.py
Description: Reminder service: suggestions, scheduling and cancellation.

Creating reminders and cancelling them treat the external scheduler
differently. A failed schedule registration fails the whole request
and nothing is stored for that reminder; a failed schedule deletion is
logged and the local cancellation goes ahead anyway, since the table is
the source of truth for reminder status.

Confirmation is not atomic across reminders: if scheduling fails for the
k-th reminder, reminders 1..k-1 stay scheduled and stored.

Key Components:
- ReminderService.get_suggestions: Pure date arithmetic over the batch
- ReminderService.confirm_reminders: Schedule then persist, per reminder
- ReminderService.list_reminders / cancel_reminder
- ReminderService.mark_reminder_sent: Called when a schedule fires

Dependencies: uuid, storage, scheduler, models
Author: Kefir Tracker Team
"""

import uuid
from typing import List

from kefir_tracker.models.reminder import (
    Reminder,
    ReminderStatus,
    ReminderSuggestion,
    calculate_reminder_suggestions,
)
from kefir_tracker.models.request import ReminderInput
from kefir_tracker.scheduler.eventbridge import ReminderScheduler
from kefir_tracker.services.ownership import ensure_owner, load_owned_batch
from kefir_tracker.storage import keys
from kefir_tracker.storage.dynamodb import EntityStore
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.errors import BadRequestError, NotFoundError, SchedulingError
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso, parse_iso, utc_now

logger = get_logger(__name__)


class ReminderService:
    """
    Reminder operations.

    Attributes:
        accessors: Typed entity queries
        store: Entity store for writes
        scheduler: EventBridge Scheduler client
    """

    def __init__(self, accessors: EntityAccessors, store: EntityStore, scheduler: ReminderScheduler):
        self.accessors = accessors
        self.store = store
        self.scheduler = scheduler

    async def get_suggestions(self, batch_id: str, user_id: str) -> List[ReminderSuggestion]:
        batch = await load_owned_batch(self.accessors, batch_id, user_id)
        return calculate_reminder_suggestions(
            batch.stage.value,
            batch.start_date,
            batch.target_duration
        )

    async def confirm_reminders(
        self,
        batch_id: str,
        user_id: str,
        reminders: List[ReminderInput]
    ) -> List[Reminder]:
        """
        Schedule and persist the reminders the user accepted.

        Every scheduled time is checked before anything is scheduled, so
        one past time rejects the whole request with nothing stored.

        Raises:
            NotFoundError: If the batch is missing or not owned by the caller
            BadRequestError: If any scheduled time is not in the future
            SchedulingError: If the scheduler rejects a reminder
        """
        await load_owned_batch(self.accessors, batch_id, user_id)

        now = utc_now()
        for reminder_input in reminders:
            if parse_iso(reminder_input.scheduled_time) <= now:
                raise BadRequestError("Scheduled time must be in the future")

        created: List[Reminder] = []
        for reminder_input in reminders:
            reminder_id = str(uuid.uuid4())

            try:
                schedule_arn = await self.scheduler.create_reminder_schedule(
                    reminder_id=reminder_id,
                    user_id=user_id,
                    batch_id=batch_id,
                    scheduled_time=reminder_input.scheduled_time,
                    message=reminder_input.message
                )
            except Exception as e:
                logger.error(
                    "Reminder scheduling failed",
                    batch_id=batch_id,
                    user_id=user_id,
                    reminder_id=reminder_id,
                    already_created=len(created),
                    error=str(e)
                )
                raise SchedulingError() from e

            timestamp = now_iso()
            reminder = Reminder(
                **keys.reminder_keys(user_id, reminder_id),
                reminder_id=reminder_id,
                user_id=user_id,
                batch_id=batch_id,
                scheduled_time=reminder_input.scheduled_time,
                message=reminder_input.message,
                status=ReminderStatus.PENDING,
                schedule_arn=schedule_arn,
                created_at=timestamp,
                updated_at=timestamp
            )
            await self.store.put(reminder.to_item())
            created.append(reminder)

        logger.info(
            "Reminders scheduled",
            batch_id=batch_id,
            user_id=user_id,
            count=len(created)
        )
        return created

    async def list_reminders(self, user_id: str, include_all: bool = False) -> List[Reminder]:
        """
        A user's reminders in identifier order.

        Unless ``include_all`` is set, only pending reminders still in the
        future are returned.
        """
        reminders = await self.accessors.get_user_reminders(user_id)
        if include_all:
            return reminders

        now = utc_now()
        return [
            r for r in reminders
            if r.status == ReminderStatus.PENDING and parse_iso(r.scheduled_time) > now
        ]

    async def cancel_reminder(self, reminder_id: str, user_id: str) -> None:
        """
        Cancel a reminder (soft delete).

        Raises:
            NotFoundError: If the reminder does not exist
            ForbiddenError: If the reminder belongs to another user
        """
        reminder = await self.accessors.get_reminder(user_id, reminder_id)
        if reminder is None:
            raise NotFoundError("Reminder not found")
        ensure_owner(reminder.user_id, user_id, resource="reminder")

        try:
            await self.scheduler.delete_reminder_schedule(reminder_id)
        except Exception as e:
            logger.warning(
                "Failed to delete reminder schedule, cancelling locally",
                reminder_id=reminder_id,
                user_id=user_id,
                error=str(e)
            )

        await self.store.update(reminder.pk, reminder.sk, {"status": ReminderStatus.CANCELLED.value})

        logger.info("Reminder cancelled", reminder_id=reminder_id, user_id=user_id)

    async def mark_reminder_sent(self, user_id: str, reminder_id: str) -> Reminder:
        """
        Record that a reminder fired.

        Only pending reminders move to ``sent``; a reminder cancelled after
        its schedule already fired keeps its status.

        Raises:
            NotFoundError: If the reminder does not exist
        """
        reminder = await self.accessors.get_reminder(user_id, reminder_id)
        if reminder is None:
            raise NotFoundError("Reminder not found")

        if reminder.status != ReminderStatus.PENDING:
            logger.info(
                "Reminder not pending, leaving status unchanged",
                reminder_id=reminder_id,
                user_id=user_id,
                status=reminder.status.value
            )
            return reminder

        item = await self.store.update(
            reminder.pk,
            reminder.sk,
            {"status": ReminderStatus.SENT.value, "sentAt": now_iso()}
        )

        logger.info("Reminder marked sent", reminder_id=reminder_id, user_id=user_id)
        return Reminder.model_validate(item)
