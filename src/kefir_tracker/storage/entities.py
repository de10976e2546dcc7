"""
Module: entities.py
Description: Named access patterns over the entity store.

Each accessor fixes the partition, sort key prefix, index and order for
one access pattern and returns typed records. ``get_or_create_user`` is
the only accessor with a write side effect.

Key Components:
- EntityAccessors: Typed queries for users, batches, events, reminders and devices

Dependencies: storage.dynamodb, storage.keys, models
Author: Kefir Tracker Team
"""

from typing import List, Optional

from kefir_tracker.models.batch import Batch
from kefir_tracker.models.device import Device
from kefir_tracker.models.event import BatchEvent
from kefir_tracker.models.reminder import Reminder
from kefir_tracker.models.user import User
from kefir_tracker.storage import keys
from kefir_tracker.storage.dynamodb import EntityStore, SortKeyCondition
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso

logger = get_logger(__name__)


class EntityAccessors:
    """
    Typed access patterns built on EntityStore.

    Attributes:
        store: Underlying entity store
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def get_or_create_user(self, user_id: str, email: str) -> User:
        """
        Return the user record, creating it on first sight.

        Concurrent first requests for the same user may both write; the
        last write wins and both converge on one record.
        """
        user_keys = keys.user_keys(user_id)
        item = await self.store.get(user_keys["PK"], user_keys["SK"])
        if item:
            return User.model_validate(item)

        now = now_iso()
        user = User(
            **user_keys,
            user_id=user_id,
            email=email,
            created_at=now,
            updated_at=now
        )
        await self.store.put(user.to_item())

        logger.info("User created", user_id=user_id)
        return user

    async def get_user_batches(self, user_id: str, limit: Optional[int] = None) -> List[Batch]:
        """A user's batches, most recently created identifiers first."""
        items = await self.store.query(
            keys.user_pk(user_id),
            SortKeyCondition.begins_with(keys.BATCH_PREFIX),
            limit=limit,
            ascending=False
        )
        return [Batch.model_validate(item) for item in items]

    async def get_batch_by_id(self, batch_id: str) -> Optional[Batch]:
        """
        Find a batch by id alone through GSI1.

        GSI1 is eventually consistent, so a batch written moments ago may
        not be visible yet.
        """
        items = await self.store.query(
            keys.batch_pk(batch_id),
            limit=1,
            index_name=self.store.gsi1_index_name
        )
        if not items:
            return None
        return Batch.model_validate(items[0])

    async def get_batch_events(self, batch_id: str, limit: Optional[int] = None) -> List[BatchEvent]:
        """A batch's events, most recent first."""
        items = await self.store.query(
            keys.batch_pk(batch_id),
            SortKeyCondition.begins_with(keys.EVENT_PREFIX),
            limit=limit,
            ascending=False
        )
        return [BatchEvent.model_validate(item) for item in items]

    async def get_user_reminders(self, user_id: str) -> List[Reminder]:
        items = await self.store.query(
            keys.user_pk(user_id),
            SortKeyCondition.begins_with(keys.REMINDER_PREFIX)
        )
        return [Reminder.model_validate(item) for item in items]

    async def get_user_devices(self, user_id: str) -> List[Device]:
        items = await self.store.query(
            keys.user_pk(user_id),
            SortKeyCondition.begins_with(keys.DEVICE_PREFIX)
        )
        return [Device.model_validate(item) for item in items]

    async def get_reminder(self, user_id: str, reminder_id: str) -> Optional[Reminder]:
        reminder_keys = keys.reminder_keys(user_id, reminder_id)
        item = await self.store.get(reminder_keys["PK"], reminder_keys["SK"])
        return Reminder.model_validate(item) if item else None

    async def get_device(self, user_id: str, device_id: str) -> Optional[Device]:
        device_keys = keys.device_keys(user_id, device_id)
        item = await self.store.get(device_keys["PK"], device_keys["SK"])
        return Device.model_validate(item) if item else None
