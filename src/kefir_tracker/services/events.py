"""
Module: events.py
Description: Batch timeline event service.

Events are hard-deleted. Their sort key is the event timestamp, so two
events written to one batch with the same timestamp overwrite each other.
"""

import uuid
from typing import List, Optional

from kefir_tracker.models.event import BatchEvent
from kefir_tracker.models.request import CreateEventRequest
from kefir_tracker.services.ownership import load_owned_batch
from kefir_tracker.storage import keys
from kefir_tracker.storage.dynamodb import EntityStore
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso, parse_iso, to_iso

logger = get_logger(__name__)


class EventService:
    """Create, list and delete events on a caller's batch."""

    def __init__(self, accessors: EntityAccessors, store: EntityStore):
        self.accessors = accessors
        self.store = store

    async def create_event(self, batch_id: str, user_id: str, request: CreateEventRequest) -> BatchEvent:
        """
        Record an event on a batch.

        The timestamp defaults to now and is normalized to UTC with
        millisecond precision so sort keys order chronologically.

        Raises:
            NotFoundError: If the batch is missing or not owned by the caller
        """
        await load_owned_batch(self.accessors, batch_id, user_id)

        timestamp = to_iso(parse_iso(request.timestamp)) if request.timestamp else now_iso()

        event = BatchEvent(
            **keys.event_keys(batch_id, timestamp),
            event_id=str(uuid.uuid4()),
            batch_id=batch_id,
            user_id=user_id,
            type=request.type,
            timestamp=timestamp,
            description=request.description,
            metadata=request.metadata,
            photo_key=request.photo_key,
            created_at=now_iso()
        )

        record = await self.store.put(event.to_item())

        logger.info(
            "Event created",
            batch_id=batch_id,
            user_id=user_id,
            event_type=event.type.value,
            timestamp=timestamp
        )
        return BatchEvent.model_validate(record)

    async def list_events(self, batch_id: str, user_id: str, limit: Optional[int] = None) -> List[BatchEvent]:
        """A batch's events, most recent first."""
        await load_owned_batch(self.accessors, batch_id, user_id)
        return await self.accessors.get_batch_events(batch_id, limit=limit)

    async def delete_event(self, batch_id: str, user_id: str, timestamp: str) -> None:
        await load_owned_batch(self.accessors, batch_id, user_id)

        event_keys = keys.event_keys(batch_id, timestamp)
        await self.store.delete(event_keys["PK"], event_keys["SK"])

        logger.info(
            "Event deleted",
            batch_id=batch_id,
            user_id=user_id,
            timestamp=timestamp
        )
