"""
Module: test_entities.py
Description: Unit tests for the named entity access patterns.
"""

import pytest

from kefir_tracker.models.batch import Batch, BatchStage
from kefir_tracker.models.event import BatchEvent, EventType
from kefir_tracker.models.reminder import Reminder
from kefir_tracker.storage import keys


def make_batch(user_id: str, batch_id: str) -> Batch:
    return Batch(
        **keys.batch_keys(user_id, batch_id),
        batch_id=batch_id,
        user_id=user_id,
        name=f"Batch {batch_id}",
        stage=BatchStage.STAGE1_OPEN,
        start_date="2024-01-15T08:00:00.000Z",
        created_at="2024-01-15T08:00:00.000Z",
        updated_at="2024-01-15T08:00:00.000Z"
    )


def make_event(batch_id: str, timestamp: str) -> BatchEvent:
    return BatchEvent(
        **keys.event_keys(batch_id, timestamp),
        event_id=f"evt-{timestamp}",
        batch_id=batch_id,
        user_id="u1",
        type=EventType.NOTE,
        timestamp=timestamp,
        description="note",
        created_at=timestamp
    )


class TestEntityAccessors:
    @pytest.mark.asyncio
    async def test_get_or_create_user_is_idempotent(self, accessors, entity_store):
        first = await accessors.get_or_create_user("u1", "a@example.com")
        second = await accessors.get_or_create_user("u1", "changed@example.com")

        assert first.user_id == second.user_id == "u1"
        assert second.email == "a@example.com"

        items = await entity_store.query("USER#u1")
        assert len(items) == 1

    @pytest.mark.asyncio
    async def test_get_user_batches_descending_with_limit(self, accessors, entity_store):
        for batch_id in ("a", "b", "c"):
            await entity_store.put(make_batch("u1", batch_id).to_item())
        await entity_store.put(make_batch("u2", "z").to_item())

        batches = await accessors.get_user_batches("u1")
        limited = await accessors.get_user_batches("u1", limit=2)

        assert [b.batch_id for b in batches] == ["c", "b", "a"]
        assert [b.batch_id for b in limited] == ["c", "b"]
        assert all(isinstance(b, Batch) for b in batches)

    @pytest.mark.asyncio
    async def test_get_user_batches_excludes_other_entities(self, accessors, entity_store):
        await accessors.get_or_create_user("u1", "a@example.com")
        await entity_store.put(make_batch("u1", "a").to_item())
        await entity_store.put({"PK": "USER#u1", "SK": "DEVICE#d1", "token": "t"})

        batches = await accessors.get_user_batches("u1")

        assert [b.batch_id for b in batches] == ["a"]

    @pytest.mark.asyncio
    async def test_get_batch_by_id_uses_gsi1(self, accessors, entity_store):
        await entity_store.put(make_batch("u1", "b1").to_item())

        batch = await accessors.get_batch_by_id("b1")

        assert batch is not None
        assert batch.user_id == "u1"
        assert batch.photo_keys == []

    @pytest.mark.asyncio
    async def test_get_batch_by_id_missing(self, accessors):
        assert await accessors.get_batch_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_get_batch_events_most_recent_first(self, accessors, entity_store):
        for ts in ("2024-01-01T00:00:00.000Z", "2024-01-03T00:00:00.000Z", "2024-01-02T00:00:00.000Z"):
            await entity_store.put(make_event("b1", ts).to_item())
        await entity_store.put(make_event("b2", "2024-01-05T00:00:00.000Z").to_item())

        events = await accessors.get_batch_events("b1")
        limited = await accessors.get_batch_events("b1", limit=1)

        assert [e.timestamp for e in events] == [
            "2024-01-03T00:00:00.000Z",
            "2024-01-02T00:00:00.000Z",
            "2024-01-01T00:00:00.000Z",
        ]
        assert [e.timestamp for e in limited] == ["2024-01-03T00:00:00.000Z"]

    @pytest.mark.asyncio
    async def test_get_user_reminders_and_get_reminder(self, accessors, entity_store):
        for reminder_id in ("r2", "r1"):
            reminder = Reminder(
                **keys.reminder_keys("u1", reminder_id),
                reminder_id=reminder_id,
                user_id="u1",
                batch_id="b1",
                scheduled_time="2030-01-01T00:00:00.000Z",
                message="Check",
                created_at="2024-01-01T00:00:00.000Z",
                updated_at="2024-01-01T00:00:00.000Z"
            )
            await entity_store.put(reminder.to_item())

        reminders = await accessors.get_user_reminders("u1")

        assert [r.reminder_id for r in reminders] == ["r1", "r2"]
        assert (await accessors.get_reminder("u1", "r1")).message == "Check"
        assert await accessors.get_reminder("u2", "r1") is None

    @pytest.mark.asyncio
    async def test_get_device_missing(self, accessors):
        assert await accessors.get_device("u1", "d1") is None
        assert await accessors.get_user_devices("u1") == []
