"""
Module: event.py
Description: Batch timeline event record.

Events are children of a batch (``PK = BATCH#<batchId>``) and are keyed by
their timestamp (``SK = EVENT#<timestamp>``), which gives chronological
ordering for free. Two events with the same timestamp on the same batch
collide and the later write wins.

Key Components:
- EventType: Kinds of timeline entries
- BatchEvent: Stored event row

Dependencies: pydantic, enum
Author: Kefir Tracker Team
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from kefir_tracker.models.base import TableRecord


class EventType(str, Enum):
    STAGE_CHANGE = "stage_change"
    OBSERVATION = "observation"
    PHOTO_ADDED = "photo_added"
    STATUS_CHANGE = "status_change"
    NOTE = "note"


class BatchEvent(TableRecord):
    """
    A timestamped entry on a batch's timeline.

    Attributes:
        event_id: Unique event identifier (UUID4)
        batch_id: Parent batch
        user_id: Author, equal to the batch owner
        type: Event type
        timestamp: ISO timestamp, also embedded in the sort key
        description: Free-form description
        metadata: Event-specific data (flexible JSON)
        photo_key: Optional S3 key of an attached photo
    """

    event_id: str
    batch_id: str
    user_id: str
    type: EventType
    timestamp: str
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    photo_key: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None
