"""
Module: batch.py
Description: Fermentation batch record and its enumerations.

Key Components:
- BatchStage: First (open container) or second (bottled) fermentation
- BatchStatus: Lifecycle state; ``archived`` is the soft-delete state
- Batch: Stored batch row, also reachable through GSI1 by batch ID

Dependencies: pydantic, enum
Author: Kefir Tracker Team
"""

from enum import Enum
from typing import ClassVar, List, Optional, Set

from pydantic import Field

from kefir_tracker.models.base import TableRecord


class BatchStage(str, Enum):
    STAGE1_OPEN = "stage1_open"
    STAGE2_BOTTLED = "stage2_bottled"


class BatchStatus(str, Enum):
    ACTIVE = "active"
    IN_FRIDGE = "in_fridge"
    READY = "ready"
    ARCHIVED = "archived"


class Batch(TableRecord):
    """
    A kefir batch owned by exactly one user.

    Attributes:
        batch_id: Unique batch identifier (UUID4)
        user_id: Owner; always equals the user embedded in PK
        name: Display name
        stage: Fermentation stage
        status: Lifecycle status
        start_date: ISO timestamp the fermentation started
        target_duration: Target duration in hours
        temperature: Ambient temperature in Celsius
        sugar_type: Sugar used
        sugar_amount: Sugar amount in grams
        notes: Free-form notes
        photo_keys: Ordered, append-only list of S3 object keys
        is_public: Whether the reduced public view may be served
        public_note: Note shown on the public view
    """

    KEY_FIELDS: ClassVar[Set[str]] = {"pk", "sk", "gsi1pk", "gsi1sk"}

    gsi1pk: str = Field(..., alias="GSI1PK")
    gsi1sk: str = Field(..., alias="GSI1SK")

    batch_id: str
    user_id: str
    name: str
    stage: BatchStage
    status: BatchStatus = BatchStatus.ACTIVE
    start_date: str
    target_duration: Optional[float] = None
    temperature: Optional[float] = None
    sugar_type: Optional[str] = None
    sugar_amount: Optional[float] = None
    notes: Optional[str] = None
    photo_keys: List[str] = Field(default_factory=list)
    is_public: bool = False
    public_note: Optional[str] = None
    created_at: str
    updated_at: str
