"""
Module: reminder.py
Description: Reminder record and reminder suggestion calculation.

Key Components:
- ReminderStatus: pending -> sent, or pending -> cancelled (soft delete)
- Reminder: Stored reminder row with its EventBridge schedule ARN
- ReminderSuggestion: Candidate reminder offered to the user
- calculate_reminder_suggestions(): Pure date arithmetic over a batch's
  stage, start date and target duration

Dependencies: pydantic, datetime, enum
Author: Kefir Tracker Team
"""

from datetime import timedelta
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kefir_tracker.models.base import TableRecord
from kefir_tracker.models.batch import BatchStage
from kefir_tracker.utils.timeutils import parse_iso, to_iso

# Second fermentation runs 24h unless the batch says otherwise
DEFAULT_STAGE2_DURATION_HOURS = 24
# Gap between "ready" and "move to the fridge"
REFRIGERATE_DELAY_HOURS = 2


class ReminderStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    CANCELLED = "cancelled"


class Reminder(TableRecord):
    """
    A scheduled reminder owned by a user and tied to one batch.

    Attributes:
        reminder_id: Unique reminder identifier (UUID4)
        user_id: Owner
        batch_id: Batch the reminder refers to
        scheduled_time: ISO timestamp the reminder fires at
        message: Notification text
        status: Reminder lifecycle status
        schedule_arn: ARN of the EventBridge schedule backing this reminder
        sent_at: When the reminder fired
    """

    reminder_id: str
    user_id: str
    batch_id: str
    scheduled_time: str
    message: str
    status: ReminderStatus = ReminderStatus.PENDING
    schedule_arn: Optional[str] = None
    sent_at: Optional[str] = None
    created_at: str
    updated_at: str


class ReminderSuggestion(BaseModel):
    """Candidate reminder computed from a batch; never persisted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str = Field(..., description="Suggestion kind, e.g. 'midpoint_check'")
    suggested_time: str = Field(..., description="ISO timestamp")
    message: str
    description: Optional[str] = None


def calculate_reminder_suggestions(
    stage: str,
    start_date: str,
    target_duration: Optional[float] = None
) -> List[ReminderSuggestion]:
    """
    Calculate reminder suggestions for a batch.

    Deterministic for fixed inputs; performs no I/O.

    Args:
        stage: Batch stage value
        start_date: ISO timestamp the batch started
        target_duration: Target duration in hours, if known

    Returns:
        Suggestions in chronological order (empty for unknown stages)

    Example:
        >>> [s.type for s in calculate_reminder_suggestions("stage1_open", "2024-01-01T00:00:00.000Z", 48)]
        ['midpoint_check', 'stage1_complete']
    """
    start = parse_iso(start_date)

    def at(hours: float) -> str:
        return to_iso(start + timedelta(hours=hours))

    suggestions: List[ReminderSuggestion] = []

    if stage == BatchStage.STAGE1_OPEN.value:
        if target_duration:
            suggestions.append(ReminderSuggestion(
                type="midpoint_check",
                suggested_time=at(target_duration / 2),
                message="Check your kefir batch (halfway point)",
                description="Time to check the fermentation progress"
            ))
            suggestions.append(ReminderSuggestion(
                type="stage1_complete",
                suggested_time=at(target_duration),
                message="Your kefir may be ready for bottling",
                description="Stage 1 target duration reached"
            ))
        else:
            suggestions.append(ReminderSuggestion(
                type="daily_check",
                suggested_time=at(24),
                message="Daily kefir check (24h)",
                description="Check fermentation progress"
            ))
            suggestions.append(ReminderSuggestion(
                type="ready_check",
                suggested_time=at(48),
                message="Your kefir may be ready (48h)",
                description="Check if ready for bottling"
            ))

    elif stage == BatchStage.STAGE2_BOTTLED.value:
        duration = target_duration or DEFAULT_STAGE2_DURATION_HOURS
        suggestions.append(ReminderSuggestion(
            type="carbonation_check",
            suggested_time=at(duration / 2),
            message="Check carbonation level",
            description="Halfway through second fermentation"
        ))
        suggestions.append(ReminderSuggestion(
            type="stage2_complete",
            suggested_time=at(duration),
            message="Your kefir is ready to refrigerate",
            description="Second fermentation complete"
        ))
        suggestions.append(ReminderSuggestion(
            type="refrigerate",
            suggested_time=at(duration + REFRIGERATE_DELAY_HOURS),
            message="Move your kefir to the fridge",
            description="Prevent over-carbonation"
        ))

    return suggestions
