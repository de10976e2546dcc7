"""
Module: request.py
Description: API request models for the Kefir Tracker API.

Defines request bodies and query-string models. These models handle
input validation and transformation before any service logic runs.
Field names are snake_case in Python and camelCase on the wire.

Key Components:
- CreateBatchRequest / UpdateBatchRequest / BatchFilters
- PhotoUploadUrlRequest / AddPhotoRequest
- CreateEventRequest / EventListQuery
- ConfirmRemindersRequest / ReminderListQuery / ReminderFiredPayload
- RegisterDeviceRequest

Dependencies: pydantic, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from kefir_tracker.models.batch import BatchStage, BatchStatus
from kefir_tracker.models.device import DevicePlatform
from kefir_tracker.models.event import EventType
from kefir_tracker.utils.validation import iso_datetime


class RequestModel(BaseModel):
    """Base for inbound payloads: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore"
    )


class CreateBatchRequest(RequestModel):
    """
    Request model for POST /batches.

    Attributes:
        name: Batch name (1-100 chars)
        stage: Fermentation stage
        start_date: ISO start timestamp (defaults to now)
        target_duration: Target duration in hours (1-720)
        temperature: Celsius (10-40)
        sugar_type: Sugar used (max 50 chars)
        sugar_amount: Grams (0-1000)
        notes: Free-form notes (max 1000 chars)
        is_public: Whether the public view is enabled
        public_note: Note for the public view (max 500 chars)
    """

    name: str = Field(..., min_length=1, max_length=100)
    stage: BatchStage
    start_date: Optional[str] = None
    target_duration: Optional[float] = Field(default=None, ge=1, le=720)
    temperature: Optional[float] = Field(default=None, ge=10, le=40)
    sugar_type: Optional[str] = Field(default=None, max_length=50)
    sugar_amount: Optional[float] = Field(default=None, ge=0, le=1000)
    notes: Optional[str] = Field(default=None, max_length=1000)
    is_public: bool = False
    public_note: Optional[str] = Field(default=None, max_length=500)

    @field_validator('start_date')
    @classmethod
    def validate_start_date(cls, v: Optional[str]) -> Optional[str]:
        return iso_datetime(v)


class UpdateBatchRequest(RequestModel):
    """
    Request model for PUT /batches/{id}.

    Every field is optional; only fields present in the request are
    written. Optional attributes sent as null are removed from the batch.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    stage: Optional[BatchStage] = None
    status: Optional[BatchStatus] = None
    target_duration: Optional[float] = Field(default=None, ge=1, le=720)
    temperature: Optional[float] = Field(default=None, ge=10, le=40)
    sugar_type: Optional[str] = Field(default=None, max_length=50)
    sugar_amount: Optional[float] = Field(default=None, ge=0, le=1000)
    notes: Optional[str] = Field(default=None, max_length=1000)
    is_public: Optional[bool] = None
    public_note: Optional[str] = Field(default=None, max_length=500)

    @field_validator('name', 'stage', 'status', 'is_public', mode='before')
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Required batch attributes can be changed but not cleared."""
        if v is None:
            raise ValueError("cannot be null")
        return v

    def to_updates(self) -> Dict[str, Any]:
        """Fields explicitly sent by the client, keyed by stored attribute name."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class BatchFilters(RequestModel):
    """Query parameters for GET /batches."""

    stage: Optional[BatchStage] = None
    status: Optional[BatchStatus] = None
    limit: int = Field(default=50, ge=1, le=100)


class PhotoUploadUrlRequest(RequestModel):
    """Request model for POST /batches/{id}/photo/upload-url."""

    filename: str = Field(default="photo.jpg", min_length=1, max_length=255)
    content_type: str = Field(
        default="image/jpeg",
        pattern=r"^[\w.+-]+/[\w.+-]+$",
        description="MIME type the client will upload with"
    )


class AddPhotoRequest(RequestModel):
    """Request model for POST /batches/{id}/photo."""

    photo_key: str = Field(..., min_length=1, max_length=1024)


class CreateEventRequest(RequestModel):
    """
    Request model for POST /batches/{id}/events.

    Attributes:
        type: Event type
        description: Event description (max 1000 chars)
        timestamp: ISO timestamp (defaults to now)
        metadata: Event-specific data
        photo_key: Optional S3 key of an attached photo
    """

    type: EventType
    description: str = Field(..., max_length=1000)
    timestamp: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    photo_key: Optional[str] = None

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: Optional[str]) -> Optional[str]:
        return iso_datetime(v)


class EventListQuery(RequestModel):
    """Query parameters for GET /batches/{id}/events."""

    limit: int = Field(default=50, ge=1, le=100)


class ReminderInput(RequestModel):
    """A single reminder the user accepted."""

    scheduled_time: str
    message: str = Field(..., min_length=1, max_length=200)

    @field_validator('scheduled_time')
    @classmethod
    def validate_scheduled_time(cls, v: str) -> str:
        return iso_datetime(v)


class ConfirmRemindersRequest(RequestModel):
    """Request model for POST /batches/{id}/reminders/confirm."""

    reminders: List[ReminderInput]


class ReminderListQuery(RequestModel):
    """Query parameters for GET /me/reminders."""

    include_all: bool = Field(
        default=False,
        description="Include sent, cancelled and past reminders"
    )


class ReminderFiredPayload(RequestModel):
    """Input EventBridge Scheduler passes to the reminder notification Lambda."""

    reminder_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    batch_id: str = Field(..., min_length=1)
    message: Optional[str] = None


class RegisterDeviceRequest(RequestModel):
    """Request model for POST /me/devices."""

    device_id: str = Field(..., min_length=1)
    platform: DevicePlatform
    token: str = Field(..., min_length=1)
    device_name: Optional[str] = None
    app_version: Optional[str] = None
