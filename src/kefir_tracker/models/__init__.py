"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains all data models used by the Kefir Tracker API:
- Stored records: User, Batch, BatchEvent, Reminder, Device
- Request models for every endpoint
- Response projections (public batch view, photo upload target)

All models are exported here for convenient importing.
"""

from .batch import Batch, BatchStage, BatchStatus
from .device import Device, DevicePlatform
from .event import BatchEvent, EventType
from .reminder import Reminder, ReminderStatus, ReminderSuggestion
from .response import PhotoUploadTarget, PublicBatchView
from .user import User

__all__ = [
    "Batch",
    "BatchStage",
    "BatchStatus",
    "BatchEvent",
    "EventType",
    "Device",
    "DevicePlatform",
    "Reminder",
    "ReminderStatus",
    "ReminderSuggestion",
    "PhotoUploadTarget",
    "PublicBatchView",
    "User",
]
