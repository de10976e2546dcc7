"""
Module: device.py
Description: Push notification device registration record.
"""

from enum import Enum
from typing import Optional

from kefir_tracker.models.base import TableRecord


class DevicePlatform(str, Enum):
    IOS = "ios"
    ANDROID = "android"


class Device(TableRecord):
    """
    One row per (user, device); re-registering updates the row in place.

    Attributes:
        device_id: Client-generated device identifier
        platform: ios or android
        token: FCM or APNS push token
        last_active_at: Last registration or activity timestamp
    """

    device_id: str
    user_id: str
    platform: DevicePlatform
    token: str
    device_name: Optional[str] = None
    app_version: Optional[str] = None
    last_active_at: str
    created_at: str
    updated_at: str
