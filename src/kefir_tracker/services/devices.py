"""
Module: devices.py
Description: Push notification device registration.

One row per (user, device id). Registering a known device updates it in
place, so repeated registrations never create duplicates.
"""

from typing import List

from kefir_tracker.models.device import Device
from kefir_tracker.models.request import RegisterDeviceRequest
from kefir_tracker.storage import keys
from kefir_tracker.storage.dynamodb import EntityStore
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso

logger = get_logger(__name__)


class DeviceService:
    """Register, list and remove a user's devices."""

    def __init__(self, accessors: EntityAccessors, store: EntityStore):
        self.accessors = accessors
        self.store = store

    async def register_device(self, user_id: str, request: RegisterDeviceRequest) -> Device:
        """
        Register a device, or refresh the token and details of a known one.

        Optional details omitted from a re-registration keep their stored value.
        """
        now = now_iso()
        existing = await self.accessors.get_device(user_id, request.device_id)

        if existing is not None:
            updates = {
                "token": request.token,
                "platform": request.platform.value,
                "lastActiveAt": now,
            }
            if request.device_name is not None:
                updates["deviceName"] = request.device_name
            if request.app_version is not None:
                updates["appVersion"] = request.app_version

            item = await self.store.update(existing.pk, existing.sk, updates)

            logger.info(
                "Device re-registered",
                user_id=user_id,
                device_id=request.device_id,
                platform=request.platform.value
            )
            return Device.model_validate(item)

        device = Device(
            **keys.device_keys(user_id, request.device_id),
            device_id=request.device_id,
            user_id=user_id,
            platform=request.platform,
            token=request.token,
            device_name=request.device_name,
            app_version=request.app_version,
            last_active_at=now,
            created_at=now,
            updated_at=now
        )
        await self.store.put(device.to_item())

        logger.info(
            "Device registered",
            user_id=user_id,
            device_id=request.device_id,
            platform=request.platform.value
        )
        return device

    async def list_devices(self, user_id: str) -> List[Device]:
        return await self.accessors.get_user_devices(user_id)

    async def unregister_device(self, user_id: str, device_id: str) -> None:
        """Hard delete; unregistering an unknown device is not an error."""
        device_keys = keys.device_keys(user_id, device_id)
        await self.store.delete(device_keys["PK"], device_keys["SK"])

        logger.info("Device unregistered", user_id=user_id, device_id=device_id)

    async def update_device_activity(self, user_id: str, device_id: str) -> Device:
        """
        Refresh a device's last active time.

        Not called by the HTTP API; exposed for callers outside this
        package, such as a push notification sender.

        Raises:
            ItemNotFoundError: If the device is not registered
        """
        device_keys = keys.device_keys(user_id, device_id)
        item = await self.store.update(device_keys["PK"], device_keys["SK"], {"lastActiveAt": now_iso()})
        return Device.model_validate(item)
