"""
Module: test_device_service.py
Description: Unit tests for DeviceService.
"""

import pytest

from kefir_tracker.models.request import RegisterDeviceRequest
from kefir_tracker.utils.errors import ItemNotFoundError


def registration(token: str, **extra) -> RegisterDeviceRequest:
    return RegisterDeviceRequest.model_validate(
        {"deviceId": "phone-1", "platform": "ios", "token": token, **extra}
    )


class TestDeviceService:
    @pytest.mark.asyncio
    async def test_register_new_device(self, device_service):
        device = await device_service.register_device("user-1", registration("t1", deviceName="iPhone"))

        assert device.device_id == "phone-1"
        assert device.device_name == "iPhone"
        assert device.last_active_at == device.created_at

    @pytest.mark.asyncio
    async def test_re_registration_updates_in_place(self, device_service):
        first = await device_service.register_device("user-1", registration("t1", deviceName="iPhone"))
        second = await device_service.register_device(
            "user-1", registration("t2", platform="android", appVersion="2.0")
        )

        devices = await device_service.list_devices("user-1")

        assert len(devices) == 1
        assert devices[0].token == "t2"
        assert devices[0].platform.value == "android"
        assert devices[0].device_name == "iPhone"
        assert devices[0].app_version == "2.0"
        assert second.created_at == first.created_at

    @pytest.mark.asyncio
    async def test_devices_are_per_user(self, device_service):
        await device_service.register_device("user-1", registration("t1"))
        await device_service.register_device("user-2", registration("t2"))

        assert [d.token for d in await device_service.list_devices("user-1")] == ["t1"]
        assert [d.token for d in await device_service.list_devices("user-2")] == ["t2"]

    @pytest.mark.asyncio
    async def test_unregister_is_hard_delete(self, device_service):
        await device_service.register_device("user-1", registration("t1"))

        await device_service.unregister_device("user-1", "phone-1")
        await device_service.unregister_device("user-1", "phone-1")

        assert await device_service.list_devices("user-1") == []

    @pytest.mark.asyncio
    async def test_update_device_activity(self, device_service):
        device = await device_service.register_device("user-1", registration("t1"))

        refreshed = await device_service.update_device_activity("user-1", "phone-1")

        assert refreshed.last_active_at >= device.last_active_at
        assert refreshed.token == "t1"

    @pytest.mark.asyncio
    async def test_update_activity_of_unknown_device(self, device_service):
        with pytest.raises(ItemNotFoundError):
            await device_service.update_device_activity("user-1", "ghost")
