"""
Module: devices.py
Description: Push notification device endpoints (POST|GET /me/devices, DELETE /me/devices/{device_id}).
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi import status as status_codes

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import ensure_user, get_device_service
from kefir_tracker.models.request import RegisterDeviceRequest
from kefir_tracker.services.devices import DeviceService
from kefir_tracker.utils.validation import path_param

router = APIRouter(prefix="/me/devices", tags=["devices"])


@router.post("", status_code=status_codes.HTTP_201_CREATED)
async def register_device(
    request: RegisterDeviceRequest,
    user: UserContext = Depends(ensure_user),
    service: DeviceService = Depends(get_device_service)
) -> Dict[str, Any]:
    device = await service.register_device(user.user_id, request)
    return {"device": device.to_api()}


@router.get("")
async def list_devices(
    user: UserContext = Depends(ensure_user),
    service: DeviceService = Depends(get_device_service)
) -> Dict[str, Any]:
    devices = await service.list_devices(user.user_id)
    return {"devices": [d.to_api() for d in devices], "count": len(devices)}


@router.delete("/{device_id}")
async def unregister_device(
    device_id: str = Depends(path_param("device_id")),
    user: UserContext = Depends(ensure_user),
    service: DeviceService = Depends(get_device_service)
) -> Dict[str, Any]:
    await service.unregister_device(user.user_id, device_id)
    return {"message": "Device unregistered successfully"}
