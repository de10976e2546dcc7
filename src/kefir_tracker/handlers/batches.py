"""
Module: batches.py
Description: Batch and batch photo endpoints.

Implements:
- POST /batches, GET /batches
- GET|PUT|DELETE /batches/{batch_id}
- POST /batches/{batch_id}/photo/upload-url
- POST /batches/{batch_id}/photo
- GET /batches/{batch_id}/photos

Handlers only translate between HTTP and BatchService; errors raised by
the service are turned into responses by the exception handlers in main.py.

Dependencies: FastAPI, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi import status as status_codes

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import ensure_user, get_batch_service, get_metrics_client
from kefir_tracker.models.request import (
    AddPhotoRequest,
    BatchFilters,
    CreateBatchRequest,
    PhotoUploadUrlRequest,
    UpdateBatchRequest,
)
from kefir_tracker.services.batches import BatchService
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.metrics import MetricsClient
from kefir_tracker.utils.validation import path_param, query_params

router = APIRouter(prefix="/batches", tags=["batches"])
logger = get_logger(__name__)


@router.post("", status_code=status_codes.HTTP_201_CREATED)
async def create_batch(
    request: CreateBatchRequest,
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service),
    metrics_client: MetricsClient = Depends(get_metrics_client)
) -> Dict[str, Any]:
    """
    Create a new batch.

    Example:
        POST /batches
        {"name": "Morning batch", "stage": "stage1_open", "targetDuration": 48}

        Response (201 Created):
        {"batch": {"batchId": "...", "status": "active", "photoKeys": [], ...}}
    """
    batch = await service.create_batch(user.user_id, request)
    metrics_client.batch_created(batch.stage.value)
    return {"batch": batch.to_api()}


@router.get("")
async def list_batches(
    filters: BatchFilters = Depends(query_params(BatchFilters)),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    """List the caller's batches, optionally filtered by ``stage`` and ``status``."""
    batches = await service.list_batches(user.user_id, filters)
    return {"batches": [b.to_api() for b in batches], "count": len(batches)}


@router.get("/{batch_id}")
async def get_batch(
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    batch = await service.get_batch(batch_id, user.user_id)
    return {"batch": batch.to_api()}


@router.put("/{batch_id}")
async def update_batch(
    request: UpdateBatchRequest,
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    batch = await service.update_batch(batch_id, user.user_id, request)
    return {"batch": batch.to_api()}


@router.delete("/{batch_id}")
async def archive_batch(
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    """Archive a batch. The batch and its events remain readable."""
    await service.archive_batch(batch_id, user.user_id)
    return {"message": "Batch archived successfully"}


@router.post("/{batch_id}/photo/upload-url")
async def get_photo_upload_url(
    request: Optional[PhotoUploadUrlRequest] = None,
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    """
    First phase of a photo upload.

    Example:
        POST /batches/{batch_id}/photo/upload-url
        {"filename": "jar.png", "contentType": "image/png"}

        Response (200 OK):
        {"uploadUrl": "https://...", "photoKey": "users/u1/batches/b1/1700000000000.png"}
    """
    target = await service.get_photo_upload_url(
        batch_id,
        user.user_id,
        request or PhotoUploadUrlRequest()
    )
    return target.to_api()


@router.post("/{batch_id}/photo")
async def add_photo(
    request: AddPhotoRequest,
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    """Second phase of a photo upload: attach the uploaded key to the batch."""
    batch = await service.add_photo(batch_id, user.user_id, request.photo_key)
    return {"batch": batch.to_api()}


@router.get("/{batch_id}/photos")
async def get_photo_urls(
    batch_id: str = Depends(path_param("batch_id")),
    user: UserContext = Depends(ensure_user),
    service: BatchService = Depends(get_batch_service)
) -> Dict[str, Any]:
    urls = await service.get_photo_urls(batch_id, user.user_id)
    return {"photoUrls": urls}
