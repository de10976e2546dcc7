"""
Module: public.py
Description: Unauthenticated shared batch endpoint (GET /public/b/{batch_id}).

No identity is required and no user record is created.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from kefir_tracker.handlers.dependencies import get_public_service
from kefir_tracker.services.public import PublicService
from kefir_tracker.utils.validation import path_param

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/b/{batch_id}")
async def get_public_batch(
    batch_id: str = Depends(path_param("batch_id")),
    service: PublicService = Depends(get_public_service)
) -> Dict[str, Any]:
    view = await service.get_public_batch(batch_id)
    return {"batch": view.to_api()}
