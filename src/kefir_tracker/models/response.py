"""
Module: response.py
Description: API response models for the Kefir Tracker API.

Most endpoints return stored records directly (via ``TableRecord.to_api``);
the models here cover responses that are projections or composites.

Key Components:
- PublicBatchView: Reduced, unauthenticated view of a shared batch
- PhotoUploadTarget: Presigned upload URL plus the key to attach afterwards

Dependencies: pydantic, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PublicBatchView(ResponseModel):
    """
    Public projection of a batch.

    Only these fields are ever exposed without authentication; in
    particular the owner's ``userId`` is never included.
    """

    batch_id: str
    name: str
    stage: str
    status: str
    start_date: str
    public_note: Optional[str] = None
    created_at: str


class PhotoUploadTarget(ResponseModel):
    """Result of the first phase of a photo upload."""

    upload_url: str = Field(..., description="Presigned S3 PUT URL")
    photo_key: str = Field(..., description="Object key to attach once the upload completes")
