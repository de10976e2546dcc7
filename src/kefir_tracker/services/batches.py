"""
Module: batches.py
Description: Batch service: lifecycle, filtering and the photo upload flow.

Photo uploads are two-phase. The client first asks for a presigned PUT
URL and a photo key, uploads the bytes straight to S3, then attaches the
key to the batch. The batch record is not touched by the first phase.

Key Components:
- BatchService.create_batch / list_batches / get_batch / update_batch
- BatchService.archive_batch: Soft delete (status -> archived)
- BatchService.get_photo_upload_url / add_photo / get_photo_urls

Dependencies: uuid, storage, media, models
Author: Kefir Tracker Team
"""

import uuid
from typing import List

from kefir_tracker.media.s3 import PhotoStorageClient
from kefir_tracker.models.batch import Batch, BatchStatus
from kefir_tracker.models.request import (
    BatchFilters,
    CreateBatchRequest,
    PhotoUploadUrlRequest,
    UpdateBatchRequest,
)
from kefir_tracker.models.response import PhotoUploadTarget
from kefir_tracker.services.ownership import load_owned_batch
from kefir_tracker.storage import keys
from kefir_tracker.storage.dynamodb import EntityStore
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.errors import BadRequestError
from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import now_iso

logger = get_logger(__name__)


class BatchService:
    """
    Batch operations for one caller at a time.

    Attributes:
        accessors: Typed entity queries
        store: Entity store for writes
        photo_storage: Presigned URL generator for the photos bucket
    """

    def __init__(self, accessors: EntityAccessors, store: EntityStore, photo_storage: PhotoStorageClient):
        self.accessors = accessors
        self.store = store
        self.photo_storage = photo_storage

    async def create_batch(self, user_id: str, request: CreateBatchRequest) -> Batch:
        """
        Create a batch owned by ``user_id``.

        Args:
            user_id: Owner
            request: Validated batch input

        Returns:
            The stored batch, with status ``active`` and no photos
        """
        batch_id = str(uuid.uuid4())
        now = now_iso()

        batch = Batch(
            **keys.batch_keys(user_id, batch_id),
            batch_id=batch_id,
            user_id=user_id,
            name=request.name,
            stage=request.stage,
            status=BatchStatus.ACTIVE,
            start_date=request.start_date or now,
            target_duration=request.target_duration,
            temperature=request.temperature,
            sugar_type=request.sugar_type,
            sugar_amount=request.sugar_amount,
            notes=request.notes,
            photo_keys=[],
            is_public=request.is_public,
            public_note=request.public_note,
            created_at=now,
            updated_at=now
        )

        await self.store.put(batch.to_item())

        logger.info(
            "Batch created",
            batch_id=batch_id,
            user_id=user_id,
            stage=batch.stage.value
        )
        return batch

    async def list_batches(self, user_id: str, filters: BatchFilters) -> List[Batch]:
        """
        List a user's batches.

        Stage and status filters are applied after the limited read, so a
        filtered page may hold fewer than ``limit`` batches.
        """
        batches = await self.accessors.get_user_batches(user_id, limit=filters.limit)

        if filters.stage is not None:
            batches = [b for b in batches if b.stage == filters.stage]
        if filters.status is not None:
            batches = [b for b in batches if b.status == filters.status]

        return batches

    async def get_batch(self, batch_id: str, user_id: str) -> Batch:
        return await load_owned_batch(self.accessors, batch_id, user_id)

    async def update_batch(self, batch_id: str, user_id: str, request: UpdateBatchRequest) -> Batch:
        """
        Apply the fields present in ``request``; optional fields sent as null are cleared.

        Raises:
            NotFoundError: If the batch is missing or not owned by the caller
        """
        batch = await load_owned_batch(self.accessors, batch_id, user_id)
        updates = request.to_updates()

        item = await self.store.update(batch.pk, batch.sk, updates)

        logger.info(
            "Batch updated",
            batch_id=batch_id,
            user_id=user_id,
            fields=sorted(updates)
        )
        return Batch.model_validate(item)

    async def archive_batch(self, batch_id: str, user_id: str) -> None:
        """Soft delete: the batch and its events stay in the table."""
        batch = await load_owned_batch(self.accessors, batch_id, user_id)
        await self.store.update(batch.pk, batch.sk, {"status": BatchStatus.ARCHIVED.value})

        logger.info("Batch archived", batch_id=batch_id, user_id=user_id)

    async def get_photo_upload_url(
        self,
        batch_id: str,
        user_id: str,
        request: PhotoUploadUrlRequest
    ) -> PhotoUploadTarget:
        """First phase of a photo upload: a presigned PUT URL and the key it writes to."""
        await load_owned_batch(self.accessors, batch_id, user_id)

        photo_key = self.photo_storage.generate_photo_key(user_id, batch_id, request.filename)
        upload_url = self.photo_storage.get_upload_url(photo_key, request.content_type)

        logger.info(
            "Photo upload URL issued",
            batch_id=batch_id,
            user_id=user_id,
            photo_key=photo_key
        )
        return PhotoUploadTarget(upload_url=upload_url, photo_key=photo_key)

    async def add_photo(self, batch_id: str, user_id: str, photo_key: str) -> Batch:
        """
        Second phase of a photo upload: append the key to the batch.

        Raises:
            NotFoundError: If the batch is missing or not owned by the caller
            BadRequestError: If the key is outside this batch's photo prefix
        """
        batch = await load_owned_batch(self.accessors, batch_id, user_id)

        prefix = self.photo_storage.photo_key_prefix(user_id, batch_id)
        if not photo_key.startswith(prefix):
            raise BadRequestError("Photo key does not belong to this batch")

        item = await self.store.update(
            batch.pk,
            batch.sk,
            {"photoKeys": batch.photo_keys + [photo_key]}
        )

        logger.info(
            "Photo added to batch",
            batch_id=batch_id,
            user_id=user_id,
            photo_count=len(batch.photo_keys) + 1
        )
        return Batch.model_validate(item)

    async def get_photo_urls(self, batch_id: str, user_id: str) -> List[str]:
        """Presigned download URLs for every photo, in attachment order."""
        batch = await load_owned_batch(self.accessors, batch_id, user_id)
        return self.photo_storage.get_download_urls(batch.photo_keys)
