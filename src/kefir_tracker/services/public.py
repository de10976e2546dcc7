"""
Module: public.py
Description: Unauthenticated, reduced view of a shared batch.
"""

from kefir_tracker.models.response import PublicBatchView
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.errors import ForbiddenError, NotFoundError
from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class PublicService:
    def __init__(self, accessors: EntityAccessors):
        self.accessors = accessors

    async def get_public_batch(self, batch_id: str) -> PublicBatchView:
        """
        Project a shared batch onto the public field subset.

        Raises:
            NotFoundError: If the batch does not exist
            ForbiddenError: If the batch is not shared
        """
        batch = await self.accessors.get_batch_by_id(batch_id)
        if batch is None:
            raise NotFoundError("Batch not found")

        if not batch.is_public:
            logger.info("Public view refused for private batch", batch_id=batch_id)
            raise ForbiddenError("This batch is not publicly shared")

        return PublicBatchView(
            batch_id=batch.batch_id,
            name=batch.name,
            stage=batch.stage.value,
            status=batch.status.value,
            start_date=batch.start_date,
            public_note=batch.public_note,
            created_at=batch.created_at
        )
