"""
Module: ownership.py
Description: Batch ownership checks shared by the batch-scoped services.

A batch that exists but belongs to someone else is reported exactly like
a batch that does not exist, so callers cannot probe for other users'
batch identifiers.
"""

from kefir_tracker.models.batch import Batch
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.errors import ForbiddenError, NotFoundError
from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)

BATCH_NOT_FOUND = "Batch not found"


def ensure_owner(owner_id: str, user_id: str, resource: str = "batch") -> None:
    """
    Raises:
        ForbiddenError: If ``user_id`` does not own the resource
    """
    if owner_id != user_id:
        raise ForbiddenError(f"You do not have access to this {resource}")


async def load_owned_batch(accessors: EntityAccessors, batch_id: str, user_id: str) -> Batch:
    """
    Load a batch by id and verify the caller owns it.

    Raises:
        NotFoundError: If the batch is missing or owned by another user
    """
    batch = await accessors.get_batch_by_id(batch_id)
    if batch is None:
        raise NotFoundError(BATCH_NOT_FOUND)

    try:
        ensure_owner(batch.user_id, user_id)
    except ForbiddenError:
        logger.warning(
            "Cross-user batch access denied",
            batch_id=batch_id,
            user_id=user_id
        )
        raise NotFoundError(BATCH_NOT_FOUND) from None

    return batch
