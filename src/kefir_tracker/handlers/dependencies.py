"""
Module: dependencies.py
Description: FastAPI dependency providers shared by every router.

AWS clients are process-wide singletons, created lazily on first use
from Settings and reused across warm Lambda invocations. Tests replace
any provider through ``app.dependency_overrides``.

Key Components:
- get_settings(): Application settings
- get_entity_store() / get_photo_storage() / get_reminder_scheduler() / get_metrics_client()
- get_accessors() and one provider per domain service
- get_current_user(): Caller identity from JWT claims
- ensure_user(): Caller identity, with the user record created on first sight

Dependencies: fastapi, functools
Author: Kefir Tracker Team
"""

from functools import lru_cache

from fastapi import Depends, Request

from kefir_tracker.auth.identity import UserContext, resolve_request_identity
from kefir_tracker.config.settings import Settings, settings
from kefir_tracker.media.s3 import PhotoStorageClient
from kefir_tracker.scheduler.eventbridge import ReminderScheduler
from kefir_tracker.services.batches import BatchService
from kefir_tracker.services.devices import DeviceService
from kefir_tracker.services.events import EventService
from kefir_tracker.services.export import ExportService
from kefir_tracker.services.public import PublicService
from kefir_tracker.services.reminders import ReminderService
from kefir_tracker.storage.dynamodb import EntityStore
from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.logger import bind_request_context
from kefir_tracker.utils.metrics import MetricsClient


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_entity_store() -> EntityStore:
    """
    Dependency to get the entity store.

    Returns:
        Configured EntityStore bound to the single table
    """
    return EntityStore(
        table_name=settings.table_name,
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
        gsi1_index_name=settings.gsi1_index_name
    )


@lru_cache(maxsize=1)
def get_photo_storage() -> PhotoStorageClient:
    return PhotoStorageClient(
        bucket_name=settings.photos_bucket_name,
        region_name=settings.aws_region,
        expires_in=settings.presigned_url_expiry
    )


@lru_cache(maxsize=1)
def get_reminder_scheduler() -> ReminderScheduler:
    return ReminderScheduler(
        target_arn=settings.resolved_reminder_target_arn,
        role_arn=settings.resolved_scheduler_role_arn,
        group_name=settings.scheduler_group_name,
        region_name=settings.aws_region
    )


@lru_cache(maxsize=1)
def get_metrics_client() -> MetricsClient:
    return MetricsClient(
        namespace=settings.metrics_namespace,
        environment=settings.stage,
        region_name=settings.aws_region
    )


def get_accessors(store: EntityStore = Depends(get_entity_store)) -> EntityAccessors:
    return EntityAccessors(store)


def get_batch_service(
    accessors: EntityAccessors = Depends(get_accessors),
    store: EntityStore = Depends(get_entity_store),
    photo_storage: PhotoStorageClient = Depends(get_photo_storage)
) -> BatchService:
    return BatchService(accessors, store, photo_storage)


def get_event_service(
    accessors: EntityAccessors = Depends(get_accessors),
    store: EntityStore = Depends(get_entity_store)
) -> EventService:
    return EventService(accessors, store)


def get_reminder_service(
    accessors: EntityAccessors = Depends(get_accessors),
    store: EntityStore = Depends(get_entity_store),
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler)
) -> ReminderService:
    return ReminderService(accessors, store, scheduler)


def get_device_service(
    accessors: EntityAccessors = Depends(get_accessors),
    store: EntityStore = Depends(get_entity_store)
) -> DeviceService:
    return DeviceService(accessors, store)


def get_export_service(accessors: EntityAccessors = Depends(get_accessors)) -> ExportService:
    return ExportService(accessors)


def get_public_service(accessors: EntityAccessors = Depends(get_accessors)) -> PublicService:
    return PublicService(accessors)


def get_current_user(request: Request, app_settings: Settings = Depends(get_settings)) -> UserContext:
    """
    Dependency resolving the caller.

    Raises:
        UnauthorizedError: If the request carries no identity claims
    """
    return resolve_request_identity(request, app_settings)


async def ensure_user(
    user: UserContext = Depends(get_current_user),
    accessors: EntityAccessors = Depends(get_accessors)
) -> UserContext:
    """Dependency resolving the caller and making sure their user record exists."""
    bind_request_context(user_id=user.user_id)
    await accessors.get_or_create_user(user.user_id, user.email)
    return user
