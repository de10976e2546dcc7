"""
Module: conftest.py
Description: Shared pytest fixtures for Kefir Tracker API tests.

Provides reusable fixtures for the mocked single table, the entity
store and accessors, domain services, and a TestClient wired to them
through dependency overrides. Uses moto for AWS service mocking so tests
are fast and isolated.
"""

import os

# Settings are read at import time; configure the environment first
os.environ.setdefault("TABLE_NAME", "kefir-test-table")
os.environ.setdefault("PHOTOS_BUCKET_NAME", "kefir-test-photos")
os.environ.setdefault("STAGE", "test")
os.environ.setdefault("AWS_ACCOUNT_ID", "123456789012")
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"

from unittest.mock import AsyncMock, MagicMock

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from kefir_tracker.auth.identity import UserContext
from kefir_tracker.handlers.dependencies import (
    get_current_user,
    get_entity_store,
    get_metrics_client,
    get_photo_storage,
    get_reminder_scheduler,
)
from kefir_tracker.main import app
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

TEST_TABLE_NAME = os.environ["TABLE_NAME"]
TEST_BUCKET_NAME = os.environ["PHOTOS_BUCKET_NAME"]
TEST_USER = UserContext(user_id="user-1", email="alice@example.com")
OTHER_USER = UserContext(user_id="user-2", email="bob@example.com")


@pytest.fixture
def aws():
    """Keep every AWS call in the test inside one moto mock."""
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_table(aws):
    """
    Create the mock single table with its GSI1 index.

    Same schema as production: PK/SK primary key, GSI1PK/GSI1SK index.
    """
    dynamodb = boto3.resource('dynamodb', region_name='us-east-1')

    table = dynamodb.create_table(
        TableName=TEST_TABLE_NAME,
        KeySchema=[
            {'AttributeName': 'PK', 'KeyType': 'HASH'},
            {'AttributeName': 'SK', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PK', 'AttributeType': 'S'},
            {'AttributeName': 'SK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI1PK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI1SK', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'GSI1',
                'KeySchema': [
                    {'AttributeName': 'GSI1PK', 'KeyType': 'HASH'},
                    {'AttributeName': 'GSI1SK', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )

    yield table


@pytest.fixture
def entity_store(dynamodb_table):
    return EntityStore(table_name=TEST_TABLE_NAME, region_name='us-east-1')


@pytest.fixture
def accessors(entity_store):
    return EntityAccessors(entity_store)


@pytest.fixture
def photo_storage(aws):
    boto3.client('s3', region_name='us-east-1').create_bucket(Bucket=TEST_BUCKET_NAME)
    return PhotoStorageClient(bucket_name=TEST_BUCKET_NAME, region_name='us-east-1')


@pytest.fixture
def mock_scheduler():
    """
    Scheduler stand-in returning a realistic schedule ARN per reminder.
    """
    scheduler = AsyncMock(spec=ReminderScheduler)

    async def create(reminder_id, **kwargs):
        return f"arn:aws:scheduler:us-east-1:123456789012:schedule/default/reminder-{reminder_id}"

    scheduler.create_reminder_schedule.side_effect = create
    scheduler.delete_reminder_schedule.return_value = None
    return scheduler


@pytest.fixture
def mock_metrics():
    return MagicMock()


@pytest.fixture
def batch_service(accessors, entity_store, photo_storage):
    return BatchService(accessors, entity_store, photo_storage)


@pytest.fixture
def event_service(accessors, entity_store):
    return EventService(accessors, entity_store)


@pytest.fixture
def reminder_service(accessors, entity_store, mock_scheduler):
    return ReminderService(accessors, entity_store, mock_scheduler)


@pytest.fixture
def device_service(accessors, entity_store):
    return DeviceService(accessors, entity_store)


@pytest.fixture
def export_service(accessors):
    return ExportService(accessors)


@pytest.fixture
def public_service(accessors):
    return PublicService(accessors)


@pytest.fixture
def sample_batch_input():
    """Typical create-batch body."""
    return {
        "name": "Morning batch",
        "stage": "stage1_open",
        "startDate": "2024-01-15T08:00:00.000Z",
        "targetDuration": 48,
        "temperature": 22.5,
        "sugarType": "cane",
        "sugarAmount": 30,
        "notes": "Fresh grains",
        "isPublic": False,
    }


@pytest.fixture
def client(entity_store, photo_storage, mock_scheduler, mock_metrics):
    """
    TestClient for the full app with AWS collaborators overridden.

    Requests run as TEST_USER; call ``client.login_as(user)`` to switch.
    """
    def login_as(user):
        app.dependency_overrides[get_current_user] = lambda: user

    app.dependency_overrides[get_entity_store] = lambda: entity_store
    app.dependency_overrides[get_photo_storage] = lambda: photo_storage
    app.dependency_overrides[get_reminder_scheduler] = lambda: mock_scheduler
    app.dependency_overrides[get_metrics_client] = lambda: mock_metrics
    login_as(TEST_USER)

    test_client = TestClient(app, raise_server_exceptions=False)
    test_client.login_as = login_as

    try:
        yield test_client
    finally:
        app.dependency_overrides = {}
