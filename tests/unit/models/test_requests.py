"""
Module: test_requests.py
Description: Unit tests for request models and structured validation errors.
"""

import pytest

from kefir_tracker.models.batch import BatchStage, BatchStatus
from kefir_tracker.models.request import (
    BatchFilters,
    ConfirmRemindersRequest,
    CreateBatchRequest,
    CreateEventRequest,
    EventListQuery,
    PhotoUploadUrlRequest,
    RegisterDeviceRequest,
    ReminderListQuery,
    UpdateBatchRequest,
)
from kefir_tracker.utils.validation import ValidationError, parse_model


def error_paths(exc: ValidationError):
    return {e["path"] for e in exc.errors}


class TestCreateBatchRequest:
    def test_valid_camel_case_input(self, sample_batch_input):
        request = parse_model(CreateBatchRequest, sample_batch_input)

        assert request.name == "Morning batch"
        assert request.stage == BatchStage.STAGE1_OPEN
        assert request.target_duration == 48
        assert request.is_public is False

    def test_defaults(self):
        request = parse_model(CreateBatchRequest, {"name": "x", "stage": "stage2_bottled"})

        assert request.start_date is None
        assert request.is_public is False
        assert request.notes is None

    def test_reports_every_violated_field(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(CreateBatchRequest, {
                "name": "",
                "stage": "stage3",
                "targetDuration": 0,
                "temperature": 50,
            })

        assert error_paths(exc_info.value) == {"name", "stage", "targetDuration", "temperature"}
        assert all(e["message"] for e in exc_info.value.errors)

    @pytest.mark.parametrize("name_length,valid", [(1, True), (100, True), (101, False)])
    def test_name_length_bounds(self, name_length, valid):
        data = {"name": "n" * name_length, "stage": "stage1_open"}
        if valid:
            assert parse_model(CreateBatchRequest, data).name == data["name"]
        else:
            with pytest.raises(ValidationError):
                parse_model(CreateBatchRequest, data)

    @pytest.mark.parametrize("duration,valid", [(1, True), (720, True), (0.5, False), (721, False)])
    def test_target_duration_bounds(self, duration, valid):
        data = {"name": "x", "stage": "stage1_open", "targetDuration": duration}
        if valid:
            assert parse_model(CreateBatchRequest, data).target_duration == duration
        else:
            with pytest.raises(ValidationError):
                parse_model(CreateBatchRequest, data)

    def test_start_date_must_be_iso(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(CreateBatchRequest, {"name": "x", "stage": "stage1_open", "startDate": "yesterday"})

        assert exc_info.value.errors == [
            {"path": "startDate", "message": "must be a valid ISO 8601 datetime"}
        ]


class TestUpdateBatchRequest:
    def test_only_sent_fields_are_updates(self):
        request = parse_model(UpdateBatchRequest, {"status": "in_fridge", "notes": None})

        assert request.status == BatchStatus.IN_FRIDGE
        assert request.to_updates() == {"status": "in_fridge", "notes": None}

    def test_empty_update(self):
        assert parse_model(UpdateBatchRequest, {}).to_updates() == {}

    def test_required_attributes_cannot_be_cleared(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(UpdateBatchRequest, {"name": None, "status": None})

        assert error_paths(exc_info.value) == {"name", "status"}

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            parse_model(UpdateBatchRequest, {"status": "deleted"})


class TestQueryModels:
    def test_batch_filters_defaults_and_strings(self):
        assert parse_model(BatchFilters, {}).limit == 50

        filters = parse_model(BatchFilters, {"stage": "stage2_bottled", "limit": "10"})
        assert filters.stage == BatchStage.STAGE2_BOTTLED
        assert filters.limit == 10

    @pytest.mark.parametrize("limit", ["0", "101", "abc"])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(BatchFilters, {"limit": limit})

        assert error_paths(exc_info.value) == {"limit"}

    def test_event_list_query_default(self):
        assert parse_model(EventListQuery, {}).limit == 50
        assert parse_model(EventListQuery, {"limit": "5"}).limit == 5

    def test_include_all(self):
        assert parse_model(ReminderListQuery, {}).include_all is False
        assert parse_model(ReminderListQuery, {"includeAll": "true"}).include_all is True


class TestOtherRequests:
    def test_create_event_request(self):
        request = parse_model(CreateEventRequest, {
            "type": "observation",
            "description": "Bubbles",
            "metadata": {"ph": 4.2},
        })

        assert request.type.value == "observation"
        assert request.timestamp is None
        assert request.metadata == {"ph": 4.2}

    def test_create_event_request_rejects_long_description(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(CreateEventRequest, {"type": "note", "description": "x" * 1001})

        assert error_paths(exc_info.value) == {"description"}

    def test_confirm_reminders_nested_paths(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(ConfirmRemindersRequest, {
                "reminders": [
                    {"scheduledTime": "2030-01-01T00:00:00Z", "message": "ok"},
                    {"scheduledTime": "soon", "message": ""},
                ]
            })

        assert error_paths(exc_info.value) == {"reminders.1.scheduledTime", "reminders.1.message"}

    def test_register_device_request(self):
        request = parse_model(RegisterDeviceRequest, {"deviceId": "d1", "platform": "ios", "token": "t"})
        assert request.platform.value == "ios"

        with pytest.raises(ValidationError) as exc_info:
            parse_model(RegisterDeviceRequest, {"deviceId": "", "platform": "windows"})
        assert error_paths(exc_info.value) == {"deviceId", "platform", "token"}

    def test_photo_upload_defaults(self):
        request = PhotoUploadUrlRequest()

        assert request.filename == "photo.jpg"
        assert request.content_type == "image/jpeg"


class TestValidationErrorShape:
    def test_to_response(self):
        error = ValidationError([{"path": "name", "message": "required"}])

        assert error.to_response() == {
            "error": "Validation failed",
            "errors": [{"path": "name", "message": "required"}],
        }

    def test_from_error_list_strips_request_location(self):
        error = ValidationError.from_error_list([
            {"loc": ("body", "name"), "msg": "Field required"},
            {"loc": ("query", "limit"), "msg": "Value error, too big"},
        ])

        assert error.errors == [
            {"path": "name", "message": "Field required"},
            {"path": "limit", "message": "too big"},
        ]
