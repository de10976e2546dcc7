"""
Module: test_validation.py
Description: Unit tests for request parsing helpers.
"""

import pytest
from fastapi import Request

from kefir_tracker.models.request import BatchFilters, CreateBatchRequest
from kefir_tracker.utils.validation import (
    PathParameterError,
    ValidationError,
    iso_datetime,
    parse_model,
    path_param,
)


class TestParseModel:
    def test_valid_payload(self):
        filters = parse_model(BatchFilters, {"stage": "stage2_bottled", "limit": "10"})

        assert filters.stage.value == "stage2_bottled"
        assert filters.limit == 10

    def test_none_is_empty_payload(self):
        assert parse_model(BatchFilters, None).limit == 50

    def test_every_violation_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(CreateBatchRequest, {"name": "", "stage": "stage9", "temperature": 99})

        paths = [e["path"] for e in exc_info.value.errors]
        assert set(paths) == {"name", "stage", "temperature"}
        assert exc_info.value.to_response()["error"] == "Validation failed"

    def test_validator_messages_are_unprefixed(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(CreateBatchRequest, {"name": "b", "stage": "stage1_open", "startDate": "yesterday"})

        assert exc_info.value.errors == [
            {"path": "startDate", "message": "must be a valid ISO 8601 datetime"}
        ]


class TestFromErrorList:
    def test_strips_request_location(self):
        error = ValidationError.from_error_list([
            {"loc": ("body", "reminders", 0, "message"), "msg": "Field required"},
            {"loc": ("query", "limit"), "msg": "Input should be a valid integer"},
        ])

        assert error.errors == [
            {"path": "reminders.0.message", "message": "Field required"},
            {"path": "limit", "message": "Input should be a valid integer"},
        ]


class TestIsoDatetime:
    @pytest.mark.parametrize("value", ["2024-01-15T10:00:00Z", "2024-01-15T10:00:00.000+02:00", "2024-01-15"])
    def test_accepts(self, value):
        assert iso_datetime(value) == value

    def test_none_passes_through(self):
        assert iso_datetime(None) is None

    @pytest.mark.parametrize("value", ["", "not a date", "2024-13-40T00:00:00Z"])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            iso_datetime(value)


def request_with(path_params) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/batches/x", "headers": [], "path_params": path_params})


class TestPathParam:
    def test_returns_segment(self):
        assert path_param("batch_id")(request_with({"batch_id": "b-1"})) == "b-1"

    @pytest.mark.parametrize("path_params", [{}, {"batch_id": ""}, {"batch_id": "  "}])
    def test_blank_segment_is_missing_parameter(self, path_params):
        with pytest.raises(PathParameterError) as exc_info:
            path_param("batch_id")(request_with(path_params))

        assert not isinstance(exc_info.value, ValidationError)
        assert str(exc_info.value) == "Path parameter 'batch_id' is required"
        assert exc_info.value.name == "batch_id"
