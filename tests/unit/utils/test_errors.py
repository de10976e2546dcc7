"""
Module: test_errors.py
Description: Unit tests for the domain error hierarchy.
"""

import pytest

from kefir_tracker.utils import errors
from kefir_tracker.utils.errors import (
    AppError,
    BadRequestError,
    ForbiddenError,
    ItemNotFoundError,
    NotFoundError,
    SchedulingError,
    UnauthorizedError,
)


class TestErrors:
    @pytest.mark.parametrize("error, status_code, message", [
        (NotFoundError(), 404, "Resource not found"),
        (UnauthorizedError(), 401, "Unauthorized"),
        (ForbiddenError(), 403, "Forbidden"),
        (BadRequestError(), 400, "Bad request"),
        (SchedulingError(), 500, "Failed to schedule reminder"),
        (AppError(), 500, "Internal server error"),
    ])
    def test_defaults(self, error, status_code, message):
        assert error.status_code == status_code
        assert error.message == message

    def test_item_not_found_is_not_found(self):
        error = ItemNotFoundError("USER#u", "BATCH#b")

        assert isinstance(error, NotFoundError)
        assert (error.pk, error.sk) == ("USER#u", "BATCH#b")

    def test_every_status_code_is_one_the_api_answers(self):
        status_codes = {
            cls.status_code
            for cls in vars(errors).values()
            if isinstance(cls, type) and issubclass(cls, AppError)
        }

        assert status_codes == {400, 401, 403, 404, 500}
