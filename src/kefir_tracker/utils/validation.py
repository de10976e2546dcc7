"""
Module: validation.py
Description: Request parsing helpers and structured validation errors.

Turns raw query strings, path segments and arbitrary payloads into typed
pydantic models. Every violated field is reported, not just the first,
as a list of ``{"path": ..., "message": ...}`` entries.

Key Components:
- ValidationError: Multi-field input error (surfaced as HTTP 400)
- PathParameterError: A required path segment is missing (routing error)
- parse_model(): Validate a mapping against a pydantic model
- query_params() / path_param(): FastAPI dependency factories
- iso_datetime(): Shared validator for ISO 8601 string fields

Dependencies: pydantic, fastapi
Author: Kefir Tracker Team
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kefir_tracker.utils.timeutils import parse_iso

ModelT = TypeVar("ModelT", bound=BaseModel)

# Leading location segments FastAPI adds to request validation errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


class ValidationError(Exception):
    """
    Input failed schema validation.

    Attributes:
        errors: One entry per violated field, each with ``path`` and ``message``
    """

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("Validation failed")
        self.errors = errors

    @classmethod
    def from_error_list(cls, raw_errors: Iterable[Mapping[str, Any]]) -> "ValidationError":
        """Build from pydantic/FastAPI ``errors()`` output."""
        errors = []
        for err in raw_errors:
            loc = list(err.get("loc", ()))
            if loc and loc[0] in _REQUEST_LOCATIONS:
                loc = loc[1:]
            message = str(err.get("msg", "Invalid value"))
            # pydantic prefixes messages raised from validators
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            errors.append({
                "path": ".".join(str(part) for part in loc),
                "message": message,
            })
        return cls(errors)

    def to_response(self) -> Dict[str, Any]:
        return {"error": "Validation failed", "errors": self.errors}


class PathParameterError(Exception):
    """A named path segment was absent; indicates a routing mistake rather than bad input."""

    def __init__(self, name: str):
        super().__init__(f"Path parameter '{name}' is required")
        self.name = name


def parse_model(model_cls: Type[ModelT], data: Optional[Mapping[str, Any]]) -> ModelT:
    """
    Validate a mapping against a pydantic model.

    Args:
        model_cls: Target pydantic model class
        data: Raw input (``None`` is treated as an empty mapping)

    Returns:
        Validated model instance

    Raises:
        ValidationError: Listing every violated field
    """
    try:
        return model_cls.model_validate(dict(data or {}))
    except PydanticValidationError as e:
        raise ValidationError.from_error_list(e.errors()) from e


def query_params(model_cls: Type[ModelT]) -> Callable[[Request], ModelT]:
    """Dependency factory parsing the query string into ``model_cls``."""

    def dependency(request: Request) -> ModelT:
        return parse_model(model_cls, request.query_params)

    return dependency


def path_param(name: str) -> Callable[[Request], str]:
    """Dependency factory extracting a required, non-empty path segment."""

    def dependency(request: Request) -> str:
        value = request.path_params.get(name)
        if not value or not str(value).strip():
            raise PathParameterError(name)
        return str(value)

    return dependency


def iso_datetime(value: Optional[str]) -> Optional[str]:
    """
    Check that a string is an ISO 8601 datetime, returning it unchanged.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if value is None:
        return value
    try:
        parse_iso(value)
    except (TypeError, ValueError):
        raise ValueError("must be a valid ISO 8601 datetime")
    return value
