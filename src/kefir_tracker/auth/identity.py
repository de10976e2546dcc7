"""
Module: identity.py
Description: Caller identity extraction from API Gateway JWT authorizer claims.

Token validation happens upstream in the API Gateway HTTP API JWT
authorizer; by the time a request reaches the app the claims are already
trusted. This module only reads them out of the Lambda event.

Key Components:
- UserContext: Caller identity (user id + email)
- get_user_context(): Read claims from a raw API Gateway event
- resolve_request_identity(): Read claims for a FastAPI request, with a
  local development fallback

Dependencies: fastapi, pydantic, typing
Author: Kefir Tracker Team
"""

from typing import Any, Dict, Optional

from fastapi import Request
from pydantic import BaseModel

from kefir_tracker.config.settings import Settings
from kefir_tracker.utils.errors import UnauthorizedError
from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class UserContext(BaseModel):
    """Authenticated caller."""

    user_id: str
    email: str = ""


def get_user_context(event: Optional[Dict[str, Any]]) -> UserContext:
    """
    Extract the caller from an API Gateway (HTTP API) event.

    Args:
        event: Raw Lambda event

    Returns:
        The caller identity

    Raises:
        UnauthorizedError: If no ``sub`` claim is present
    """
    # Any level may be present but null
    request_context = (event or {}).get("requestContext") or {}
    authorizer = request_context.get("authorizer") or {}
    claims = (authorizer.get("jwt") or {}).get("claims") or {}

    user_id = claims.get("sub")
    if not user_id:
        raise UnauthorizedError()

    return UserContext(user_id=user_id, email=claims.get("email") or "")


def resolve_request_identity(request: Request, settings: Settings) -> UserContext:
    """
    Resolve the caller for an in-flight request.

    Mangum exposes the original Lambda event as ``scope["aws.event"]``.
    When running locally (``stage == "local"``) without an event, the
    configured development identity is used instead.

    Raises:
        UnauthorizedError: If no identity can be resolved
    """
    event = request.scope.get("aws.event")
    if event is not None:
        return get_user_context(event)

    if settings.stage == "local" and settings.dev_user_id:
        logger.debug("Using local development identity", user_id=settings.dev_user_id)
        return UserContext(user_id=settings.dev_user_id, email=settings.dev_user_email or "")

    raise UnauthorizedError()
