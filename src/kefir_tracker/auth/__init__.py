"""
Module: auth
Description: Package initialization for caller identity.

This package contains:
- identity: Caller identity from JWT authorizer claims
"""

__all__ = []
