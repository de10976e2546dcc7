"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared utility functions and helpers used
throughout the Kefir Tracker API application.

Current utilities:
- logger: Structured logging configuration and helpers
- errors: Domain error hierarchy
- validation: Request parsing and structured validation errors
- timeutils: UTC ISO 8601 timestamp helpers
- metrics: CloudWatch custom metrics
"""

__all__ = []
