"""
Module: services
Description: Package initialization for domain services.

One service per resource; services raise errors from utils.errors and
never deal in HTTP status codes:
- batches: Batch lifecycle and photo upload flow
- events: Batch timeline events
- reminders: Suggestions, scheduling and cancellation
- devices: Push device registration
- export: Per-user CSV export
- public: Unauthenticated shared batch view
"""

__all__ = []
