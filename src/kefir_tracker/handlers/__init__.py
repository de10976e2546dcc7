"""
Module: handlers
Description: Package initialization for API request handlers.

This package contains FastAPI routers for all API endpoints:
- batches: Batch CRUD and photo upload flow
- events: Batch timeline events
- reminders: Reminder suggestions, scheduling and cancellation
- devices: Push device registration
- export: CSV export
- public: Unauthenticated shared batch view

Plus the reminder_fired Lambda handler invoked by EventBridge Scheduler.
"""

__all__ = []
