"""
Module: scheduler
Description: Package initialization for reminder scheduling.

This package contains:
- eventbridge: One-shot EventBridge Scheduler schedules per reminder
"""

__all__ = []
