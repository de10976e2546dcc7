"""
Module: config
Description: Package initialization for application configuration.

Settings are loaded once from the environment and shared through the
module-level ``settings`` instance in ``config.settings``.
"""

__all__ = []
