"""
Module: media
Description: Package initialization for photo object storage.

This package contains:
- s3: Presigned upload/download URLs for batch photos
"""

__all__ = []
