"""
Module: storage
Description: Package initialization for data persistence layer.

This package contains the single-table storage layer for the Kefir Tracker API:
- keys: Key builders for every entity kind
- dynamodb: Generic entity store over the DynamoDB table
- entities: Named, typed access patterns

All storage operations follow async interfaces for consistency.
"""

__all__ = []
