"""
Module: export.py
Description: CSV export of everything a user owns.

The export is a fan-out of independent reads (batches, then each batch's
events, reminders, devices) with no snapshot isolation across them.
Rows are flattened to scalar columns; the header is the union of every
row's columns, so it is only known once all rows are in memory.

Key Components:
- ExportService.export_user_data(): Build the CSV document
- flatten_record(): Nested maps -> dotted columns, lists -> JSON

Dependencies: csv, json, io
Author: Kefir Tracker Team
"""

import csv
import io
import json
from typing import Any, Dict, List

from kefir_tracker.storage.entities import EntityAccessors
from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)

RECORD_TYPE_COLUMN = "recordType"
EMPTY_EXPORT = f"{RECORD_TYPE_COLUMN}\n"


def format_value(value: Any) -> str:
    """Render a scalar the way it reads in JSON (``true``, ``48``, ``27.5``)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def flatten_record(record: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    """
    Flatten a record into string columns.

    Nested maps become dotted column names, lists are JSON-encoded and
    missing values become empty strings.

    Example:
        >>> flatten_record({"a": {"b": 1}, "tags": ["x"], "c": None})
        {'a.b': '1', 'tags': '["x"]', 'c': ''}
    """
    flat: Dict[str, str] = {}

    for key, value in record.items():
        column = f"{prefix}.{key}" if prefix else key

        if isinstance(value, dict):
            flat.update(flatten_record(value, column))
        elif isinstance(value, list):
            flat[column] = json.dumps(value)
        else:
            flat[column] = format_value(value)

    return flat


class ExportService:
    """Builds the per-user CSV export."""

    def __init__(self, accessors: EntityAccessors):
        self.accessors = accessors

    async def export_user_data(self, user_id: str) -> str:
        """
        Export batches, events, reminders and devices as one CSV document.

        Returns:
            CSV text; exactly ``recordType\\n`` when the user owns nothing
        """
        batches = await self.accessors.get_user_batches(user_id)
        events = []
        for batch in batches:
            events.extend(await self.accessors.get_batch_events(batch.batch_id))
        reminders = await self.accessors.get_user_reminders(user_id)
        devices = await self.accessors.get_user_devices(user_id)

        rows: List[Dict[str, str]] = []
        for record_type, records in (
            ("batch", batches),
            ("event", events),
            ("reminder", reminders),
            ("device", devices),
        ):
            for record in records:
                rows.append({RECORD_TYPE_COLUMN: record_type, **flatten_record(record.to_item())})

        logger.info(
            "User data exported",
            user_id=user_id,
            batches=len(batches),
            events=len(events),
            reminders=len(reminders),
            devices=len(devices)
        )

        if not rows:
            return EMPTY_EXPORT

        # dict preserves first-seen order
        header: Dict[str, None] = {}
        for row in rows:
            header.update(dict.fromkeys(row))

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=list(header), restval="", lineterminator="\n")
        writer.writeheader()
        writer.writerows(rows)

        # Lines are joined, not terminated
        return output.getvalue()[:-1]
