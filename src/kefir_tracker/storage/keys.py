"""
Module: keys.py
Description: Key builders for the single-table design.

The only place that knows how PK/SK/GSI1 strings are shaped. Every write
and every read goes through these helpers so the two paths cannot drift.

    User      PK=USER#<userId>    SK=USER#<userId>
    Batch     PK=USER#<userId>    SK=BATCH#<batchId>    GSI1PK=BATCH#<batchId>  GSI1SK=USER#<userId>
    Event     PK=BATCH#<batchId>  SK=EVENT#<timestamp>
    Reminder  PK=USER#<userId>    SK=REMINDER#<reminderId>
    Device    PK=USER#<userId>    SK=DEVICE#<deviceId>
"""

from typing import Dict

USER_PREFIX = "USER#"
BATCH_PREFIX = "BATCH#"
EVENT_PREFIX = "EVENT#"
REMINDER_PREFIX = "REMINDER#"
DEVICE_PREFIX = "DEVICE#"


def user_pk(user_id: str) -> str:
    return f"{USER_PREFIX}{user_id}"


def batch_pk(batch_id: str) -> str:
    """Partition for a batch's events, and the batch's GSI1 partition."""
    return f"{BATCH_PREFIX}{batch_id}"


def user_keys(user_id: str) -> Dict[str, str]:
    return {"PK": user_pk(user_id), "SK": user_pk(user_id)}


def batch_keys(user_id: str, batch_id: str) -> Dict[str, str]:
    return {
        "PK": user_pk(user_id),
        "SK": f"{BATCH_PREFIX}{batch_id}",
        "GSI1PK": batch_pk(batch_id),
        "GSI1SK": user_pk(user_id),
    }


def event_keys(batch_id: str, timestamp: str) -> Dict[str, str]:
    return {"PK": batch_pk(batch_id), "SK": f"{EVENT_PREFIX}{timestamp}"}


def reminder_keys(user_id: str, reminder_id: str) -> Dict[str, str]:
    return {"PK": user_pk(user_id), "SK": f"{REMINDER_PREFIX}{reminder_id}"}


def device_keys(user_id: str, device_id: str) -> Dict[str, str]:
    return {"PK": user_pk(user_id), "SK": f"{DEVICE_PREFIX}{device_id}"}
