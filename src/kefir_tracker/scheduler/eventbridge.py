"""
Module: eventbridge.py
Description: EventBridge Scheduler client for reminder schedules.

Each reminder is backed by a one-shot ``at(...)`` schedule that invokes
the reminder notification Lambda with the reminder's identifiers.

Key Components:
- ReminderScheduler: Create and delete one-shot reminder schedules

Dependencies: aioboto3, botocore, json
Author: Kefir Tracker Team
"""

import json
from datetime import datetime
from typing import Optional

from aioboto3 import Session
from botocore.exceptions import ClientError

from kefir_tracker.utils.logger import get_logger
from kefir_tracker.utils.timeutils import parse_iso

logger = get_logger(__name__)


def schedule_name(reminder_id: str) -> str:
    return f"reminder-{reminder_id}"


def at_expression(scheduled_time: str) -> str:
    """``at(YYYY-MM-DDTHH:MM:SS)`` in UTC, the only one-shot form the scheduler accepts."""
    moment: datetime = parse_iso(scheduled_time)
    return f"at({moment.strftime('%Y-%m-%dT%H:%M:%S')})"


class ReminderScheduler:
    """
    EventBridge Scheduler client.

    Attributes:
        group_name: Schedule group reminders are created in
        target_arn: Lambda invoked when a reminder fires
        role_arn: Role the scheduler assumes to invoke the target
    """

    def __init__(
        self,
        target_arn: str,
        role_arn: str,
        group_name: str = "default",
        region_name: Optional[str] = None
    ):
        if not target_arn or not role_arn:
            raise ValueError("target_arn and role_arn must be non-empty strings")

        self.group_name = group_name
        self.target_arn = target_arn
        self.role_arn = role_arn
        self.region_name = region_name
        self.session = Session()

        logger.info(
            "Reminder scheduler initialized",
            group_name=group_name,
            target_arn=target_arn
        )

    async def create_reminder_schedule(
        self,
        reminder_id: str,
        user_id: str,
        batch_id: str,
        scheduled_time: str,
        message: str
    ) -> str:
        """
        Register a one-shot schedule for a reminder.

        Returns:
            The schedule ARN

        Raises:
            ClientError: If the scheduler rejects the request
        """
        name = schedule_name(reminder_id)
        payload = {
            'reminderId': reminder_id,
            'userId': user_id,
            'batchId': batch_id,
            'message': message,
        }

        try:
            async with self.session.client('scheduler', region_name=self.region_name) as scheduler:
                response = await scheduler.create_schedule(
                    Name=name,
                    GroupName=self.group_name,
                    ScheduleExpression=at_expression(scheduled_time),
                    ScheduleExpressionTimezone='UTC',
                    FlexibleTimeWindow={'Mode': 'OFF'},
                    Target={
                        'Arn': self.target_arn,
                        'RoleArn': self.role_arn,
                        'Input': json.dumps(payload),
                    },
                    Description=f"Kefir reminder: {message}"[:512]
                )

                schedule_arn = response['ScheduleArn']
                logger.info(
                    "Reminder schedule created",
                    reminder_id=reminder_id,
                    schedule_name=name,
                    scheduled_time=scheduled_time
                )
                return schedule_arn

        except ClientError as e:
            logger.error(
                "Failed to create reminder schedule",
                reminder_id=reminder_id,
                schedule_name=name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

    async def delete_reminder_schedule(self, reminder_id: str) -> None:
        """
        Delete a reminder's schedule; a schedule that is already gone is not an error.

        Raises:
            ClientError: For any failure other than ResourceNotFoundException
        """
        name = schedule_name(reminder_id)

        try:
            async with self.session.client('scheduler', region_name=self.region_name) as scheduler:
                await scheduler.delete_schedule(Name=name, GroupName=self.group_name)

                logger.info(
                    "Reminder schedule deleted",
                    reminder_id=reminder_id,
                    schedule_name=name
                )

        except ClientError as e:
            if e.response['Error']['Code'] == 'ResourceNotFoundException':
                logger.info(
                    "Reminder schedule already gone",
                    reminder_id=reminder_id,
                    schedule_name=name
                )
                return

            logger.error(
                "Failed to delete reminder schedule",
                reminder_id=reminder_id,
                schedule_name=name,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise
