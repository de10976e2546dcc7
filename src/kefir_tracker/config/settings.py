"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures all application settings from environment variables with
validation and defaults. Supports .env files for local development.
"""

import re
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Kefir Tracker API", description="Application name")
    app_version: str = Field(default="0.3.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: str = Field(default="us-east-1", description="AWS region")
    aws_account_id: Optional[str] = Field(
        default=None,
        description="AWS account ID, used to derive scheduler target ARNs"
    )
    stage: str = Field(default="dev", description="Deployment stage")

    # DynamoDB settings
    table_name: str = Field(
        ...,
        description="Name of the single DynamoDB table holding every entity"
    )
    gsi1_index_name: str = Field(
        default="GSI1",
        description="Name of the secondary index used for batch-by-id lookups"
    )
    dynamodb_endpoint_url: Optional[str] = Field(
        default=None,
        description="Override endpoint for DynamoDB Local"
    )

    # S3 settings
    photos_bucket_name: str = Field(
        ...,
        description="Name of the S3 bucket holding batch photos"
    )
    presigned_url_expiry: int = Field(
        default=3600,
        ge=60,
        le=604800,
        description="Lifetime in seconds of presigned upload/download URLs"
    )

    # EventBridge Scheduler settings
    scheduler_group_name: str = Field(
        default="default",
        description="EventBridge Scheduler group for reminder schedules"
    )
    reminder_target_arn: Optional[str] = Field(
        default=None,
        description="ARN of the Lambda invoked when a reminder fires"
    )
    scheduler_role_arn: Optional[str] = Field(
        default=None,
        description="IAM role assumed by EventBridge Scheduler"
    )

    # Metrics settings
    metrics_namespace: str = Field(
        default="KefirTracker",
        description="CloudWatch namespace for custom metrics"
    )

    # Local development identity (only honoured when stage == "local")
    dev_user_id: Optional[str] = Field(default=None, description="Local development user ID")
    dev_user_email: Optional[str] = Field(default=None, description="Local development user email")

    @field_validator('table_name')
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Validate DynamoDB table name."""
        if not v or not isinstance(v, str):
            raise ValueError("Table name must be a non-empty string")

        if not re.match(r'^[a-zA-Z0-9_.-]+$', v):
            raise ValueError(
                "Table name must contain only letters, numbers, dots, hyphens, and underscores"
            )

        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    def _require_account_id(self, setting: str) -> str:
        if not self.aws_account_id:
            raise ValueError(f"{setting} is not set and cannot be derived without aws_account_id")
        return self.aws_account_id

    @property
    def resolved_reminder_target_arn(self) -> str:
        """
        Reminder notification Lambda ARN, derived from account and stage when not set.

        Raises:
            ValueError: If neither the ARN nor ``aws_account_id`` is configured
        """
        if self.reminder_target_arn:
            return self.reminder_target_arn
        account_id = self._require_account_id("reminder_target_arn")
        return (
            f"arn:aws:lambda:{self.aws_region}:{account_id}"
            f":function:kefir-reminder-notification-{self.stage}"
        )

    @property
    def resolved_scheduler_role_arn(self) -> str:
        """Scheduler execution role ARN, derived from account and stage when not set."""
        if self.scheduler_role_arn:
            return self.scheduler_role_arn
        account_id = self._require_account_id("scheduler_role_arn")
        return f"arn:aws:iam::{account_id}:role/kefir-scheduler-role-{self.stage}"


# Global settings instance
settings = Settings()
