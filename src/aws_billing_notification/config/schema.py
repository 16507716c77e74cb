"""Pydantic configuration schema for AWS Billing Notification."""

from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_WEBHOOK_PARAMETER = "/billing-notification/slack-webhook-url"


class AWSConfig(BaseModel):
    """AWS region and client configuration."""

    region: str = "us-east-1"  # Parameter Store region
    metrics_region: str = "us-east-1"  # Billing metrics only exist in us-east-1
    call_timeout_seconds: float = Field(default=5, ge=1, le=60)


class WebhookConfig(BaseModel):
    """Where the Slack webhook URL is stored."""

    parameter_name: str = DEFAULT_WEBHOOK_PARAMETER
    with_decryption: bool = True


class CollectionConfig(BaseModel):
    """Billing metric collection configuration."""

    namespace: str = "AWS/Billing"
    metric_name: str = "EstimatedCharges"
    currency: str = "USD"
    max_workers: int = Field(default=1, ge=1, le=10)  # Per-service query concurrency


class ScheduleConfig(BaseModel):
    """Daily run schedule (used at deploy time)."""

    hour_utc: int = Field(default=1, ge=0, le=23)


class SlackConfig(BaseModel):
    """Slack message configuration."""

    username: str = "AWS Billing"
    icon_emoji: str = ":moneybag:"
    timeout_seconds: float = Field(default=10, ge=1, le=30)


class Config(BaseModel):
    """Root configuration for AWS Billing Notification."""

    project_name: str = "aws-billing-notification"
    environment: Literal["dev", "staging", "prod"] = "dev"

    aws: AWSConfig = Field(default_factory=AWSConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    # Resource tags applied by the CDK app
    tags: dict[str, str] = Field(
        default_factory=lambda: {
            "Project": "aws-billing-notification",
            "ManagedBy": "CDK",
        }
    )
