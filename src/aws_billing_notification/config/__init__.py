"""Configuration management for AWS Billing Notification."""

from aws_billing_notification.config.schema import (
    DEFAULT_WEBHOOK_PARAMETER,
    AWSConfig,
    CollectionConfig,
    Config,
    ScheduleConfig,
    SlackConfig,
    WebhookConfig,
)
from aws_billing_notification.config.loader import get_cached_config, load_config
from aws_billing_notification.config.parameter_store import (
    ParameterStoreResolver,
    SecretResolver,
)

__all__ = [
    "DEFAULT_WEBHOOK_PARAMETER",
    "Config",
    "AWSConfig",
    "CollectionConfig",
    "ScheduleConfig",
    "SlackConfig",
    "WebhookConfig",
    "ParameterStoreResolver",
    "SecretResolver",
    "get_cached_config",
    "load_config",
]
