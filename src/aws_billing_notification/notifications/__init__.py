"""Notification integrations for AWS Billing Notification."""

from aws_billing_notification.notifications.base import (
    Attachment,
    AttachmentField,
    NotificationMessage,
    Notifier,
)
from aws_billing_notification.notifications.slack.formatter import SlackFormatter
from aws_billing_notification.notifications.slack.webhook import SlackWebhook

__all__ = [
    "Attachment",
    "AttachmentField",
    "NotificationMessage",
    "Notifier",
    "SlackFormatter",
    "SlackWebhook",
]
