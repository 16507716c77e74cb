"""Slack notification integration."""

from aws_billing_notification.notifications.slack.webhook import SlackWebhook
from aws_billing_notification.notifications.slack.formatter import SlackFormatter

__all__ = ["SlackWebhook", "SlackFormatter"]
