"""Slack message formatting for billing summaries."""

from typing import Any

from aws_billing_notification.collectors.base import Billing
from aws_billing_notification.notifications.base import (
    Attachment,
    AttachmentField,
    NotificationMessage,
)

DEFAULT_USERNAME = "AWS Billing"
DEFAULT_ICON = ":moneybag:"


def format_cost(amount: float) -> str:
    """Format a USD amount as ``$1,234.56``."""
    return f"${amount:,.2f}"


class SlackFormatter:
    """Build billing notifications and Slack webhook payloads."""

    SUMMARY_TEMPLATE = "AWS estimated charges ({as_of}): *{total}*"
    BREAKDOWN_TITLE = "Charges by service"

    def __init__(self, username: str = DEFAULT_USERNAME, icon_emoji: str = DEFAULT_ICON):
        self.username = username
        self.icon_emoji = icon_emoji

    def format_billing(self, billing: Billing) -> NotificationMessage:
        """
        Build the billing summary message.

        The per-service table keeps the order the services were computed in
        and is omitted when there is no breakdown.
        """
        as_of = (
            billing.window.end.strftime("%Y-%m-%d %H:%M UTC")
            if billing.window
            else "last 24 hours"
        )
        text = self.SUMMARY_TEMPLATE.format(as_of=as_of, total=format_cost(billing.total))

        attachments = []
        if billing.services:
            attachments.append(
                Attachment(
                    title=self.BREAKDOWN_TITLE,
                    fields=[
                        AttachmentField(label=s.name, value=format_cost(s.cost))
                        for s in billing.services
                    ],
                )
            )

        return NotificationMessage(
            display_name=self.username,
            icon_hint=self.icon_emoji,
            text=text,
            attachments=attachments,
        )

    @staticmethod
    def to_payload(message: NotificationMessage) -> dict[str, Any]:
        """
        Convert a message to an incoming-webhook payload.

        Uses legacy attachments, whose ``fields`` render as a two-column
        table. An icon hint that is not an ``:emoji:`` is sent as an icon URL.
        """
        payload: dict[str, Any] = {
            "username": message.display_name,
            "text": message.text,
        }
        if message.icon_hint.startswith(":") and message.icon_hint.endswith(":"):
            payload["icon_emoji"] = message.icon_hint
        elif message.icon_hint:
            payload["icon_url"] = message.icon_hint

        if message.attachments:
            payload["attachments"] = [
                {
                    "title": attachment.title,
                    "fields": [
                        {"title": f.label, "value": f.value, "short": True}
                        for f in attachment.fields
                    ],
                }
                for attachment in message.attachments
            ]

        return payload
