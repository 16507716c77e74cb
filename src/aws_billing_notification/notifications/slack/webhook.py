"""Slack webhook notification sender."""

from __future__ import annotations

import json
from urllib import error, request

from aws_billing_notification.errors import DeliveryError
from aws_billing_notification.notifications.base import NotificationMessage, Notifier
from aws_billing_notification.notifications.slack.formatter import SlackFormatter


class SlackWebhook(Notifier):
    """
    Send messages to Slack via an incoming webhook.

    One POST per message, no retry. The webhook URL is a secret and never
    appears in error messages.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout_seconds: float = 10,
        formatter: SlackFormatter | None = None,
    ):
        """
        Initialize the Slack webhook sender.

        Args:
            webhook_url: Incoming webhook URL.
            timeout_seconds: Timeout for the HTTP request.
            formatter: Formatter used to build the JSON payload.
        """
        self.webhook_url = webhook_url
        self.timeout_seconds = timeout_seconds
        self.formatter = formatter or SlackFormatter()

    def send(self, message: NotificationMessage) -> None:
        """
        Send a message to Slack.

        Raises:
            DeliveryError: If the message fails to send.
        """
        data = json.dumps(self.formatter.to_payload(message)).encode("utf-8")

        req = request.Request(
            self.webhook_url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        try:
            with request.urlopen(req, timeout=self.timeout_seconds) as response:
                status = response.status
                response_body = response.read().decode("utf-8")
        except error.HTTPError as e:
            raise DeliveryError(
                f"HTTP error sending to Slack: {e.code} - {e.reason}", cause=e
            ) from e
        except error.URLError as e:
            raise DeliveryError(f"URL error sending to Slack: {e.reason}", cause=e) from e
        except (OSError, ValueError) as e:
            raise DeliveryError(f"Error sending to Slack: {e}", cause=e) from e

        if status != 200 or response_body != "ok":
            raise DeliveryError(f"Slack API error: {status} - {response_body}")
