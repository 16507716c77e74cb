"""
Billing Notification Lambda Handler.

Triggered once a day by EventBridge to:
1. Resolve the Slack webhook URL from SSM Parameter Store
2. Read estimated charges from CloudWatch (total and per service)
3. Post the summary to Slack

Any failure stops the run; nothing is retried and no partial message is sent.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from aws_billing_notification.collectors.billing import BillingAggregator
from aws_billing_notification.collectors.cloudwatch import CloudWatchMetricsClient
from aws_billing_notification.config import (
    DEFAULT_WEBHOOK_PARAMETER,
    Config,
    get_cached_config,
)
from aws_billing_notification.config.parameter_store import (
    ParameterStoreResolver,
    SecretResolver,
)
from aws_billing_notification.errors import BillingNotificationError
from aws_billing_notification.notifications.base import NotificationMessage, Notifier
from aws_billing_notification.notifications.slack.formatter import SlackFormatter
from aws_billing_notification.notifications.slack.webhook import SlackWebhook


class PipelineDriver:
    """
    Run one billing notification: resolve webhook, compute billing, deliver.

    The webhook is resolved first, so a missing secret costs no metric
    queries. The notifier is built from the resolved URL.
    """

    def __init__(
        self,
        secret_resolver: SecretResolver,
        aggregator: BillingAggregator,
        notifier_factory: Callable[[str], Notifier],
        formatter: SlackFormatter | None = None,
        webhook_parameter: str = DEFAULT_WEBHOOK_PARAMETER,
    ):
        self.secret_resolver = secret_resolver
        self.aggregator = aggregator
        self.notifier_factory = notifier_factory
        self.formatter = formatter or SlackFormatter()
        self.webhook_parameter = webhook_parameter

    def run(self, now: datetime | None = None) -> NotificationMessage:
        """
        Execute the pipeline once.

        Args:
            now: End of the billing window. Defaults to the current UTC time.

        Returns:
            The message that was delivered.

        Raises:
            BillingNotificationError: From the first step that fails.
        """
        webhook_url = self.secret_resolver.get_secret(self.webhook_parameter)
        print(f"Resolved webhook from parameter {self.webhook_parameter}")

        billing = self.aggregator.compute(now)
        if billing.window:
            print(
                f"Billing window {billing.window.start.isoformat()} - "
                f"{billing.window.end.isoformat()}"
            )
        print(
            f"Estimated charges: ${billing.total:.2f} total across "
            f"{len(billing.services)} services"
        )

        message = self.formatter.format_billing(billing)
        self.notifier_factory(webhook_url).send(message)
        print("Billing notification sent to Slack")

        return message


def build_driver(config: Config) -> PipelineDriver:
    """Wire the AWS-backed collaborators from configuration."""
    metrics_client = CloudWatchMetricsClient(
        region=config.aws.metrics_region,
        timeout_seconds=config.aws.call_timeout_seconds,
    )
    aggregator = BillingAggregator(
        metrics_client,
        namespace=config.collection.namespace,
        metric_name=config.collection.metric_name,
        currency=config.collection.currency,
        max_workers=config.collection.max_workers,
    )
    secret_resolver = ParameterStoreResolver(
        region=config.aws.region,
        with_decryption=config.webhook.with_decryption,
        timeout_seconds=config.aws.call_timeout_seconds,
    )
    formatter = SlackFormatter(
        username=config.slack.username,
        icon_emoji=config.slack.icon_emoji,
    )

    def notifier_factory(webhook_url: str) -> Notifier:
        return SlackWebhook(
            webhook_url,
            timeout_seconds=config.slack.timeout_seconds,
            formatter=formatter,
        )

    return PipelineDriver(
        secret_resolver=secret_resolver,
        aggregator=aggregator,
        notifier_factory=notifier_factory,
        formatter=formatter,
        webhook_parameter=config.webhook.parameter_name,
    )


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda handler for the daily billing notification.

    The event is ignored. Environment variables (see config.loader):
    - CONFIG_ENV: Environment (dev, staging, prod)
    - AWS_REGION: Region of the webhook parameter
    - WEBHOOK_PARAMETER_NAME: SSM parameter holding the webhook URL
    - BILLING_MAX_WORKERS: Concurrent per-service queries

    Raises:
        BillingNotificationError: Re-raised so the runtime marks the
            invocation as failed.
    """
    request_id = getattr(context, "aws_request_id", "local")
    print(f"Billing notification invoked at {datetime.now(UTC).isoformat()} ({request_id})")

    try:
        config = get_cached_config()
        message = build_driver(config).run()
    except BillingNotificationError as e:
        print(f"Billing notification failed [{e.kind.value}] in request {request_id}: {e.message}")
        raise

    return {
        "statusCode": 200,
        "body": json.dumps(
            {
                "message": "Billing notification sent",
                "services": sum(len(a.fields) for a in message.attachments),
            }
        ),
    }
