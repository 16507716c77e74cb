"""Billing metric collectors for AWS Billing Notification."""

from aws_billing_notification.collectors.base import (
    Billing,
    MetricQuery,
    MetricsClient,
    ServiceBilling,
    TimeWindow,
)
from aws_billing_notification.collectors.billing import BillingAggregator
from aws_billing_notification.collectors.cloudwatch import CloudWatchMetricsClient

__all__ = [
    "Billing",
    "BillingAggregator",
    "CloudWatchMetricsClient",
    "MetricQuery",
    "MetricsClient",
    "ServiceBilling",
    "TimeWindow",
]
