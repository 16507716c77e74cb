"""CloudWatch metrics client.

Billing metrics are published only in us-east-1, whatever region the
function itself runs in.
"""

from __future__ import annotations

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from aws_billing_notification.collectors.base import MetricQuery, MetricsClient
from aws_billing_notification.errors import MetricsBackendError


def client_config(timeout_seconds: float) -> BotoConfig:
    """botocore config with bounded timeouts and a single attempt per call."""
    return BotoConfig(
        connect_timeout=timeout_seconds,
        read_timeout=timeout_seconds,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )


class CloudWatchMetricsClient(MetricsClient):
    """
    Query CloudWatch for scalar statistics and dimension values.

    Failures are not retried here; they surface as MetricsBackendError and
    the caller decides what to do.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        timeout_seconds: float = 5,
        cloudwatch_client: boto3.client | None = None,
    ):
        """
        Initialize the CloudWatch client wrapper.

        Args:
            region: Region holding the metrics (us-east-1 for billing).
            timeout_seconds: Connect and read timeout per API call.
            cloudwatch_client: Optional pre-built boto3 CloudWatch client.
        """
        self.region = region
        self.timeout_seconds = timeout_seconds
        self._cloudwatch_client = cloudwatch_client

    @property
    def cloudwatch_client(self) -> boto3.client:
        """Get or create CloudWatch client."""
        if self._cloudwatch_client is None:
            self._cloudwatch_client = boto3.client(
                "cloudwatch",
                region_name=self.region,
                config=client_config(self.timeout_seconds),
            )
        return self._cloudwatch_client

    def get_scalar_statistic(self, query: MetricQuery) -> float:
        statistic = query.statistic.value
        try:
            response = self.cloudwatch_client.get_metric_statistics(
                Namespace=query.namespace,
                MetricName=query.metric_name,
                Dimensions=[d.to_api() for d in query.dimensions],
                StartTime=query.window.start,
                EndTime=query.window.end,
                Period=query.window.period_seconds,
                Statistics=[statistic],
            )
        except (ClientError, BotoCoreError) as e:
            raise MetricsBackendError(
                f"Error getting {query.namespace}/{query.metric_name} statistics: {e}",
                cause=e,
            ) from e

        datapoints = response.get("Datapoints", [])
        if not datapoints:
            return 0.0

        # One period per window, but take the newest point if more come back
        if len(datapoints) > 1:
            datapoints = sorted(datapoints, key=lambda dp: dp["Timestamp"])
        value = datapoints[-1].get(statistic)
        if value is None:
            return 0.0
        return float(value)

    def list_dimension_values(
        self,
        namespace: str,
        dimension_name: str,
        metric_name: str | None = None,
    ) -> list[str]:
        # A dimension filter without a Value matches any value
        request = {
            "Namespace": namespace,
            "Dimensions": [{"Name": dimension_name}],
        }
        if metric_name:
            request["MetricName"] = metric_name

        values: list[str] = []
        next_token: str | None = None
        while True:
            if next_token:
                request["NextToken"] = next_token
            try:
                response = self.cloudwatch_client.list_metrics(**request)
            except (ClientError, BotoCoreError) as e:
                raise MetricsBackendError(
                    f"Error listing {dimension_name} values in {namespace}: {e}",
                    cause=e,
                ) from e

            for metric in response.get("Metrics", []):
                for dimension in metric.get("Dimensions", []):
                    if dimension.get("Name") == dimension_name:
                        values.append(dimension["Value"])

            next_token = response.get("NextToken")
            if not next_token:
                return values
