"""Billing aggregation from CloudWatch EstimatedCharges metrics."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

from aws_billing_notification.collectors.base import (
    BILLING_NAMESPACE,
    CURRENCY_DIMENSION,
    ESTIMATED_CHARGES,
    SERVICE_NAME_DIMENSION,
    Billing,
    Dimension,
    MetricQuery,
    MetricsClient,
    ServiceBilling,
    Statistic,
    TimeWindow,
)


class BillingAggregator:
    """
    Compute the account-wide total and the per-service breakdown.

    Issues one total query, one ServiceName listing, then one query per
    service. Any failure aborts the whole aggregation: there is no partial
    breakdown.
    """

    def __init__(
        self,
        metrics_client: MetricsClient,
        namespace: str = BILLING_NAMESPACE,
        metric_name: str = ESTIMATED_CHARGES,
        currency: str = "USD",
        max_workers: int = 1,
    ):
        """
        Initialize the aggregator.

        Args:
            metrics_client: Backend used for every query.
            namespace: CloudWatch namespace of the billing metric.
            metric_name: Billing metric name.
            currency: Value of the Currency dimension.
            max_workers: Concurrent per-service queries. 1 runs them in order.
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.metrics_client = metrics_client
        self.namespace = namespace
        self.metric_name = metric_name
        self.currency = currency
        self.max_workers = max_workers

    def compute(self, now: datetime | None = None) -> Billing:
        """
        Compute billing for the 24 hours ending at ``now``.

        Raises:
            MetricsBackendError: If any of the queries fail.
        """
        window = TimeWindow.last_day(now)

        total = self.metrics_client.get_scalar_statistic(self._query(window))
        service_names = self.metrics_client.list_dimension_values(
            self.namespace, SERVICE_NAME_DIMENSION
        )

        if self.max_workers == 1 or len(service_names) < 2:
            costs = [self._service_cost(name, window) for name in service_names]
        else:
            costs = self._fan_out(service_names, window)

        return Billing(
            total=total,
            services=[
                ServiceBilling(name=name, cost=cost)
                for name, cost in zip(service_names, costs)
            ],
            currency=self.currency,
            window=window,
        )

    def _query(self, window: TimeWindow, service_name: str | None = None) -> MetricQuery:
        dimensions = [Dimension(CURRENCY_DIMENSION, self.currency)]
        if service_name is not None:
            dimensions.append(Dimension(SERVICE_NAME_DIMENSION, service_name))
        return MetricQuery(
            namespace=self.namespace,
            metric_name=self.metric_name,
            window=window,
            dimensions=tuple(dimensions),
            statistic=Statistic.MAXIMUM,
        )

    def _service_cost(self, service_name: str, window: TimeWindow) -> float:
        return self.metrics_client.get_scalar_statistic(self._query(window, service_name))

    def _fan_out(self, service_names: list[str], window: TimeWindow) -> list[float]:
        """Run per-service queries concurrently, preserving request order."""
        costs: dict[int, float] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._service_cost, name, window): index
                for index, name in enumerate(service_names)
            }
            try:
                for future in as_completed(futures):
                    costs[futures[future]] = future.result()
            except Exception:
                # Queries not yet started are dropped; running ones finish on exit
                for future in futures:
                    future.cancel()
                raise
        return [costs[index] for index in range(len(service_names))]
