"""Base classes and data model for billing metric collection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

BILLING_NAMESPACE = "AWS/Billing"
ESTIMATED_CHARGES = "EstimatedCharges"
SERVICE_NAME_DIMENSION = "ServiceName"
CURRENCY_DIMENSION = "Currency"


class Statistic(str, Enum):
    """CloudWatch statistic applied to the samples of a period."""

    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"
    AVERAGE = "Average"
    SUM = "Sum"
    SAMPLE_COUNT = "SampleCount"


@dataclass(frozen=True)
class TimeWindow:
    """
    Query window covered by a single CloudWatch period.

    ``period_seconds`` equals the window length so the backend returns at
    most one aggregated datapoint.
    """

    start: datetime
    end: datetime
    period_seconds: int

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"Window end {self.end} must be after start {self.start}")

    @classmethod
    def last_day(cls, now: datetime | None = None) -> TimeWindow:
        """Rolling 24-hour window ending at ``now``."""
        end = now or datetime.now(UTC)
        start = end - timedelta(days=1)
        return cls(start=start, end=end, period_seconds=int((end - start).total_seconds()))


@dataclass(frozen=True)
class Dimension:
    """A CloudWatch dimension filter."""

    name: str
    value: str

    def to_api(self) -> dict[str, str]:
        return {"Name": self.name, "Value": self.value}


@dataclass(frozen=True)
class MetricQuery:
    """A scalar statistic query over one window."""

    namespace: str
    metric_name: str
    window: TimeWindow
    dimensions: tuple[Dimension, ...] = ()
    statistic: Statistic = Statistic.MAXIMUM

    def is_equivalent(self, other: MetricQuery) -> bool:
        """Compare queries ignoring dimension order."""
        return (
            self.namespace == other.namespace
            and self.metric_name == other.metric_name
            and self.window == other.window
            and self.statistic == other.statistic
            and sorted(self.dimensions, key=lambda d: (d.name, d.value))
            == sorted(other.dimensions, key=lambda d: (d.name, d.value))
        )


@dataclass
class ServiceBilling:
    """Estimated charges for a single AWS service."""

    name: str
    cost: float


@dataclass
class Billing:
    """
    Account-wide estimated charges with the per-service breakdown.

    ``total`` and the breakdown come from separate metric queries and are
    not reconciled; ``services_total`` may differ from ``total``.
    """

    total: float
    services: list[ServiceBilling] = field(default_factory=list)
    currency: str = "USD"
    window: TimeWindow | None = None

    @property
    def services_total(self) -> float:
        return sum(s.cost for s in self.services)


class MetricsClient(ABC):
    """Abstract metrics backend used by the billing aggregator."""

    @abstractmethod
    def get_scalar_statistic(self, query: MetricQuery) -> float:
        """
        Return the single statistic value for the query window.

        Returns 0.0 when the backend has no datapoint or the datapoint has
        no value for the requested statistic.

        Raises:
            MetricsBackendError: If the backend call fails.
        """
        pass

    @abstractmethod
    def list_dimension_values(
        self,
        namespace: str,
        dimension_name: str,
        metric_name: str | None = None,
    ) -> list[str]:
        """
        List every observed value of a dimension within a namespace.

        Values are returned in the order received, without dedup or sorting.

        Raises:
            MetricsBackendError: If the backend call fails.
        """
        pass
