"""Pytest configuration and fixtures."""

from datetime import UTC, datetime

import pytest

from aws_billing_notification.collectors.base import MetricQuery, MetricsClient
from aws_billing_notification.config.parameter_store import SecretResolver
from aws_billing_notification.errors import MetricsBackendError, SecretNotFoundError
from aws_billing_notification.notifications.base import NotificationMessage, Notifier

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


class FakeMetricsClient(MetricsClient):
    """In-memory metrics backend that records every call."""

    def __init__(
        self,
        total: float = 0.0,
        service_costs: dict[str, float] | None = None,
        service_names: list[str] | None = None,
        failing_services: set[str] | None = None,
        fail_total: bool = False,
        fail_listing: bool = False,
    ):
        self.total = total
        self.service_costs = service_costs or {}
        self.service_names = (
            service_names if service_names is not None else list(self.service_costs)
        )
        self.failing_services = failing_services or set()
        self.fail_total = fail_total
        self.fail_listing = fail_listing
        self.queries: list[MetricQuery] = []
        self.list_calls: list[tuple[str, str]] = []

    def get_scalar_statistic(self, query: MetricQuery) -> float:
        self.queries.append(query)
        dimensions = {d.name: d.value for d in query.dimensions}
        service = dimensions.get("ServiceName")
        if service is None:
            if self.fail_total:
                raise MetricsBackendError("total query failed")
            return self.total
        if service in self.failing_services:
            raise MetricsBackendError(f"query for {service} failed")
        return self.service_costs.get(service, 0.0)

    def list_dimension_values(self, namespace, dimension_name, metric_name=None):
        self.list_calls.append((namespace, dimension_name))
        if self.fail_listing:
            raise MetricsBackendError("listing failed")
        return list(self.service_names)


class FakeSecretResolver(SecretResolver):
    """Secret store returning a fixed value or raising a fixed error."""

    def __init__(self, value: str | None = WEBHOOK_URL, error: Exception | None = None):
        self.value = value
        self.error = error
        self.requested: list[str] = []

    def get_secret(self, name: str) -> str:
        self.requested.append(name)
        if self.error:
            raise self.error
        if self.value is None:
            raise SecretNotFoundError(f"Parameter '{name}' not found")
        return self.value


class RecordingNotifier(Notifier):
    """Notifier that keeps every message it is asked to send."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[NotificationMessage] = []
        self.webhook_urls: list[str] = []

    def send(self, message: NotificationMessage) -> None:
        if self.error:
            raise self.error
        self.sent.append(message)


@pytest.fixture
def fixed_now():
    """A fixed invocation time."""
    return datetime(2026, 10, 17, 1, 0, tzinfo=UTC)


@pytest.fixture
def scenario_a_metrics():
    """Backend answering with two services that sum to the total."""
    return FakeMetricsClient(
        total=12.34,
        service_costs={"AmazonEC2": 5.00, "AWSLambda": 7.34},
        service_names=["AmazonEC2", "AWSLambda"],
    )


@pytest.fixture
def secret_resolver():
    """Secret store holding the webhook URL."""
    return FakeSecretResolver()


@pytest.fixture
def notifier():
    """Recording notifier."""
    return RecordingNotifier()


@pytest.fixture
def notifier_factory(notifier):
    """Factory handing out the recording notifier and noting the URL."""

    def factory(webhook_url: str) -> Notifier:
        notifier.webhook_urls.append(webhook_url)
        return notifier

    return factory


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary."""
    return {
        "project_name": "test-billing",
        "environment": "dev",
        "aws": {
            "region": "eu-west-1",
            "metrics_region": "us-east-1",
            "call_timeout_seconds": 3,
        },
        "webhook": {
            "parameter_name": "/test/slack-webhook-url",
        },
        "collection": {
            "max_workers": 4,
        },
        "slack": {
            "username": "Billing Bot",
            "icon_emoji": ":dollar:",
        },
    }


@pytest.fixture
def make_metrics():
    """Build a fake metrics backend with custom answers."""
    return FakeMetricsClient


@pytest.fixture
def make_resolver():
    """Build a fake secret store with a custom value or error."""
    return FakeSecretResolver


@pytest.fixture
def make_notifier():
    """Build a recording notifier, optionally failing every send."""
    return RecordingNotifier
