"""Error types for AWS Billing Notification.

Every failure that ends an invocation is a ``BillingNotificationError``
tagged with an ``ErrorKind``, so callers can branch on the kind instead of
parsing messages.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a terminal invocation failure."""

    METRICS_BACKEND = "metrics_backend"
    SECRET_NOT_FOUND = "secret_not_found"
    SECRET_BACKEND = "secret_backend"
    DELIVERY = "delivery"
    CONFIGURATION = "configuration"


class BillingNotificationError(Exception):
    """Base error for all pipeline failures."""

    kind: ErrorKind

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class MetricsBackendError(BillingNotificationError):
    """A CloudWatch call failed (network, auth, throttling)."""

    kind = ErrorKind.METRICS_BACKEND


class SecretNotFoundError(BillingNotificationError):
    """The parameter does not exist or has no value."""

    kind = ErrorKind.SECRET_NOT_FOUND


class SecretBackendError(BillingNotificationError):
    """A Parameter Store call failed."""

    kind = ErrorKind.SECRET_BACKEND


class DeliveryError(BillingNotificationError):
    """The Slack webhook rejected the message or could not be reached."""

    kind = ErrorKind.DELIVERY


class ConfigurationError(BillingNotificationError):
    """Configuration is missing or invalid."""

    kind = ErrorKind.CONFIGURATION
