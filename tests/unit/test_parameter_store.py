"""Tests for the Parameter Store secret resolver."""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from moto import mock_aws

from aws_billing_notification.config.parameter_store import ParameterStoreResolver
from aws_billing_notification.errors import (
    ErrorKind,
    SecretBackendError,
    SecretNotFoundError,
)

REGION = "us-east-1"
PARAMETER = "/billing-notification/slack-webhook-url"
WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


@pytest.fixture(autouse=True)
def _aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto (prevents real AWS calls)."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def ssm():
    with mock_aws():
        yield boto3.client("ssm", region_name=REGION)


class TestParameterStoreResolver:
    """Tests for ParameterStoreResolver against moto."""

    def test_secure_string_is_decrypted(self, ssm):
        """Test that SecureString values come back in clear text."""
        ssm.put_parameter(Name=PARAMETER, Value=WEBHOOK_URL, Type="SecureString")
        resolver = ParameterStoreResolver(region=REGION, ssm_client=ssm)
        assert resolver.get_secret(PARAMETER) == WEBHOOK_URL

    def test_plain_string(self, ssm):
        """Test that String parameters are returned as-is."""
        ssm.put_parameter(Name=PARAMETER, Value=WEBHOOK_URL, Type="String")
        resolver = ParameterStoreResolver(region=REGION, ssm_client=ssm)
        assert resolver.get_secret(PARAMETER) == WEBHOOK_URL

    def test_lazy_client(self, ssm):
        """Test that the resolver builds its own client when none is given."""
        ssm.put_parameter(Name=PARAMETER, Value=WEBHOOK_URL, Type="SecureString")
        resolver = ParameterStoreResolver(region=REGION)
        assert resolver.get_secret(PARAMETER) == WEBHOOK_URL

    def test_missing_parameter(self, ssm):
        """Test that an unknown name raises SecretNotFoundError."""
        resolver = ParameterStoreResolver(region=REGION, ssm_client=ssm)
        with pytest.raises(SecretNotFoundError) as exc_info:
            resolver.get_secret(PARAMETER)
        assert exc_info.value.kind is ErrorKind.SECRET_NOT_FOUND
        assert PARAMETER in str(exc_info.value)


class TestParameterStoreFailures:
    """Tests for call failures."""

    def test_access_denied(self):
        """Test that other API errors raise SecretBackendError."""
        client = MagicMock()
        client.get_parameter.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "denied"}},
            "GetParameter",
        )
        resolver = ParameterStoreResolver(ssm_client=client)
        with pytest.raises(SecretBackendError) as exc_info:
            resolver.get_secret(PARAMETER)
        assert exc_info.value.kind is ErrorKind.SECRET_BACKEND
        client.get_parameter.assert_called_once_with(Name=PARAMETER, WithDecryption=True)

    def test_connection_error(self):
        """Test that transport errors raise SecretBackendError."""
        client = MagicMock()
        client.get_parameter.side_effect = EndpointConnectionError(
            endpoint_url="https://ssm.us-east-1.amazonaws.com"
        )
        with pytest.raises(SecretBackendError):
            ParameterStoreResolver(ssm_client=client).get_secret(PARAMETER)

    def test_empty_value(self):
        """Test that a response without a value raises SecretNotFoundError."""
        client = MagicMock()
        client.get_parameter.return_value = {"Parameter": {"Name": PARAMETER}}
        with pytest.raises(SecretNotFoundError):
            ParameterStoreResolver(ssm_client=client).get_secret(PARAMETER)

    def test_without_decryption(self):
        """Test that decryption can be turned off."""
        client = MagicMock()
        client.get_parameter.return_value = {"Parameter": {"Value": "plain"}}
        resolver = ParameterStoreResolver(with_decryption=False, ssm_client=client)
        assert resolver.get_secret(PARAMETER) == "plain"
        client.get_parameter.assert_called_once_with(Name=PARAMETER, WithDecryption=False)
