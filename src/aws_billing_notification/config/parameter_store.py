"""Secret resolution from AWS Systems Manager Parameter Store."""

from __future__ import annotations

from abc import ABC, abstractmethod

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from aws_billing_notification.collectors.cloudwatch import client_config
from aws_billing_notification.errors import SecretBackendError, SecretNotFoundError


class SecretResolver(ABC):
    """Fetch one secret string by name."""

    @abstractmethod
    def get_secret(self, name: str) -> str:
        """
        Return the decrypted value of a secret.

        Raises:
            SecretNotFoundError: If there is no such secret or it has no value.
            SecretBackendError: If the store call fails.
        """
        pass


class ParameterStoreResolver(SecretResolver):
    """
    Resolve secrets stored as SSM parameters.

    SecureString parameters are decrypted by SSM when ``with_decryption`` is
    set; plain String parameters are returned as-is.
    """

    def __init__(
        self,
        region: str = "us-east-1",
        with_decryption: bool = True,
        timeout_seconds: float = 5,
        ssm_client: boto3.client | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            region: AWS region of the parameter.
            with_decryption: Ask SSM to decrypt SecureString values.
            timeout_seconds: Connect and read timeout for the call.
            ssm_client: Optional boto3 SSM client.
        """
        self.region = region
        self.with_decryption = with_decryption
        self.timeout_seconds = timeout_seconds
        self._ssm_client = ssm_client

    @property
    def ssm_client(self) -> boto3.client:
        """Get or create SSM client."""
        if self._ssm_client is None:
            self._ssm_client = boto3.client(
                "ssm",
                region_name=self.region,
                config=client_config(self.timeout_seconds),
            )
        return self._ssm_client

    def get_secret(self, name: str) -> str:
        try:
            response = self.ssm_client.get_parameter(
                Name=name,
                WithDecryption=self.with_decryption,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code == "ParameterNotFound":
                raise SecretNotFoundError(f"Parameter '{name}' not found", cause=e) from e
            raise SecretBackendError(f"Error retrieving parameter '{name}': {e}", cause=e) from e
        except BotoCoreError as e:
            raise SecretBackendError(f"Error retrieving parameter '{name}': {e}", cause=e) from e

        value = response.get("Parameter", {}).get("Value")
        if not value:
            raise SecretNotFoundError(f"Parameter '{name}' has no value")
        return value
