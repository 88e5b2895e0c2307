"""Secrets management utilities for clustercheck."""

import json
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from clustercheck.core.exceptions import SecretStoreError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class SecretsManager:
    """AWS Secrets Manager client."""

    def __init__(self, region: str = "us-east-1"):
        """Initialize Secrets Manager client.

        Args:
            region: AWS region
        """
        self.client = boto3.client("secretsmanager", region_name=region)
        self.region = region
        logger.debug("secrets_manager_initialized", region=region)

    def get_secret(self, secret_name: str) -> str:
        """Get secret value from Secrets Manager.

        Args:
            secret_name: Name of the secret

        Returns:
            Secret value as string

        Raises:
            SecretStoreError: If secret cannot be retrieved
        """
        try:
            logger.debug("getting_secret", secret_name=secret_name)
            response = self.client.get_secret_value(SecretId=secret_name)

            # Secrets can be stored as either SecretString or SecretBinary
            if "SecretString" in response:
                secret = response["SecretString"]
            else:
                secret = response["SecretBinary"].decode("utf-8")

            logger.debug("secret_retrieved", secret_name=secret_name)
            return secret

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            logger.error(
                "secret_retrieval_failed",
                secret_name=secret_name,
                error_code=error_code,
            )

            if error_code == "ResourceNotFoundException":
                raise SecretStoreError(f"Secret not found: {secret_name}") from e
            elif error_code == "AccessDeniedException":
                raise SecretStoreError(f"Access denied to secret: {secret_name}") from e
            else:
                raise SecretStoreError(
                    f"Failed to retrieve secret {secret_name}: {error_code}"
                ) from e
        except BotoCoreError as e:
            logger.error("secret_retrieval_failed", secret_name=secret_name, error=str(e))
            raise SecretStoreError(f"Failed to retrieve secret {secret_name}: {e}") from e

    def get_secret_json(self, secret_name: str) -> dict[str, Any]:
        """Get secret value as JSON object.

        Args:
            secret_name: Name of the secret

        Returns:
            Secret value as dictionary

        Raises:
            SecretStoreError: If secret cannot be retrieved or parsed
        """
        secret_string = self.get_secret(secret_name)

        try:
            value = json.loads(secret_string)
        except json.JSONDecodeError as e:
            logger.error(
                "secret_json_parse_failed",
                secret_name=secret_name,
                error=str(e),
            )
            raise SecretStoreError(f"Failed to parse secret as JSON: {secret_name}") from e

        if not isinstance(value, dict):
            raise SecretStoreError(f"Secret is not a JSON object: {secret_name}")

        return value
