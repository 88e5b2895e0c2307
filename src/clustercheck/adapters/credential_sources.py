"""Credential sources backed by secret stores."""

from clustercheck.clients.bitwarden import BitwardenCLI
from clustercheck.interfaces.credential_source import Credentials, CredentialSource
from clustercheck.interfaces.exceptions import CredentialSourceError
from clustercheck.utils.logging import get_logger
from clustercheck.utils.secrets import SecretsManager

logger = get_logger(__name__)


class BitwardenCredentialSource(CredentialSource):
    """Read Prometheus credentials from a Bitwarden login item."""

    def __init__(self, item_name: str, cli: BitwardenCLI | None = None):
        """Initialize Bitwarden credential source.

        Args:
            item_name: Name of the vault login item
            cli: Bitwarden CLI wrapper (optional)
        """
        self.item_name = item_name
        self.cli = cli or BitwardenCLI()

    def resolve(self) -> Credentials:
        """Look up credentials.

        Returns:
            Resolved credentials

        Raises:
            CredentialSourceError: If the lookup fails
        """
        try:
            username, password = self.cli.get_login(self.item_name)
        except Exception as e:
            logger.error("bitwarden_lookup_failed", item=self.item_name, error=str(e))
            raise CredentialSourceError(f"Failed to get item from Bitwarden: {e}") from e

        return Credentials(username=username, password=password)


class AWSSecretsCredentialSource(CredentialSource):
    """Read Prometheus credentials from an AWS Secrets Manager JSON secret.

    The secret must be a JSON object with ``username`` and ``password`` keys.
    """

    def __init__(
        self,
        secret_name: str,
        region: str = "us-east-1",
        secrets_manager: SecretsManager | None = None,
    ):
        """Initialize AWS Secrets Manager credential source.

        Args:
            secret_name: Name of the secret
            region: AWS region
            secrets_manager: Secrets Manager client (optional)
        """
        self.secret_name = secret_name
        self.region = region
        self._secrets_manager = secrets_manager

    @property
    def secrets_manager(self) -> SecretsManager:
        """Get Secrets Manager client (lazy-loaded)."""
        if self._secrets_manager is None:
            self._secrets_manager = SecretsManager(region=self.region)
        return self._secrets_manager

    def resolve(self) -> Credentials:
        """Look up credentials.

        Returns:
            Resolved credentials

        Raises:
            CredentialSourceError: If the lookup fails
        """
        try:
            secret = self.secrets_manager.get_secret_json(self.secret_name)
        except Exception as e:
            logger.error("aws_secret_lookup_failed", secret_name=self.secret_name, error=str(e))
            raise CredentialSourceError(f"Failed to read secret: {e}") from e

        try:
            return Credentials(username=secret["username"], password=secret["password"])
        except KeyError as e:
            raise CredentialSourceError(
                f"Secret {self.secret_name} is missing field {e.args[0]}"
            ) from e
