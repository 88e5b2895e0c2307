"""Prometheus adapter implementing MetricsProvider interface."""

import asyncio

from clustercheck.clients.prometheus_client import PrometheusClient
from clustercheck.core.config import PrometheusConfig
from clustercheck.interfaces.credential_source import CredentialSource
from clustercheck.interfaces.exceptions import CredentialSourceError, MetricsProviderError
from clustercheck.interfaces.metrics_provider import MetricsProvider
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class PrometheusAdapter(MetricsProvider):
    """Adapter wrapping PrometheusClient to implement MetricsProvider interface.

    When a credential source is given, ``authenticate`` resolves it once and
    replaces any statically configured basic auth.
    """

    def __init__(
        self,
        client: PrometheusClient,
        credential_source: CredentialSource | None = None,
    ):
        """Initialize Prometheus adapter.

        Args:
            client: Prometheus HTTP client
            credential_source: Secret store lookup for basic auth (optional)
        """
        self.client = client
        self.credential_source = credential_source
        self._authenticated = False

    @classmethod
    def from_config(
        cls,
        config: PrometheusConfig,
        credential_source: CredentialSource | None = None,
    ) -> "PrometheusAdapter":
        """Build an adapter from the Prometheus configuration section.

        Args:
            config: Prometheus configuration
            credential_source: Secret store lookup for basic auth (optional)

        Returns:
            PrometheusAdapter instance
        """
        client = PrometheusClient(
            url=config.url,
            username=config.username,
            password=config.password,
            verify_tls=config.verify_tls,
            timeout=config.timeout_seconds,
        )
        return cls(client, credential_source=credential_source)

    async def authenticate(self) -> None:
        """Resolve credentials from the credential source, if any.

        Raises:
            CredentialSourceError: If credentials cannot be resolved
        """
        if self._authenticated or self.credential_source is None:
            return

        try:
            credentials = await asyncio.to_thread(self.credential_source.resolve)
        except CredentialSourceError:
            raise
        except Exception as e:
            raise CredentialSourceError(str(e)) from e

        self.client.set_credentials(credentials.username, credentials.password)
        self._authenticated = True
        logger.debug("prometheus_credentials_resolved", username=credentials.username)

    async def query_scalar(self, expression: str) -> str:
        """Execute an instant query and return the first sample value.

        Args:
            expression: PromQL expression

        Returns:
            Scalar value as returned by Prometheus, "0" when no series match

        Raises:
            MetricsProviderError: If the query fails
        """
        try:
            return await self.client.query_scalar(expression)
        except Exception as e:
            logger.debug("query_failed", query=expression, error=str(e))
            raise MetricsProviderError(str(e)) from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
