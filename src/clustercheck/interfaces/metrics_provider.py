"""Metrics provider interface for the monitoring backend."""

from abc import ABC, abstractmethod


class MetricsProvider(ABC):
    """Abstract interface for scalar metric queries."""

    @abstractmethod
    async def authenticate(self) -> None:
        """Resolve credentials before the first query.

        Raises:
            CredentialSourceError: If credentials cannot be resolved
        """

    @abstractmethod
    async def query_scalar(self, expression: str) -> str:
        """Execute an instant query and return the first sample value.

        Args:
            expression: Query expression

        Returns:
            Scalar value as returned by the backend, "0" when no series match

        Raises:
            MetricsProviderError: If the query fails
        """

    async def close(self) -> None:
        """Release any held connections."""
