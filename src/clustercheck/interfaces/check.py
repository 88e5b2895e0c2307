"""Health check interface for cluster gate checks."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from clustercheck.core.models import CheckCategory, CheckOutcome, ClusterTarget

if TYPE_CHECKING:
    from clustercheck.interfaces.kubernetes_provider import KubernetesProvider
    from clustercheck.interfaces.metrics_provider import MetricsProvider


@dataclass
class CheckContext:
    """Context passed to health checks containing dependencies."""

    target: ClusterTarget
    kubernetes_provider: "KubernetesProvider | None" = None
    metrics_provider: "MetricsProvider | None" = None
    extra_context: dict[str, Any] = field(default_factory=dict)


class Check(ABC):
    """Abstract interface for health checks.

    Every check produces exactly one CheckOutcome per execution. Probe
    failures are reported as failed outcomes rather than raised, so one
    failing dependency never hides the remaining checks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the check name for logging/reporting.

        Returns:
            Check name as it appears in the report
        """

    @property
    @abstractmethod
    def description(self) -> str:
        """Get a description of what this check validates.

        Returns:
            Description of the check's purpose
        """

    @property
    @abstractmethod
    def category(self) -> CheckCategory:
        """Get the category this check belongs to.

        Returns:
            CheckCategory
        """

    @abstractmethod
    async def execute(self, context: CheckContext) -> CheckOutcome:
        """Execute the health check.

        Args:
            context: Check context with provider dependencies

        Returns:
            CheckOutcome indicating pass/fail and details
        """

    @property
    def timeout_seconds(self) -> int:
        """Maximum execution time for this check.

        Returns:
            Timeout in seconds (default: 10)
        """
        return 10
