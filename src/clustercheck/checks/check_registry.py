"""Registry for managing health checks."""

from clustercheck.checks.flux import FluxResourcesCheck
from clustercheck.checks.kubernetes import PodHealthCheck
from clustercheck.checks.metrics import MetricQueryCheck
from clustercheck.core.config import ClusterCheckConfig
from clustercheck.core.models import CheckCategory
from clustercheck.interfaces.check import Check
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class CheckRegistry:
    """Registry for health check management.

    Checks are kept in registration order, which is also the order they
    appear in reports.
    """

    def __init__(self) -> None:
        """Initialize check registry."""
        self._checks: list[Check] = []
        self._checks_by_name: dict[str, Check] = {}
        logger.debug("check_registry_initialized")

    def register(self, check: Check) -> None:
        """Register a health check.

        Checks sharing a name are all kept and all run; lookup by name
        returns the first one registered.

        Args:
            check: Health check to register
        """
        if check.name in self._checks_by_name:
            logger.warning("duplicate_check_name", check_name=check.name)
        else:
            self._checks_by_name[check.name] = check

        self._checks.append(check)

        logger.debug("check_registered", check_name=check.name, category=check.category.value)

    def get_check(self, check_name: str) -> Check | None:
        """Get a check by name.

        Args:
            check_name: Name of the check

        Returns:
            Check if found, None otherwise
        """
        return self._checks_by_name.get(check_name)

    def get_all_checks(self) -> list[Check]:
        """Get all registered checks.

        Returns:
            List of all registered checks
        """
        return self._checks.copy()

    def get_checks_for_category(self, category: CheckCategory) -> list[Check]:
        """Get checks of one category in registration order.

        Args:
            category: Category to filter by

        Returns:
            List of matching checks
        """
        return [check for check in self._checks if check.category == category]

    def __len__(self) -> int:
        """Get number of registered checks."""
        return len(self._checks)


def build_registry(config: ClusterCheckConfig) -> CheckRegistry:
    """Build the registry with the pod, Flux and metric checks for a config.

    Args:
        config: Assembled configuration

    Returns:
        Populated CheckRegistry
    """
    registry = CheckRegistry()
    registry.register(PodHealthCheck(namespace=config.kubernetes.namespace))
    registry.register(FluxResourcesCheck(namespace=config.kubernetes.namespace))

    for spec in config.queries:
        registry.register(MetricQueryCheck(spec))

    return registry
