"""Pod phase health check."""

from clustercheck.core.models import CheckCategory, CheckOutcome, ResourceStatus
from clustercheck.interfaces.check import Check, CheckContext
from clustercheck.interfaces.exceptions import CheckExecutionError, KubernetesProviderError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class PodHealthCheck(Check):
    """Check that every pod is in the Running or Succeeded phase.

    A listing error is reported as a failed outcome carrying the error text.
    """

    def __init__(self, namespace: str = ""):
        """Initialize pod health check.

        Args:
            namespace: Namespace to check (default: all namespaces)
        """
        self.namespace = namespace

    @property
    def name(self) -> str:
        """Get check name."""
        return "Pod Health"

    @property
    def description(self) -> str:
        """Get check description."""
        scope = f"namespace {self.namespace}" if self.namespace else "all namespaces"
        return f"Validates pods are Running or Succeeded in {scope}"

    @property
    def category(self) -> CheckCategory:
        """Get check category."""
        return CheckCategory.PODS

    async def execute(self, context: CheckContext) -> CheckOutcome:
        """Execute pod health check.

        Args:
            context: Check context with providers

        Returns:
            CheckOutcome indicating pass/fail
        """
        k8s = context.kubernetes_provider
        if k8s is None:
            raise CheckExecutionError("Kubernetes provider not configured")

        logger.debug("checking_pod_health", namespace=self.namespace or "<all>")

        try:
            pods = await k8s.list_pods(self.namespace)
        except KubernetesProviderError as e:
            logger.error("pod_health_check_failed", error=str(e))
            return CheckOutcome(
                name=self.name,
                category=self.category,
                passed=False,
                message=str(e),
            )

        details = tuple(
            ResourceStatus(
                kind="Pod",
                namespace=pod.namespace,
                name=pod.name,
                status=pod.phase,
                healthy=pod.healthy,
            )
            for pod in pods
        )
        unhealthy = [d for d in details if not d.healthy]

        if unhealthy:
            message = f"{len(unhealthy)} pods not in Running or Succeeded state"
        else:
            message = "All pods are in Running or Succeeded state"

        return CheckOutcome(
            name=self.name,
            category=self.category,
            passed=not unhealthy,
            message=message,
            details=details,
        )
