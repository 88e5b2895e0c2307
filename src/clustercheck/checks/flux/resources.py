"""Flux HelmRelease and Kustomization readiness check."""

from clustercheck.core.models import CheckCategory, CheckOutcome, ResourceStatus
from clustercheck.interfaces.check import Check, CheckContext
from clustercheck.interfaces.exceptions import CheckExecutionError, KubernetesProviderError
from clustercheck.interfaces.kubernetes_provider import FluxResourceInfo
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


def _status_label(resource: FluxResourceInfo) -> str:
    if resource.ready is None:
        return "Unknown"
    return "Ready" if resource.ready else "Not Ready"


class FluxResourcesCheck(Check):
    """Check that every Flux HelmRelease and Kustomization is Ready.

    Resources without a Ready condition count as not ready. A cluster with
    no Flux resources passes.
    """

    def __init__(self, namespace: str = ""):
        """Initialize Flux resources check.

        Args:
            namespace: Namespace to check (default: all namespaces)
        """
        self.namespace = namespace

    @property
    def name(self) -> str:
        """Get check name."""
        return "Flux Resources"

    @property
    def description(self) -> str:
        """Get check description."""
        return "Validates Flux HelmReleases and Kustomizations are Ready"

    @property
    def category(self) -> CheckCategory:
        """Get check category."""
        return CheckCategory.FLUX

    async def execute(self, context: CheckContext) -> CheckOutcome:
        """Execute Flux resources check.

        Args:
            context: Check context with providers

        Returns:
            CheckOutcome indicating pass/fail
        """
        k8s = context.kubernetes_provider
        if k8s is None:
            raise CheckExecutionError("Kubernetes provider not configured")

        logger.debug("checking_flux_resources", namespace=self.namespace or "<all>")

        try:
            resources = await k8s.list_flux_resources(self.namespace)
        except KubernetesProviderError as e:
            logger.error("flux_resources_check_failed", error=str(e))
            return CheckOutcome(
                name=self.name,
                category=self.category,
                passed=False,
                message=str(e),
            )

        if not resources:
            return CheckOutcome(
                name=self.name,
                category=self.category,
                passed=True,
                message="No Flux resources found",
            )

        details = tuple(
            ResourceStatus(
                kind=resource.kind,
                namespace=resource.namespace,
                name=resource.name,
                status=_status_label(resource),
                healthy=resource.healthy,
                message=resource.message,
                revision=resource.revision,
            )
            for resource in resources
        )
        not_ready = sum(1 for d in details if not d.healthy)

        if not_ready:
            message = f"{not_ready} resources not Ready"
        else:
            message = "All HelmReleases and Kustomizations are Ready"

        return CheckOutcome(
            name=self.name,
            category=self.category,
            passed=not not_ready,
            message=message,
            details=details,
        )
