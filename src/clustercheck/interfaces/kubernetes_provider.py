"""Kubernetes provider interface for pod and Flux resource probes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

HEALTHY_POD_PHASES = ("Running", "Succeeded")


@dataclass
class PodInfo:
    """Normalized pod information."""

    name: str
    namespace: str
    phase: str

    @property
    def healthy(self) -> bool:
        """Whether the pod is Running or Succeeded."""
        return self.phase in HEALTHY_POD_PHASES


@dataclass
class FluxResourceInfo:
    """Normalized Flux reconciled resource (HelmRelease or Kustomization).

    ``ready`` is None when the resource reports no Ready condition.
    """

    kind: str
    name: str
    namespace: str
    ready: bool | None
    message: str
    revision: str

    @property
    def healthy(self) -> bool:
        """Whether the Ready condition is True. Unknown counts as not ready."""
        return self.ready is True


class KubernetesProvider(ABC):
    """Abstract interface for read-only Kubernetes queries.

    All methods return normalized dataclasses rather than native K8s API
    objects. An empty namespace means all namespaces.
    """

    @abstractmethod
    async def list_pods(self, namespace: str = "") -> list[PodInfo]:
        """List pods.

        Args:
            namespace: Namespace to list, empty for all namespaces

        Returns:
            List of normalized pod information

        Raises:
            KubernetesProviderError: If pods cannot be listed
        """

    @abstractmethod
    async def list_flux_resources(self, namespace: str = "") -> list[FluxResourceInfo]:
        """List Flux HelmReleases followed by Kustomizations.

        Args:
            namespace: Namespace to list, empty for all namespaces

        Returns:
            List of normalized Flux resources

        Raises:
            KubernetesProviderError: If resources cannot be listed
        """
