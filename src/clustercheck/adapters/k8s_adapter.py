"""Kubernetes adapter implementing KubernetesProvider interface."""

import asyncio
from typing import Any

from clustercheck.clients.kubernetes_client import KubernetesClient
from clustercheck.interfaces.exceptions import KubernetesProviderError
from clustercheck.interfaces.kubernetes_provider import (
    FluxResourceInfo,
    KubernetesProvider,
    PodInfo,
)
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)

NO_CONDITIONS_MESSAGE = "No conditions set"


def _ready_condition(obj: dict[str, Any]) -> tuple[bool | None, str]:
    """Extract the Ready condition of a Flux object.

    Args:
        obj: Raw custom object

    Returns:
        Tuple of (ready or None when unknown, condition message)
    """
    conditions = (obj.get("status") or {}).get("conditions") or []
    if not conditions:
        return None, NO_CONDITIONS_MESSAGE

    for condition in conditions:
        if condition.get("type") == "Ready":
            return condition.get("status") == "True", condition.get("message", "")

    return None, "No Ready condition"


def _to_flux_resource(kind: str, obj: dict[str, Any], revision_field: str) -> FluxResourceInfo:
    metadata = obj.get("metadata") or {}
    status = obj.get("status") or {}
    ready, message = _ready_condition(obj)

    return FluxResourceInfo(
        kind=kind,
        name=metadata.get("name", ""),
        namespace=metadata.get("namespace", ""),
        ready=ready,
        message=message,
        revision=status.get(revision_field, ""),
    )


class KubernetesAdapter(KubernetesProvider):
    """Adapter wrapping KubernetesClient to implement KubernetesProvider interface.

    This adapter normalizes Kubernetes API responses into clean dataclasses,
    hiding kubernetes Python client implementation details. Blocking client
    calls run in a worker thread so callers can bound them with a timeout.

    The client is built on first use, so an unreadable kubeconfig surfaces as
    a failed probe instead of aborting the run.
    """

    def __init__(
        self,
        kubeconfig_path: str | None = None,
        context: str | None = None,
        request_timeout: float = 10.0,
        client: KubernetesClient | None = None,
    ):
        """Initialize Kubernetes adapter.

        Args:
            kubeconfig_path: Path to kubeconfig file (optional)
            context: Kubernetes context to use (optional)
            request_timeout: Per-request timeout in seconds
            client: Preconfigured client (optional)
        """
        self.kubeconfig_path = kubeconfig_path
        self.context = context
        self.request_timeout = request_timeout
        self._client = client

    @property
    def client(self) -> KubernetesClient:
        """Get Kubernetes client (lazy-loaded).

        Raises:
            KubernetesProviderError: If the client cannot be configured
        """
        if self._client is None:
            try:
                self._client = KubernetesClient(
                    kubeconfig_path=self.kubeconfig_path,
                    context=self.context,
                    request_timeout=self.request_timeout,
                )
            except Exception as e:
                raise KubernetesProviderError(str(e)) from e
            logger.debug("k8s_adapter_initialized", context=self.context)
        return self._client

    async def list_pods(self, namespace: str = "") -> list[PodInfo]:
        """List pods.

        Args:
            namespace: Namespace to list, empty for all namespaces

        Returns:
            List of normalized pod information

        Raises:
            KubernetesProviderError: If pods cannot be listed
        """
        try:
            pods = await asyncio.to_thread(self.client.list_pods, namespace)
        except KubernetesProviderError:
            raise
        except Exception as e:
            logger.error("list_pods_failed", namespace=namespace, error=str(e))
            raise KubernetesProviderError(str(e)) from e

        # Normalize to PodInfo dataclass
        return [
            PodInfo(
                name=pod.metadata.name,
                namespace=pod.metadata.namespace,
                phase=(pod.status.phase if pod.status else None) or "Unknown",
            )
            for pod in pods
        ]

    async def list_flux_resources(self, namespace: str = "") -> list[FluxResourceInfo]:
        """List Flux HelmReleases followed by Kustomizations.

        Args:
            namespace: Namespace to list, empty for all namespaces

        Returns:
            List of normalized Flux resources

        Raises:
            KubernetesProviderError: If resources cannot be listed
        """
        try:
            helm_releases = await asyncio.to_thread(self.client.list_helm_releases, namespace)
            kustomizations = await asyncio.to_thread(self.client.list_kustomizations, namespace)
        except KubernetesProviderError:
            raise
        except Exception as e:
            logger.error("list_flux_resources_failed", namespace=namespace, error=str(e))
            raise KubernetesProviderError(str(e)) from e

        resources = [
            _to_flux_resource("HelmRelease", obj, "lastAttemptedRevision")
            for obj in helm_releases
        ]
        resources.extend(
            _to_flux_resource("Kustomization", obj, "lastAppliedRevision")
            for obj in kustomizations
        )

        logger.debug(
            "flux_resources_listed",
            helm_releases=len(helm_releases),
            kustomizations=len(kustomizations),
        )
        return resources
