"""Kubernetes client for read-only cluster queries."""

from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.client.models import V1Pod

from clustercheck.core.exceptions import KubernetesError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)

HELM_RELEASE_API = ("helm.toolkit.fluxcd.io", "v2", "helmreleases")
KUSTOMIZATION_API = ("kustomize.toolkit.fluxcd.io", "v1", "kustomizations")


def current_context(kubeconfig_path: str | None = None) -> str:
    """Get the active context name from a kubeconfig.

    Args:
        kubeconfig_path: Path to kubeconfig file (default location if None)

    Returns:
        Name of the current context

    Raises:
        KubernetesError: If the kubeconfig cannot be read or has no current context
    """
    try:
        _, active_context = config.list_kube_config_contexts(config_file=kubeconfig_path)
    except Exception as e:
        logger.debug("current_context_unavailable", kubeconfig=kubeconfig_path, error=str(e))
        raise KubernetesError(f"Failed to read kubeconfig: {e}") from e

    if not active_context or not active_context.get("name"):
        raise KubernetesError("No current context set in kubeconfig")

    return active_context["name"]


class KubernetesClient:
    """Kubernetes client wrapper."""

    def __init__(
        self,
        kubeconfig_path: str | None = None,
        context: str | None = None,
        request_timeout: float = 10.0,
    ):
        """Initialize Kubernetes client.

        Args:
            kubeconfig_path: Path to kubeconfig file (optional)
            context: Kubernetes context to use (optional)
            request_timeout: Per-request timeout in seconds
        """
        self.request_timeout = request_timeout

        try:
            if kubeconfig_path:
                config.load_kube_config(config_file=kubeconfig_path, context=context)
            else:
                # Try to load from default location or in-cluster config
                try:
                    config.load_kube_config(context=context)
                except config.ConfigException:
                    config.load_incluster_config()

            self.core_v1 = client.CoreV1Api()
            self.custom_objects = client.CustomObjectsApi()

            logger.debug(
                "k8s_client_initialized",
                kubeconfig=kubeconfig_path,
                context=context,
                api_server=self.api_server,
            )

        except Exception as e:
            logger.error("k8s_client_initialization_failed", error=str(e))
            raise KubernetesError(f"Failed to build config: {e}") from e

    @property
    def api_server(self) -> str:
        """Get the API server URL the client talks to."""
        return self.core_v1.api_client.configuration.host

    def list_pods(self, namespace: str = "") -> list[V1Pod]:
        """List pods in a namespace or across all namespaces.

        Args:
            namespace: Namespace to query, empty for all namespaces

        Returns:
            List of V1Pod objects

        Raises:
            KubernetesError: If pods cannot be listed
        """
        try:
            logger.debug("listing_pods", namespace=namespace or "<all>")

            if namespace:
                response = self.core_v1.list_namespaced_pod(
                    namespace=namespace, _request_timeout=self.request_timeout
                )
            else:
                response = self.core_v1.list_pod_for_all_namespaces(
                    _request_timeout=self.request_timeout
                )
            pods = response.items

            logger.debug("pods_listed", namespace=namespace or "<all>", count=len(pods))
            return pods

        except ApiException as e:
            logger.error(
                "list_pods_failed",
                namespace=namespace,
                status=e.status,
                reason=e.reason,
            )
            raise KubernetesError(f"failed to list pods: {e.reason}") from e
        except Exception as e:
            logger.error("list_pods_failed", namespace=namespace, error=str(e))
            raise KubernetesError(f"failed to list pods: {e}") from e

    def _list_custom_objects(
        self, api: tuple[str, str, str], namespace: str = ""
    ) -> list[dict[str, Any]]:
        """List custom objects of one kind.

        Args:
            api: (group, version, plural) of the resource
            namespace: Namespace to query, empty for all namespaces

        Returns:
            List of raw object dictionaries

        Raises:
            KubernetesError: If objects cannot be listed
        """
        group, version, plural = api

        try:
            logger.debug(
                "listing_custom_objects",
                resource=f"{plural}.{group}/{version}",
                namespace=namespace or "<all>",
            )

            if namespace:
                response = self.custom_objects.list_namespaced_custom_object(
                    group,
                    version,
                    namespace,
                    plural,
                    _request_timeout=self.request_timeout,
                )
            else:
                response = self.custom_objects.list_cluster_custom_object(
                    group,
                    version,
                    plural,
                    _request_timeout=self.request_timeout,
                )
            items = response.get("items", [])

            logger.debug("custom_objects_listed", resource=plural, count=len(items))
            return items

        except ApiException as e:
            logger.error(
                "list_custom_objects_failed",
                resource=plural,
                namespace=namespace,
                status=e.status,
                reason=e.reason,
            )
            raise KubernetesError(f"failed to list {plural}: {e.reason}") from e
        except Exception as e:
            logger.error("list_custom_objects_failed", resource=plural, error=str(e))
            raise KubernetesError(f"failed to list {plural}: {e}") from e

    def list_helm_releases(self, namespace: str = "") -> list[dict[str, Any]]:
        """List Flux HelmReleases.

        Args:
            namespace: Namespace to query, empty for all namespaces

        Returns:
            List of raw HelmRelease dictionaries
        """
        return self._list_custom_objects(HELM_RELEASE_API, namespace)

    def list_kustomizations(self, namespace: str = "") -> list[dict[str, Any]]:
        """List Flux Kustomizations.

        Args:
            namespace: Namespace to query, empty for all namespaces

        Returns:
            List of raw Kustomization dictionaries
        """
        return self._list_custom_objects(KUSTOMIZATION_API, namespace)
