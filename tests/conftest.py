"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from clustercheck.core.models import (
    CheckCategory,
    CheckOutcome,
    ClusterTarget,
    ResourceStatus,
)
from clustercheck.interfaces.check import CheckContext
from clustercheck.interfaces.kubernetes_provider import (
    FluxResourceInfo,
    KubernetesProvider,
    PodInfo,
)
from clustercheck.interfaces.metrics_provider import MetricsProvider


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore default logging so configured streams never outlive a test."""
    yield
    logging.root.handlers = []
    structlog.reset_defaults()


@pytest.fixture
def sample_target() -> ClusterTarget:
    """Provide a resolved cluster target."""
    return ClusterTarget(
        context="prod-eu-1",
        name="prod-eu-1.k8s.example.com",
        short_name="prod-eu-1",
    )


@pytest.fixture
def sample_pods() -> list[PodInfo]:
    """Provide a mix of healthy and unhealthy pods."""
    return [
        PodInfo(name="coredns-5d78c", namespace="kube-system", phase="Running"),
        PodInfo(name="migrate-28f1a", namespace="default", phase="Succeeded"),
        PodInfo(name="api-7c9f8", namespace="default", phase="Pending"),
    ]


@pytest.fixture
def sample_flux_resources() -> list[FluxResourceInfo]:
    """Provide ready Flux resources."""
    return [
        FluxResourceInfo(
            kind="HelmRelease",
            name="ingress-nginx",
            namespace="flux-system",
            ready=True,
            message="Helm upgrade succeeded",
            revision="4.8.3",
        ),
        FluxResourceInfo(
            kind="HelmRelease",
            name="cert-manager",
            namespace="flux-system",
            ready=True,
            message="Helm install succeeded",
            revision="v1.13.2",
        ),
        FluxResourceInfo(
            kind="Kustomization",
            name="apps",
            namespace="flux-system",
            ready=True,
            message="Applied revision: main@sha1:4f2a",
            revision="main@sha1:4f2a",
        ),
    ]


@pytest.fixture
def mock_kubernetes_provider(sample_flux_resources) -> AsyncMock:
    """Mock Kubernetes provider returning healthy pods and Flux resources."""
    provider = AsyncMock(spec=KubernetesProvider)
    provider.list_pods.return_value = [
        PodInfo(name="coredns-5d78c", namespace="kube-system", phase="Running"),
    ]
    provider.list_flux_resources.return_value = sample_flux_resources
    return provider


@pytest.fixture
def mock_metrics_provider() -> AsyncMock:
    """Mock metrics provider where every query reports healthy."""
    provider = AsyncMock(spec=MetricsProvider)

    async def query_scalar(expression: str) -> str:
        return "0" if "fluent" in expression else "1"

    provider.query_scalar.side_effect = query_scalar
    return provider


@pytest.fixture
def check_context(
    sample_target: ClusterTarget,
    mock_kubernetes_provider: AsyncMock,
    mock_metrics_provider: AsyncMock,
) -> CheckContext:
    """Provide a check context wired to mock providers."""
    return CheckContext(
        target=sample_target,
        kubernetes_provider=mock_kubernetes_provider,
        metrics_provider=mock_metrics_provider,
    )


@pytest.fixture
def make_outcome():
    """Factory for check outcomes."""

    def _make(
        name: str = "APISERVER",
        passed: bool = True,
        category: CheckCategory = CheckCategory.METRICS,
        message: str | None = None,
        raw_value: str | None = None,
        details: tuple[ResourceStatus, ...] = (),
    ) -> CheckOutcome:
        return CheckOutcome(
            name=name,
            category=category,
            passed=passed,
            message=message if message is not None else ("Healthy" if passed else "Failed"),
            raw_value=raw_value,
            details=details,
        )

    return _make


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Mock low-level Kubernetes client."""
    return MagicMock()
