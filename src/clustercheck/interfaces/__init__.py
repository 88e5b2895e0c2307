"""Interface definitions for clustercheck collaborators."""

from clustercheck.interfaces.check import Check, CheckContext
from clustercheck.interfaces.credential_source import CredentialSource, Credentials
from clustercheck.interfaces.kubernetes_provider import (
    FluxResourceInfo,
    KubernetesProvider,
    PodInfo,
)
from clustercheck.interfaces.metrics_provider import MetricsProvider

__all__ = [
    "Check",
    "CheckContext",
    "CredentialSource",
    "Credentials",
    "FluxResourceInfo",
    "KubernetesProvider",
    "PodInfo",
    "MetricsProvider",
]
