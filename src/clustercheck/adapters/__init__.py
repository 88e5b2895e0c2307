"""Adapter implementations for external services."""

from clustercheck.adapters.credential_sources import (
    AWSSecretsCredentialSource,
    BitwardenCredentialSource,
)
from clustercheck.adapters.k8s_adapter import KubernetesAdapter
from clustercheck.adapters.prometheus_adapter import PrometheusAdapter

__all__ = [
    "AWSSecretsCredentialSource",
    "BitwardenCredentialSource",
    "KubernetesAdapter",
    "PrometheusAdapter",
]
