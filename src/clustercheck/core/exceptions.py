"""Custom exceptions for clustercheck."""


class ClusterCheckError(Exception):
    """Base exception for all clustercheck errors."""


class ConfigurationError(ClusterCheckError):
    """Configuration-related errors."""


class PrometheusError(ClusterCheckError):
    """Prometheus query failed (transport or decode)."""


class KubernetesError(ClusterCheckError):
    """Kubernetes operation failed."""


class SecretStoreError(ClusterCheckError):
    """Secret store lookup failed."""
