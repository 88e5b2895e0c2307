"""Kubernetes health checks."""

from clustercheck.checks.kubernetes.pod_health import PodHealthCheck

__all__ = ["PodHealthCheck"]
