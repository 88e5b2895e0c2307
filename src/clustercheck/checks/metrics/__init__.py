"""Prometheus metric health checks."""

from clustercheck.checks.metrics.metric_query import MetricQueryCheck

__all__ = ["MetricQueryCheck"]
