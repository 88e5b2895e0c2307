"""Cluster Health Check (clustercheck).

Query Prometheus, Kubernetes and Flux for a cluster and reduce the answers
into a single scored pass/fail gate for deployment pipelines.
"""

__version__ = "0.1.0"
__author__ = "Platform Engineering Team"
__license__ = "Apache-2.0"
