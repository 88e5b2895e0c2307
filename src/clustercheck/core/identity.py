"""Cluster identity resolution."""

from clustercheck.core.config import ClusterConfig
from clustercheck.core.models import ClusterTarget

UNKNOWN_CLUSTER = "unknown"


def resolve_cluster_target(context: str | None, cluster: ClusterConfig) -> ClusterTarget:
    """Resolve the identifier substituted into metric queries.

    The kube context name is suffixed with the FQDN when one is configured;
    an explicit name override replaces the result entirely. The short name
    always stays the bare context name.

    Args:
        context: Active kube context, None if it could not be resolved
        cluster: Cluster identity configuration

    Returns:
        Resolved ClusterTarget
    """
    context_name = context or UNKNOWN_CLUSTER
    name = context_name

    if cluster.fqdn:
        name = f"{name}.{cluster.fqdn}"

    if cluster.name_override:
        name = cluster.name_override

    return ClusterTarget(context=context_name, name=name, short_name=context_name)
