"""Flux GitOps health checks."""

from clustercheck.checks.flux.resources import FluxResourcesCheck

__all__ = ["FluxResourcesCheck"]
