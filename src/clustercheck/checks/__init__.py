"""Health checks, aggregation and orchestration."""

from clustercheck.checks.aggregator import ScoreAggregator, health_band
from clustercheck.checks.check_orchestrator import CheckOrchestrator
from clustercheck.checks.check_registry import CheckRegistry, build_registry
from clustercheck.checks.classifier import classify, classify_check, polarity_for

__all__ = [
    "CheckOrchestrator",
    "CheckRegistry",
    "ScoreAggregator",
    "build_registry",
    "classify",
    "classify_check",
    "health_band",
    "polarity_for",
]
