"""Unit tests for ReportFormatter."""

import io
import json

import pytest
from rich.console import Console

from clustercheck.checks.aggregator import ScoreAggregator
from clustercheck.core.models import (
    CheckCategory,
    ClusterTarget,
    GateCheckResult,
    ResourceStatus,
)
from clustercheck.report.formatter import ReportFormatter


@pytest.fixture
def output() -> io.StringIO:
    """Capture buffer for rendered output."""
    return io.StringIO()


@pytest.fixture
def formatter(output: io.StringIO) -> ReportFormatter:
    """Formatter writing plain text to the capture buffer."""
    return ReportFormatter(Console(file=output, width=200, color_system=None))


def _pod(name: str, phase: str) -> ResourceStatus:
    return ResourceStatus(
        kind="Pod",
        namespace="default",
        name=name,
        status=phase,
        healthy=phase in ("Running", "Succeeded"),
    )


@pytest.fixture
def gate_result(make_outcome) -> GateCheckResult:
    """A mixed gate run: failed pods, ready Flux, one failing and one erroring metric."""
    aggregator = ScoreAggregator()
    aggregator.record(
        make_outcome(
            "Pod Health",
            passed=False,
            category=CheckCategory.PODS,
            message="1 pods not in Running or Succeeded state",
            details=(_pod("api-1", "Running"), _pod("api-2", "CrashLoop")),
        )
    )
    aggregator.record(
        make_outcome(
            "Flux Resources",
            category=CheckCategory.FLUX,
            message="All HelmReleases and Kustomizations are Ready",
            details=(
                ResourceStatus(
                    kind="HelmRelease",
                    namespace="flux-system",
                    name="ingress",
                    status="Ready",
                    healthy=True,
                    revision="4.8.3",
                ),
                ResourceStatus(
                    kind="Kustomization",
                    namespace="flux-system",
                    name="apps",
                    status="Ready",
                    healthy=True,
                    revision="main@sha1:abc",
                ),
            ),
        )
    )
    aggregator.record(make_outcome("APISERVER", raw_value="1"))
    aggregator.record(
        make_outcome("NODE", passed=False, raw_value="0", message="Value: 0 (expected: 1)")
    )
    aggregator.record(
        make_outcome(
            "KUBEDNS",
            passed=False,
            message="Query error: bad_data: parse error at [1h]",
        )
    )
    return aggregator.finalize()


@pytest.fixture
def target() -> ClusterTarget:
    """Cluster target for headers."""
    return ClusterTarget(context="prod-eu-1", name="prod-eu-1.example.com", short_name="prod-eu-1")


def test_render_metrics(formatter, output, gate_result, target) -> None:
    """Test one line per metric with OK, FAIL or ERROR."""
    metrics_only = GateCheckResult(
        total_checks=3,
        passed_checks=1,
        failed_checks=2,
        health_score=100 / 3,
        check_results=gate_result.outcomes_for(CheckCategory.METRICS),
    )

    formatter.render_metrics(metrics_only, target)
    text = output.getvalue()

    assert "clustercheck on prod-eu-1.example.com" in text
    assert "APISERVER 🟢 OK (1)" in text
    assert "NODE 🔴 FAIL (0)" in text
    assert "KUBEDNS ERROR - Query error: bad_data: parse error at [1h]" in text


def test_render_pods(formatter, output, gate_result, target) -> None:
    """Test pod lines, summary and failed pod list."""
    formatter.render_pods(gate_result, target)
    text = output.getvalue()

    assert "podcheck on prod-eu-1" in text
    assert "default/api-1 🟢 Running" in text
    assert "default/api-2 🔴 CrashLoop" in text
    assert "Summary: 1/2 pods in Running or Succeeded state" in text
    assert "  - default/api-2 (CrashLoop)" in text


def test_render_pods_probe_error(formatter, output, make_outcome, target) -> None:
    """Test a probe error is shown instead of a pod list."""
    aggregator = ScoreAggregator()
    aggregator.record(
        make_outcome(
            "Pod Health",
            passed=False,
            category=CheckCategory.PODS,
            message="failed to list pods: Forbidden",
        )
    )

    formatter.render_pods(aggregator.finalize(), target)

    assert "Error: failed to list pods: Forbidden" in output.getvalue()


def test_render_flux(formatter, output, gate_result, target) -> None:
    """Test Flux sections and summary."""
    formatter.render_flux(gate_result, target)
    text = output.getvalue()

    assert "fluxcheck on prod-eu-1" in text
    assert "HelmReleases:" in text
    assert "Kustomizations:" in text
    assert "flux-system/ingress 🟢 Ready (revision: 4.8.3)" in text
    assert "Summary: 2/2 resources Ready" in text


def test_render_flux_without_resources(formatter, output, make_outcome, target) -> None:
    """Test the empty Flux message."""
    aggregator = ScoreAggregator()
    aggregator.record(
        make_outcome(
            "Flux Resources",
            category=CheckCategory.FLUX,
            message="No Flux resources found",
        )
    )

    formatter.render_flux(aggregator.finalize(), target)

    assert "No Flux resources found" in output.getvalue()


def test_render_gate(formatter, output, gate_result, target) -> None:
    """Test the gate report sections, score line and decision."""
    formatter.render_gate(gate_result, target)
    text = output.getvalue()

    assert "CLUSTER GATE CHECK - prod-eu-1" in text
    assert "[1/3] Pod Health Check" in text
    assert "[2/3] Flux Resources Check" in text
    assert "[3/3] Prometheus Monitoring Check" in text
    assert "NODE ✗ FAIL - Value: 0" in text
    assert "Some Prometheus checks failed" in text
    assert "CLUSTER HEALTH: FAILED" in text
    assert "Health Score: 40.0% (2 of 5 checks passed)" in text
    assert "Detailed Results:" in text
    assert "Quality Gate Decision:" in text
    assert "POOR - Not ready for production" in text


def test_render_json(formatter, output, gate_result, target) -> None:
    """Test the JSON document carries counts, band and cluster."""
    formatter.render_json(gate_result, target)

    data = json.loads(output.getvalue())

    assert data["total_checks"] == 5
    assert data["passed_checks"] == 2
    assert data["overall_passed"] is False
    assert data["band"] == "POOR"
    assert data["cluster"] == "prod-eu-1.example.com"
    assert [c["name"] for c in data["check_results"]][:2] == ["Pod Health", "Flux Resources"]
    assert data["check_results"][0]["details"][1]["status"] == "CrashLoop"
