"""Unit tests for ScoreAggregator."""

import pytest

from clustercheck.checks.aggregator import ScoreAggregator, health_band
from clustercheck.core.models import CheckCategory, HealthBand


class TestScoreAggregator:
    """Tests for recording outcomes and finalizing."""

    def test_empty_run_scores_zero_and_fails(self) -> None:
        """Test a run with no checks scores 0 and does not pass."""
        result = ScoreAggregator().finalize()

        assert result.total_checks == 0
        assert result.health_score == 0.0
        assert result.overall_passed is False

    def test_counters_follow_outcomes(self, make_outcome) -> None:
        """Test total, passed and failed counters."""
        aggregator = ScoreAggregator()
        aggregator.record(make_outcome("A", passed=True))
        aggregator.record(make_outcome("B", passed=False))
        aggregator.record(make_outcome("C", passed=True))

        result = aggregator.finalize()

        assert result.total_checks == 3
        assert result.passed_checks == 2
        assert result.failed_checks == 1
        assert [o.name for o in result.check_results] == ["A", "B", "C"]

    def test_ten_of_twelve_passes(self, make_outcome) -> None:
        """Test 10 passing metric checks out of 12 scores 83.33 and passes."""
        aggregator = ScoreAggregator()
        for i in range(12):
            aggregator.record(make_outcome(f"Q{i}", passed=i < 10))

        result = aggregator.finalize()

        assert result.health_score == pytest.approx(83.333, abs=0.01)
        assert result.overall_passed is True
        assert result.band is HealthBand.GOOD

    def test_pod_error_with_healthy_flux_and_metrics(self, make_outcome) -> None:
        """Test a failed pod probe next to 3 ready Flux resources and 12 healthy metrics."""
        aggregator = ScoreAggregator()
        aggregator.record(
            make_outcome(
                "Pod Health",
                passed=False,
                category=CheckCategory.PODS,
                message="failed to list pods: connection refused",
            )
        )
        aggregator.record(make_outcome("Flux Resources", category=CheckCategory.FLUX))
        for i in range(12):
            aggregator.record(make_outcome(f"Q{i}"))

        result = aggregator.finalize()

        assert result.total_checks == 14
        assert result.passed_checks == 13
        assert result.health_score == pytest.approx(92.857, abs=0.01)
        assert result.overall_passed is True
        assert result.band is HealthBand.EXCELLENT
        pod = result.outcomes_for(CheckCategory.PODS)[0]
        assert pod.passed is False
        assert "connection refused" in pod.message

    def test_threshold_boundary_passes(self, make_outcome) -> None:
        """Test exactly 80.0 passes the gate."""
        aggregator = ScoreAggregator()
        for i in range(5):
            aggregator.record(make_outcome(f"Q{i}", passed=i < 4))

        result = aggregator.finalize()

        assert result.health_score == 80.0
        assert result.overall_passed is True

    def test_just_below_threshold_fails(self, make_outcome) -> None:
        """Test a score below 80 fails the gate."""
        aggregator = ScoreAggregator()
        for i in range(4):
            aggregator.record(make_outcome(f"Q{i}", passed=i < 3))

        result = aggregator.finalize()

        assert result.health_score == 75.0
        assert result.overall_passed is False
        assert result.band is HealthBand.FAIR

    def test_finalize_is_idempotent(self, make_outcome) -> None:
        """Test finalize twice without recording returns equal results."""
        aggregator = ScoreAggregator()
        aggregator.record(make_outcome("A", passed=True))
        aggregator.record(make_outcome("B", passed=False))

        assert aggregator.finalize() == aggregator.finalize()

    def test_record_after_finalize_updates_next_result(self, make_outcome) -> None:
        """Test finalized results are snapshots."""
        aggregator = ScoreAggregator()
        aggregator.record(make_outcome("A", passed=True))
        first = aggregator.finalize()

        aggregator.record(make_outcome("B", passed=False))
        second = aggregator.finalize()

        assert first.total_checks == 1
        assert second.total_checks == 2
        assert second.health_score == 50.0


class TestHealthBand:
    """Tests for health band labels."""

    @pytest.mark.parametrize(
        ("score", "band"),
        [
            (100.0, HealthBand.EXCELLENT),
            (90.0, HealthBand.EXCELLENT),
            (89.99, HealthBand.GOOD),
            (80.0, HealthBand.GOOD),
            (79.99, HealthBand.FAIR),
            (60.0, HealthBand.FAIR),
            (59.99, HealthBand.POOR),
            (0.0, HealthBand.POOR),
        ],
    )
    def test_band_boundaries(self, score: float, band: HealthBand) -> None:
        """Test band boundaries are inclusive at the lower end."""
        assert health_band(score) is band

    def test_verdicts(self) -> None:
        """Test the verdict text of each band."""
        assert HealthBand.EXCELLENT.verdict == "Ready for production"
        assert HealthBand.GOOD.verdict == "Acceptable for go-live"
        assert HealthBand.FAIR.verdict == "Review failures before go-live"
        assert HealthBand.POOR.verdict == "Not ready for production"
