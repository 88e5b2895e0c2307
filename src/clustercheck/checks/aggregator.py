"""Score aggregation and gate decision."""

from clustercheck.core.models import (
    PASS_THRESHOLD,
    CheckOutcome,
    GateCheckResult,
    HealthBand,
)
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


def health_band(score: float) -> HealthBand:
    """Get the presentation band for a health score.

    Args:
        score: Health score in [0, 100]

    Returns:
        HealthBand for the score
    """
    return HealthBand.for_score(score)


class ScoreAggregator:
    """Accumulates check outcomes for one run and computes the gate result.

    One aggregator is used per run. ``record`` must be called exactly once
    per executed check, including checks whose probe failed.
    """

    def __init__(self) -> None:
        """Initialize an empty aggregator."""
        self._outcomes: list[CheckOutcome] = []
        self._passed = 0
        self._failed = 0

    @property
    def total(self) -> int:
        """Get number of recorded outcomes."""
        return len(self._outcomes)

    def record(self, outcome: CheckOutcome) -> None:
        """Record a check outcome.

        Args:
            outcome: Outcome of one executed check
        """
        self._outcomes.append(outcome)
        if outcome.passed:
            self._passed += 1
        else:
            self._failed += 1

        logger.debug(
            "outcome_recorded",
            check_name=outcome.name,
            category=outcome.category.value,
            passed=outcome.passed,
        )

    def finalize(self) -> GateCheckResult:
        """Compute the aggregate result.

        Calling this repeatedly without recording in between returns equal
        results.

        Returns:
            GateCheckResult with score and gate decision
        """
        total = self.total
        score = 100.0 * self._passed / total if total else 0.0

        result = GateCheckResult(
            total_checks=total,
            passed_checks=self._passed,
            failed_checks=self._failed,
            health_score=score,
            check_results=tuple(self._outcomes),
            overall_passed=score >= PASS_THRESHOLD,
        )

        logger.debug(
            "gate_result_finalized",
            total=total,
            passed=self._passed,
            failed=self._failed,
            health_score=round(score, 2),
            overall_passed=result.overall_passed,
        )
        return result
