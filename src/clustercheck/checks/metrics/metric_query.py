"""Prometheus metric query check."""

from clustercheck.checks.classifier import POSITIVE_VALUE, classify
from clustercheck.core.models import CheckCategory, CheckOutcome, CheckPolarity, MetricQuerySpec
from clustercheck.interfaces.check import Check, CheckContext
from clustercheck.interfaces.exceptions import CheckExecutionError, MetricsProviderError
from clustercheck.utils.logging import get_logger

logger = get_logger(__name__)


class MetricQueryCheck(Check):
    """Run one PromQL query and classify its scalar result."""

    def __init__(self, spec: MetricQuerySpec):
        """Initialize metric query check.

        Args:
            spec: Query definition from the query table
        """
        self.spec = spec

    @property
    def name(self) -> str:
        """Get check name."""
        return self.spec.description

    @property
    def description(self) -> str:
        """Get check description."""
        return f"Validates {self.spec.description} reports {self._expected}"

    @property
    def category(self) -> CheckCategory:
        """Get check category."""
        return CheckCategory.METRICS

    @property
    def _expected(self) -> str:
        if self.spec.polarity is CheckPolarity.INVERTED:
            return f"not {POSITIVE_VALUE}"
        return POSITIVE_VALUE

    async def execute(self, context: CheckContext) -> CheckOutcome:
        """Execute the query.

        Args:
            context: Check context with providers

        Returns:
            CheckOutcome with the raw value and classification
        """
        metrics = context.metrics_provider
        if metrics is None:
            raise CheckExecutionError("Metrics provider not configured")

        expression = self.spec.render(context.target)

        try:
            raw_value = await metrics.query_scalar(expression)
        except MetricsProviderError as e:
            logger.error("metric_query_failed", check_name=self.name, error=str(e))
            return CheckOutcome(
                name=self.name,
                category=self.category,
                passed=False,
                message=f"Query error: {e}",
            )

        passed = classify(raw_value, self.spec.polarity)
        logger.debug(
            "metric_query_classified", check_name=self.name, value=raw_value, passed=passed
        )

        return CheckOutcome(
            name=self.name,
            category=self.category,
            passed=passed,
            message="Healthy" if passed else f"Value: {raw_value} (expected: {self._expected})",
            raw_value=raw_value,
        )
