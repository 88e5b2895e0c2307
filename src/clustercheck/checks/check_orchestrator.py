"""Check orchestrator for running health checks."""

import asyncio
from collections.abc import Iterable

from clustercheck.checks.aggregator import ScoreAggregator
from clustercheck.checks.check_registry import CheckRegistry
from clustercheck.core.models import CheckCategory, CheckOutcome, GateCheckResult
from clustercheck.interfaces.check import Check, CheckContext
from clustercheck.utils.logging import get_logger, log_error

logger = get_logger(__name__)

# Categories always run in this order regardless of how they are requested.
CATEGORY_ORDER = (CheckCategory.PODS, CheckCategory.FLUX, CheckCategory.METRICS)

AUTH_CHECK_NAME = "Prometheus Authentication"

# Added to the secret store lookup timeout; the lookup must time out first.
AUTH_GRACE_SECONDS = 5.0

DEFAULT_AUTH_TIMEOUT_SECONDS = 30.0 + AUTH_GRACE_SECONDS


class CheckOrchestrator:
    """Orchestrates execution of health checks.

    This orchestrator coordinates check execution without knowing
    the specifics of each check. It handles:
    - Category ordering (pods, Flux, metrics)
    - Check execution with timeouts
    - Failure isolation
    - Result aggregation
    """

    def __init__(
        self,
        registry: CheckRegistry,
        max_concurrent: int = 1,
        check_timeout_seconds: float | None = None,
        auth_timeout_seconds: float = DEFAULT_AUTH_TIMEOUT_SECONDS,
    ):
        """Initialize check orchestrator.

        Args:
            registry: Check registry containing registered checks
            max_concurrent: Maximum concurrent check executions per category
            check_timeout_seconds: Timeout applied to every check (default: each
                check's own timeout)
            auth_timeout_seconds: Timeout for authenticating the metrics provider,
                including any secret store lookup
        """
        self.registry = registry
        self.max_concurrent = max(1, max_concurrent)
        self.check_timeout_seconds = check_timeout_seconds
        self.auth_timeout_seconds = auth_timeout_seconds
        logger.debug(
            "check_orchestrator_initialized",
            max_concurrent=self.max_concurrent,
            check_timeout_seconds=check_timeout_seconds,
            auth_timeout_seconds=auth_timeout_seconds,
        )

    async def run(
        self,
        context: CheckContext,
        categories: Iterable[CheckCategory] = CATEGORY_ORDER,
    ) -> GateCheckResult:
        """Run the requested categories and aggregate the outcomes.

        Args:
            context: Check context with provider dependencies
            categories: Categories to run

        Returns:
            Finalized GateCheckResult
        """
        requested = set(categories)
        aggregator = ScoreAggregator()

        logger.debug(
            "running_checks",
            cluster=context.target.name,
            categories=[c.value for c in CATEGORY_ORDER if c in requested],
        )

        for category in CATEGORY_ORDER:
            if category not in requested:
                continue

            checks = self.registry.get_checks_for_category(category)
            if not checks:
                continue

            if category is CheckCategory.METRICS:
                auth_failure = await self._authenticate(context)
                if auth_failure is not None:
                    aggregator.record(auth_failure)
                    continue

            for outcome in await self._run_checks(checks, context):
                aggregator.record(outcome)

        result = aggregator.finalize()
        logger.info(
            "checks_completed",
            cluster=context.target.name,
            total=result.total_checks,
            passed=result.passed_checks,
            health_score=round(result.health_score, 2),
            overall_passed=result.overall_passed,
        )
        return result

    async def _authenticate(self, context: CheckContext) -> CheckOutcome | None:
        """Authenticate the metrics provider before the first query.

        Returns:
            A failed outcome if authentication failed, None otherwise
        """
        provider = context.metrics_provider
        if provider is None:
            return None

        timeout = self.auth_timeout_seconds

        try:
            await asyncio.wait_for(provider.authenticate(), timeout=timeout)
            return None
        except TimeoutError:
            message = f"Credential lookup timed out after {timeout:g} seconds"
        except Exception as e:
            message = str(e)

        logger.error("prometheus_authentication_failed", error=message)
        return CheckOutcome(
            name=AUTH_CHECK_NAME,
            category=CheckCategory.AUTH,
            passed=False,
            message=message,
        )

    async def _run_checks(self, checks: list[Check], context: CheckContext) -> list[CheckOutcome]:
        """Run checks sequentially or bounded-concurrently, preserving order."""
        if self.max_concurrent == 1:
            return [await self._execute(check, context) for check in checks]

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def bounded(check: Check) -> CheckOutcome:
            async with semaphore:
                return await self._execute(check, context)

        return list(await asyncio.gather(*(bounded(check) for check in checks)))

    def _timeout_for(self, check: Check) -> float:
        if self.check_timeout_seconds is not None:
            return self.check_timeout_seconds
        return check.timeout_seconds

    async def _execute(self, check: Check, context: CheckContext) -> CheckOutcome:
        """Execute a single check, converting timeouts and errors to failures."""
        timeout = self._timeout_for(check)
        logger.debug("executing_check", check_name=check.name)

        try:
            # Execute check with timeout
            outcome = await asyncio.wait_for(check.execute(context), timeout=timeout)

        except TimeoutError:
            logger.error("check_timeout", check_name=check.name, timeout=timeout)

            # Create failure result for timeout
            return CheckOutcome(
                name=check.name,
                category=check.category,
                passed=False,
                message=f"Check timed out after {timeout:g} seconds",
            )

        except Exception as e:
            log_error(logger, e, operation="check_execution", check_name=check.name)

            # Create failure result for exception
            return CheckOutcome(
                name=check.name,
                category=check.category,
                passed=False,
                message=f"Check failed with error: {e}",
            )

        logger.debug("check_completed", check_name=check.name, passed=outcome.passed)
        return outcome
