"""Core data models for clustercheck."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Gate decision threshold (percentage of passed checks).
PASS_THRESHOLD = 80.0

# Description prefix of error-count metrics whose "1" means unhealthy.
INVERTED_POLARITY_PREFIX = "FLUENT"


class CheckCategory(str, Enum):
    """Category a check belongs to, in execution order."""

    PODS = "pods"
    FLUX = "flux"
    METRICS = "metrics"
    AUTH = "auth"


class CheckPolarity(str, Enum):
    """How a metric's scalar result maps to healthy/unhealthy."""

    NORMAL = "normal"
    INVERTED = "inverted"

    @classmethod
    def for_name(cls, name: str) -> "CheckPolarity":
        """Get the conventional polarity for a check name.

        Error-count checks are named with the FLUENT prefix and report "1"
        when errors are present.

        Args:
            name: Check name

        Returns:
            INVERTED for FLUENT-prefixed names, NORMAL otherwise
        """
        if name.startswith(INVERTED_POLARITY_PREFIX):
            return cls.INVERTED
        return cls.NORMAL


class HealthBand(str, Enum):
    """Presentation label layered on top of the health score."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"

    @classmethod
    def for_score(cls, score: float) -> "HealthBand":
        """Get the band a health score falls into.

        Args:
            score: Health score in [0, 100]

        Returns:
            Matching band
        """
        if score >= 90.0:
            return cls.EXCELLENT
        if score >= PASS_THRESHOLD:
            return cls.GOOD
        if score >= 60.0:
            return cls.FAIR
        return cls.POOR

    @property
    def verdict(self) -> str:
        """Get the human-readable gate verdict for this band."""
        return {
            HealthBand.EXCELLENT: "Ready for production",
            HealthBand.GOOD: "Acceptable for go-live",
            HealthBand.FAIR: "Review failures before go-live",
            HealthBand.POOR: "Not ready for production",
        }[self]


class ResourceStatus(BaseModel):
    """Status of a single pod or Flux resource inside a probe outcome."""

    model_config = ConfigDict(frozen=True)

    kind: str
    namespace: str
    name: str
    status: str
    healthy: bool
    message: str = ""
    revision: str = ""

    @property
    def qualified_name(self) -> str:
        """Get the namespace/name form used in reports."""
        return f"{self.namespace}/{self.name}"


class CheckOutcome(BaseModel):
    """Result of one atomic check. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: CheckCategory
    passed: bool
    message: str
    raw_value: str | None = None
    details: tuple[ResourceStatus, ...] = ()
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class GateCheckResult(BaseModel):
    """Aggregate over a full run."""

    model_config = ConfigDict(frozen=True)

    total_checks: int = 0
    passed_checks: int = 0
    failed_checks: int = 0
    health_score: float = 0.0
    check_results: tuple[CheckOutcome, ...] = ()
    overall_passed: bool = False

    @model_validator(mode="after")
    def validate_totals(self) -> "GateCheckResult":
        """Ensure the counters are consistent.

        Returns:
            Self if validation passes

        Raises:
            ValueError: If total != passed + failed
        """
        if self.total_checks != self.passed_checks + self.failed_checks:
            raise ValueError(
                f"Inconsistent totals: {self.total_checks} != "
                f"{self.passed_checks} + {self.failed_checks}"
            )
        return self

    @property
    def band(self) -> HealthBand:
        """Get the health band for the score."""
        return HealthBand.for_score(self.health_score)

    def outcomes_for(self, category: CheckCategory) -> list[CheckOutcome]:
        """Get outcomes of a single category in execution order.

        Args:
            category: Category to filter by

        Returns:
            List of matching outcomes
        """
        return [o for o in self.check_results if o.category == category]

    def to_report_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary including the band.

        Returns:
            Dictionary representation
        """
        data = self.model_dump(mode="json")
        data["band"] = self.band.value
        data["threshold"] = PASS_THRESHOLD
        return data


class MetricQuerySpec(BaseModel):
    """Static definition of one metric check.

    ``query`` is a ``str.format`` template: ``{cluster}`` and ``{short_cluster}``
    are substituted at run start, literal PromQL braces are written doubled.
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1, description="Check name shown in reports")
    query: str = Field(..., min_length=1, description="PromQL expression template")
    polarity: CheckPolarity = Field(
        CheckPolarity.NORMAL,
        description="Result polarity, derived from the description when omitted",
    )

    @model_validator(mode="before")
    @classmethod
    def default_polarity(cls, data: Any) -> Any:
        """Derive polarity from the description prefix when not given.

        Args:
            data: Raw input data

        Returns:
            Input data with polarity filled in
        """
        if isinstance(data, dict) and data.get("polarity") is None:
            description = str(data.get("description", ""))
            data = {**data, "polarity": CheckPolarity.for_name(description)}
        return data

    def render(self, target: "ClusterTarget") -> str:
        """Render the query expression for a cluster.

        Args:
            target: Resolved cluster target

        Returns:
            PromQL expression
        """
        return self.query.format(cluster=target.name, short_cluster=target.short_name)


class ClusterTarget(BaseModel):
    """Resolved identity of the cluster under test."""

    model_config = ConfigDict(frozen=True)

    context: str = Field(..., description="Active kube context, or 'unknown'")
    name: str = Field(..., description="Identifier substituted into queries")
    short_name: str = Field(..., description="Context name without FQDN suffix")
