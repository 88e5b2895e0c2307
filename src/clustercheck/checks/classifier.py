"""Pass/fail classification of raw metric results."""

from clustercheck.core.models import CheckPolarity

# The only raw value treated as a positive signal. Compared as text, so
# "1.0" or " 1" are not equal to it.
POSITIVE_VALUE = "1"


def classify(raw_result: str, polarity: CheckPolarity) -> bool:
    """Decide whether a raw scalar result passes.

    Args:
        raw_result: Scalar value as returned by the metrics backend
        polarity: How the value maps to healthy/unhealthy

    Returns:
        True if the check passes
    """
    positive = raw_result == POSITIVE_VALUE
    if polarity is CheckPolarity.INVERTED:
        return not positive
    return positive


def polarity_for(name: str) -> CheckPolarity:
    """Get the conventional polarity for a check name."""
    return CheckPolarity.for_name(name)


def classify_check(name: str, raw_result: str) -> bool:
    """Classify a raw result using the polarity implied by the check name."""
    return classify(raw_result, polarity_for(name))
