"""
Boundary classification of invocation results.

Maps a CheckResult (or a not-found failure) to the classification a
transport layer reports, together with its HTTP status code.
"""

from enum import Enum
from typing import Optional

from vigie.domain.entities import CheckResult


class HealthClassification(str, Enum):
    """Classification of an invocation as seen by callers."""

    HEALTHY = "healthy"
    NO_CHECKS = "no_checks"
    UNHEALTHY = "unhealthy"
    PROCEDURE_ERROR = "procedure_error"
    NOT_FOUND = "not_found"

    @property
    def http_status(self) -> int:
        """HTTP status code for this classification."""
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    HealthClassification.HEALTHY: 200,
    HealthClassification.NO_CHECKS: 204,
    HealthClassification.UNHEALTHY: 503,
    HealthClassification.PROCEDURE_ERROR: 500,
    HealthClassification.NOT_FOUND: 404,
}


def classify(result: Optional[CheckResult]) -> HealthClassification:
    """
    Classify an invocation result.

    Args:
        result: Result tree, or None when the identifier was not found

    Returns:
        HealthClassification
    """
    if result is None:
        return HealthClassification.NOT_FOUND

    if result.is_up:
        if result.is_empty:
            return HealthClassification.NO_CHECKS
        return HealthClassification.HEALTHY

    if result.has_procedure_failure():
        return HealthClassification.PROCEDURE_ERROR
    return HealthClassification.UNHEALTHY
