"""
Vigie - Hierarchical health check registry and execution engine.

Procedures are registered under dot-separated identifiers; invoking any
node runs its subtree concurrently and aggregates an UP/DOWN verdict.
"""

from vigie.application import (
    HealthChecks,
    HealthClassification,
    classify,
    normalize_outcome_fields,
)
from vigie.domain.entities import CheckResult, Outcome
from vigie.domain.exceptions import (
    CheckNotFoundError,
    HealthCheckError,
    InvalidIdentifierError,
)
from vigie.domain.value_objects import PROCEDURE_EXECUTION_FAILURE, Status

__version__ = "0.1.0"
__all__ = [
    "HealthChecks",
    "HealthClassification",
    "classify",
    "normalize_outcome_fields",
    "CheckResult",
    "Outcome",
    "Status",
    "PROCEDURE_EXECUTION_FAILURE",
    "HealthCheckError",
    "InvalidIdentifierError",
    "CheckNotFoundError",
]
