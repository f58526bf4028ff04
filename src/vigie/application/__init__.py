"""
Application layer for Vigie.
"""

from vigie.application.classification import HealthClassification, classify
from vigie.application.health_checks import HealthChecks
from vigie.application.serialization import normalize_outcome_fields

__all__ = [
    "HealthChecks",
    "HealthClassification",
    "classify",
    "normalize_outcome_fields",
]
