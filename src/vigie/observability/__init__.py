"""
Observability utilities for Vigie.

Provides Prometheus collectors for procedure executions and invocations.
"""

from vigie.observability.metrics import (
    INVOCATIONS,
    PROCEDURE_DURATION,
    PROCEDURE_RUNS,
    CheckMetrics,
)

__all__ = [
    "CheckMetrics",
    "PROCEDURE_RUNS",
    "PROCEDURE_DURATION",
    "INVOCATIONS",
]
