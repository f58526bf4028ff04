"""
Infrastructure layer for Vigie.

Provides:
- Check registry (persistent tree with snapshot reads)
- Procedure executor (timeout race, fault isolation)
- Check aggregator (concurrent fan-out, bottom-up fold)
"""

from vigie.infrastructure.aggregation import CheckAggregator
from vigie.infrastructure.execution import ProcedureExecutor
from vigie.infrastructure.registry import DEFAULT_TIMEOUT, CheckRegistry

__all__ = [
    "CheckRegistry",
    "DEFAULT_TIMEOUT",
    "ProcedureExecutor",
    "CheckAggregator",
]
