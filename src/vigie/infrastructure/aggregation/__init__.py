"""
Check aggregation infrastructure.
"""

from vigie.infrastructure.aggregation.check_aggregator import CheckAggregator

__all__ = [
    "CheckAggregator",
]
