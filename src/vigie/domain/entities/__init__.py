"""
Domain entities for Vigie.
"""

from vigie.domain.entities.check_node import CheckNode
from vigie.domain.entities.check_result import CheckResult, Outcome

__all__ = [
    "CheckNode",
    "CheckResult",
    "Outcome",
]
