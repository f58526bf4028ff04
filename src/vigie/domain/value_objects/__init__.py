"""
Value objects for Vigie.
"""

from vigie.domain.value_objects.check_identifier import CheckIdentifier
from vigie.domain.value_objects.status import (
    PROCEDURE_EXECUTION_FAILURE,
    Status,
)

__all__ = [
    "CheckIdentifier",
    "Status",
    "PROCEDURE_EXECUTION_FAILURE",
]
