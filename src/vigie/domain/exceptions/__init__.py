"""
Domain exceptions for Vigie.
"""

from vigie.domain.exceptions.check_exceptions import (
    CheckNotFoundError,
    ProcedureFault,
)
from vigie.domain.exceptions.identifier_exceptions import (
    HealthCheckError,
    InvalidIdentifierError,
)

__all__ = [
    "HealthCheckError",
    "InvalidIdentifierError",
    "CheckNotFoundError",
    "ProcedureFault",
]
