"""
Procedure execution infrastructure.
"""

from vigie.infrastructure.execution.procedure_executor import ProcedureExecutor

__all__ = [
    "ProcedureExecutor",
]
