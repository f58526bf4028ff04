"""
Check resolution and execution exceptions.
"""

from vigie.domain.exceptions.identifier_exceptions import HealthCheckError


class CheckNotFoundError(HealthCheckError):
    """Raised when an identifier addresses nothing in the registry."""

    def __init__(self, identifier: str):
        """
        Initialize CheckNotFoundError.

        Args:
            identifier: Identifier that was not found
        """
        super().__init__(f"Check not found: '{identifier}'")
        self.identifier = identifier


class ProcedureFault(HealthCheckError):
    """
    Raised inside the executor when a procedure misbehaves.

    Never escapes ProcedureExecutor.run: it is converted into a DOWN
    status carrying the execution failure flag.
    """

    def __init__(self, identifier: str, cause: str):
        """
        Initialize ProcedureFault.

        Args:
            identifier: Identifier of the faulting check
            cause: Description of the fault
        """
        super().__init__(f"Procedure '{identifier}' failed: {cause}")
        self.identifier = identifier
        self.cause = cause
