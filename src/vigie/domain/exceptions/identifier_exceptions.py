"""
Identifier-related exceptions.
"""


class HealthCheckError(Exception):
    """Base exception for health check errors."""

    pass


class InvalidIdentifierError(HealthCheckError):
    """Raised when a check identifier is malformed."""

    def __init__(self, identifier: str, reason: str):
        """
        Initialize InvalidIdentifierError.

        Args:
            identifier: Malformed identifier
            reason: Reason why identifier is invalid
        """
        super().__init__(f"Invalid check identifier '{identifier}': {reason}")
        self.identifier = identifier
        self.reason = reason
