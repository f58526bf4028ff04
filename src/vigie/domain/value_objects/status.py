"""
Status value object - outcome reported by a single procedure.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Optional


PROCEDURE_EXECUTION_FAILURE = "procedure-execution-failure"


@dataclass(frozen=True)
class Status:
    """
    Immutable up/down flag with optional diagnostic data.

    Data is copied on creation and exposed read-only, so neither the
    caller nor a consumer can alter a reported status.

    Example:
        >>> Status.ok({"connections": 4})
        Status(up=True, data=mappingproxy({'connections': 4}))
        >>> Status.ko()
        Status(up=False, data=None)
    """

    up: bool
    data: Optional[Mapping[str, Any]] = None

    FAILURE_FLAG: ClassVar[str] = PROCEDURE_EXECUTION_FAILURE

    def __post_init__(self):
        """Normalize flag and detach data."""
        object.__setattr__(self, "up", bool(self.up))
        if self.data is not None:
            if not isinstance(self.data, Mapping):
                raise TypeError(
                    f"Status data must be a mapping, got {type(self.data).__name__}"
                )
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def ok(cls, data: Optional[Mapping[str, Any]] = None) -> "Status":
        """Create an UP status."""
        return cls(up=True, data=data)

    @classmethod
    def ko(cls, data: Optional[Mapping[str, Any]] = None) -> "Status":
        """Create a DOWN status."""
        return cls(up=False, data=data)

    @classmethod
    def failure(cls, cause: str) -> "Status":
        """
        Create a DOWN status for a procedure that could not be evaluated.

        Args:
            cause: Description of the fault or timeout

        Returns:
            DOWN status flagged as an execution failure
        """
        return cls(up=False, data={cls.FAILURE_FLAG: True, "cause": cause})

    @property
    def is_execution_failure(self) -> bool:
        """Check if status stems from a fault in the check machinery."""
        return bool(self.data and self.data.get(self.FAILURE_FLAG) is True)
