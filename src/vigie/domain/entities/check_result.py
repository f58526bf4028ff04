"""
CheckResult entity - per-node outcome tree returned by an invocation.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple

from vigie.domain.value_objects.status import PROCEDURE_EXECUTION_FAILURE


class Outcome(str, Enum):
    """Aggregated check outcome."""

    UP = "UP"
    DOWN = "DOWN"

    @classmethod
    def from_flag(cls, up: bool) -> "Outcome":
        """Map a boolean flag to an outcome."""
        return cls.UP if up else cls.DOWN


@dataclass(frozen=True)
class CheckResult:
    """
    Result of invoking one node of the registry tree.

    Mirrors the registry subtree shape. Produced fresh for every
    invocation and never shared between calls.

    Attributes:
        identifier: Leaf segment of the node ("" for the root)
        outcome: Aggregated outcome of the node and its children
        data: Data reported by the node's own procedure (read-only)
        checks: Child results in registration order
        executed: Whether the node ran its own procedure
    """

    identifier: str
    outcome: Outcome
    data: Optional[Mapping[str, Any]] = None
    checks: Tuple["CheckResult", ...] = field(default_factory=tuple)
    executed: bool = False

    def __post_init__(self):
        """Detach data and children from the caller."""
        if self.data is not None:
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))
        object.__setattr__(self, "checks", tuple(self.checks))

    @property
    def is_up(self) -> bool:
        """Check if aggregated outcome is UP."""
        return self.outcome == Outcome.UP

    @property
    def is_execution_failure(self) -> bool:
        """Check if this node's own procedure faulted or timed out."""
        return bool(self.data and self.data.get(PROCEDURE_EXECUTION_FAILURE) is True)

    @property
    def is_empty(self) -> bool:
        """Check if no procedure was executed anywhere in the tree."""
        return next(self.flatten(), None) is None

    def flatten(self) -> Iterator["CheckResult"]:
        """
        Iterate over results whose node executed a procedure.

        Yields:
            CheckResult instances, depth-first in registration order
        """
        if self.executed:
            yield self
        for check in self.checks:
            yield from check.flatten()

    def has_procedure_failure(self) -> bool:
        """Check if any node in the tree carries the execution failure flag."""
        if self.is_execution_failure:
            return True
        return any(check.has_procedure_failure() for check in self.checks)

    def find(self, *segments: str) -> Optional["CheckResult"]:
        """
        Find a descendant result by relative path segments.

        Args:
            *segments: Path segments below this result

        Returns:
            Matching CheckResult or None
        """
        current = self
        for segment in segments:
            current = next(
                (check for check in current.checks if check.identifier == segment),
                None,
            )
            if current is None:
                return None
        return current

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON response.

        Both "status" and "outcome" are emitted: legacy consumers read
        either one.

        Returns:
            Dictionary representation
        """
        result: Dict[str, Any] = {
            "id": self.identifier,
            "status": self.outcome.value,
            "outcome": self.outcome.value,
        }

        if self.data:
            result["data"] = dict(self.data)

        result["checks"] = [check.to_dict() for check in self.checks]
        return result
