"""
CheckIdentifier value object - immutable dot-separated check path.
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple

from vigie.domain.exceptions import InvalidIdentifierError


@dataclass(frozen=True)
class CheckIdentifier:
    """
    Value object representing a validated check identifier.

    Identifier rules:
    - Segments separated by dots, each naming one tree edge
    - Empty string denotes the root of the registry
    - No empty segments (no leading, trailing or doubled dots)
    - Case-sensitive

    Examples:
        - "" (root)
        - database
        - database.primary
        - queues.Orders-1
    """

    value: str

    SEPARATOR: ClassVar[str] = "."

    def __post_init__(self):
        """Validate identifier on creation."""
        if not isinstance(self.value, str):
            raise InvalidIdentifierError(
                repr(self.value), "identifier must be a string"
            )

        if self.value and any(
            not segment for segment in self.value.split(self.SEPARATOR)
        ):
            raise InvalidIdentifierError(
                self.value, "identifier must not contain empty segments"
            )

    @classmethod
    def root(cls) -> "CheckIdentifier":
        """Get the root identifier."""
        return cls("")

    @classmethod
    def from_segments(cls, segments) -> "CheckIdentifier":
        """
        Build identifier from a sequence of segments.

        Args:
            segments: Iterable of segment names

        Returns:
            CheckIdentifier joining the segments
        """
        return cls(cls.SEPARATOR.join(segments))

    @property
    def segments(self) -> Tuple[str, ...]:
        """Get path segments (empty tuple for the root)."""
        if not self.value:
            return ()
        return tuple(self.value.split(self.SEPARATOR))

    @property
    def leaf(self) -> str:
        """Get the last segment ("" for the root)."""
        segments = self.segments
        return segments[-1] if segments else ""

    def is_root(self) -> bool:
        """Check if this identifier denotes the root."""
        return not self.value

    def require_node(self) -> "CheckIdentifier":
        """
        Ensure the identifier addresses a node below the root.

        Returns:
            Self, for chaining

        Raises:
            InvalidIdentifierError: If identifier is the root
        """
        if self.is_root():
            raise InvalidIdentifierError(self.value, "identifier must not be empty")
        return self

    def parent(self) -> "CheckIdentifier":
        """
        Get parent identifier.

        Raises:
            InvalidIdentifierError: If identifier is the root
        """
        self.require_node()
        return CheckIdentifier.from_segments(self.segments[:-1])

    def child(self, segment: str) -> "CheckIdentifier":
        """Get identifier of a direct child."""
        if self.is_root():
            return CheckIdentifier(segment)
        return CheckIdentifier(f"{self.value}{self.SEPARATOR}{segment}")

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"CheckIdentifier({self.value!r})"
