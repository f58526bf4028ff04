"""
CheckNode entity - element of the registry tree.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple


class CheckNode:
    """
    Registry tree node.

    A node optionally carries a procedure and owns its children, keyed
    by segment in registration order. Nodes are never mutated once
    built: every change produces a new node that shares the untouched
    children, so a reference to any node is a consistent snapshot of
    its subtree.

    Attributes:
        segment: Edge name from the parent ("" for the root)
        procedure: Bound procedure, or None for a pure grouping node
        timeout: Procedure timeout in seconds
        children: Read-only mapping of segment to child node
    """

    __slots__ = ("segment", "procedure", "timeout", "_children")

    def __init__(
        self,
        segment: str,
        timeout: float,
        procedure: Optional[Callable[[], Any]] = None,
        children: Optional[Dict[str, "CheckNode"]] = None,
    ):
        """
        Initialize CheckNode.

        Args:
            segment: Edge name from the parent
            timeout: Procedure timeout in seconds
            procedure: Optional procedure
            children: Optional child mapping (taken over, not copied)
        """
        self.segment = segment
        self.procedure = procedure
        self.timeout = timeout
        self._children: Dict[str, CheckNode] = (
            children if children is not None else {}
        )

    @property
    def children(self) -> Mapping[str, "CheckNode"]:
        """Get read-only view of child nodes."""
        return MappingProxyType(self._children)

    @property
    def has_procedure(self) -> bool:
        """Check if node carries a procedure."""
        return self.procedure is not None

    def get_child(self, segment: str) -> Optional["CheckNode"]:
        """Get direct child by segment, or None."""
        return self._children.get(segment)

    def with_procedure(
        self, procedure: Callable[[], Any], timeout: float
    ) -> "CheckNode":
        """Copy of this node bound to a new procedure, children kept."""
        return CheckNode(self.segment, timeout, procedure, self._children)

    def with_child(self, child: "CheckNode") -> "CheckNode":
        """
        Copy of this node with a child added or replaced.

        A replaced child keeps its position in the ordering.
        """
        children = dict(self._children)
        children[child.segment] = child
        return CheckNode(self.segment, self.timeout, self.procedure, children)

    def without_child(self, segment: str) -> "CheckNode":
        """Copy of this node with a child subtree removed."""
        children = {
            name: node for name, node in self._children.items() if name != segment
        }
        return CheckNode(self.segment, self.timeout, self.procedure, children)

    def walk(
        self, path: Tuple[str, ...] = ()
    ) -> Iterator[Tuple[Tuple[str, ...], "CheckNode"]]:
        """
        Iterate depth-first over this subtree in registration order.

        Yields:
            (path, node) tuples, path relative to the tree root
        """
        yield path, self
        for segment, child in self._children.items():
            yield from child.walk(path + (segment,))

    def count_procedures(self) -> int:
        """Count procedure-bearing nodes in this subtree."""
        return sum(1 for _, node in self.walk() if node.has_procedure)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"CheckNode(segment={self.segment!r}, "
            f"procedure={self.has_procedure}, children={list(self._children)})"
        )
