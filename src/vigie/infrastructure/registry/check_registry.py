"""
Check registry - in-memory tree of registered procedures.

The tree is persistent: a write copies the nodes along the mutated
path and swaps the root reference, untouched subtrees are shared.
Readers grab the current root and walk immutable nodes, so an
in-flight invocation always sees a consistent snapshot and never
waits on a writer.
"""

import threading
from typing import Any, Callable, List, Optional, Tuple, Union

from vigie.domain.entities import CheckNode
from vigie.domain.exceptions import CheckNotFoundError, InvalidIdentifierError
from vigie.domain.value_objects import CheckIdentifier
from vigie.reporter import SystemReporter

DEFAULT_TIMEOUT = 1.0

IdentifierLike = Union[str, CheckIdentifier]


class CheckRegistry:
    """
    Registry of health check procedures addressed by identifier.

    Writers are serialized by a lock; readers never lock.

    Example:
        registry = CheckRegistry(default_timeout=2.0)
        registry.register("database.primary", ping_primary)
        registry.register("database.replica", ping_replica, timeout=0.5)

        node = registry.resolve_subtree("database")
        registry.unregister("database.replica")
    """

    def __init__(
        self,
        default_timeout: float = DEFAULT_TIMEOUT,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize an empty registry.

        Args:
            default_timeout: Timeout in seconds for procedures registered
                without one
            reporter: Optional SystemReporter for logging
        """
        if default_timeout <= 0:
            raise ValueError(f"default_timeout must be positive, got {default_timeout}")

        self.default_timeout = default_timeout
        self.reporter = reporter or SystemReporter(name="vigie")
        self._root = CheckNode("", default_timeout)
        self._lock = threading.Lock()

    # ================================================================
    # Writers
    # ================================================================

    def register(
        self,
        identifier: IdentifierLike,
        procedure: Callable[[], Any],
        timeout: Optional[float] = None,
    ) -> CheckIdentifier:
        """
        Register (or overwrite) the procedure at an identifier.

        Missing ancestors are created as grouping nodes. Overwriting
        replaces procedure and timeout; existing children are kept.

        Args:
            identifier: Non-root identifier
            procedure: Zero-argument callable (sync or async)
            timeout: Timeout in seconds (registry default when None)

        Returns:
            Parsed identifier

        Raises:
            InvalidIdentifierError: If identifier is empty or malformed
            ValueError: If procedure is not callable or timeout not positive
        """
        check_id = self._parse(identifier).require_node()

        if not callable(procedure):
            raise ValueError(f"Procedure for '{check_id}' must be callable")

        if timeout is not None and timeout <= 0:
            raise ValueError(
                f"Timeout for '{check_id}' must be positive, got {timeout}"
            )

        effective_timeout = self.default_timeout if timeout is None else timeout

        with self._lock:
            self._root = self._insert(
                self._root, check_id.segments, procedure, effective_timeout
            )

        self.reporter.info(
            f"Registered check '{check_id}' (timeout {effective_timeout}s)",
            context="Registry",
            verbose_level=2,
        )
        return check_id

    def unregister(self, identifier: IdentifierLike) -> bool:
        """
        Remove the node at an identifier together with its subtree.

        Unregistering an unknown identifier is a no-op.

        Args:
            identifier: Non-root identifier

        Returns:
            True if a node was removed, False if nothing was registered

        Raises:
            InvalidIdentifierError: If identifier is empty or malformed
        """
        check_id = self._parse(identifier).require_node()

        with self._lock:
            updated = self._remove(self._root, check_id.segments)
            if updated is not None:
                self._root = updated

        if updated is None:
            self.reporter.debug(
                f"Unregister ignored, no check at '{check_id}'", context="Registry"
            )
            return False

        self.reporter.info(
            f"Unregistered check '{check_id}'", context="Registry", verbose_level=2
        )
        return True

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._root = CheckNode("", self.default_timeout)

        self.reporter.info("Cleared all checks", context="Registry", verbose_level=2)

    # ================================================================
    # Readers
    # ================================================================

    def snapshot(self) -> CheckNode:
        """Get the current root node (immutable point-in-time view)."""
        return self._root

    def resolve_subtree(self, identifier: IdentifierLike = "") -> CheckNode:
        """
        Resolve the node addressed by an identifier.

        The root always resolves, to an empty node when nothing is
        registered.

        Args:
            identifier: Identifier to resolve ("" for the root)

        Returns:
            Snapshot of the addressed node and its descendants

        Raises:
            CheckNotFoundError: If identifier addresses nothing
        """
        try:
            check_id = self._parse(identifier)
        except InvalidIdentifierError:
            raise CheckNotFoundError(str(identifier)) from None

        node = self._root
        for segment in check_id.segments:
            node = node.get_child(segment)
            if node is None:
                raise CheckNotFoundError(check_id.value)
        return node

    def identifiers(self) -> List[str]:
        """Get identifiers of procedure-bearing nodes in registration order."""
        return [
            CheckIdentifier.from_segments(path).value
            for path, node in self._root.walk()
            if node.has_procedure
        ]

    def __contains__(self, identifier: object) -> bool:
        """Check if an identifier resolves to a node."""
        if not isinstance(identifier, (str, CheckIdentifier)):
            return False
        try:
            self.resolve_subtree(identifier)
        except CheckNotFoundError:
            return False
        return True

    def __len__(self) -> int:
        """Number of registered procedures."""
        return self._root.count_procedures()

    # ================================================================
    # Tree surgery (call with lock held)
    # ================================================================

    @staticmethod
    def _parse(identifier: IdentifierLike) -> CheckIdentifier:
        """Parse identifier argument into a CheckIdentifier."""
        if isinstance(identifier, CheckIdentifier):
            return identifier
        return CheckIdentifier(identifier)

    def _insert(
        self,
        node: CheckNode,
        segments: Tuple[str, ...],
        procedure: Callable[[], Any],
        timeout: float,
    ) -> CheckNode:
        """Return a copy of node with the procedure bound below it."""
        segment, rest = segments[0], segments[1:]
        child = node.get_child(segment)

        if not rest:
            if child is None:
                child = CheckNode(segment, timeout, procedure)
            else:
                child = child.with_procedure(procedure, timeout)
        else:
            if child is None:
                child = CheckNode(segment, self.default_timeout)
            child = self._insert(child, rest, procedure, timeout)

        return node.with_child(child)

    def _remove(
        self, node: CheckNode, segments: Tuple[str, ...]
    ) -> Optional[CheckNode]:
        """Return a copy of node without the target subtree, None if absent."""
        segment, rest = segments[0], segments[1:]
        child = node.get_child(segment)

        if child is None:
            return None

        if not rest:
            return node.without_child(segment)

        updated = self._remove(child, rest)
        if updated is None:
            return None
        return node.with_child(updated)
