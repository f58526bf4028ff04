"""
Check aggregator - concurrent invocation and bottom-up aggregation.

Resolves a subtree snapshot, runs every procedure in it concurrently,
then folds statuses into a CheckResult tree mirroring the snapshot.
"""

import asyncio
from typing import Dict, Optional, Tuple

from vigie.domain.entities import CheckNode, CheckResult, Outcome
from vigie.domain.exceptions import CheckNotFoundError
from vigie.domain.value_objects import CheckIdentifier, Status
from vigie.infrastructure.execution import ProcedureExecutor
from vigie.infrastructure.registry import CheckRegistry
from vigie.observability import CheckMetrics
from vigie.reporter import SystemReporter

Path = Tuple[str, ...]


class CheckAggregator:
    """
    Invokes subtrees of a CheckRegistry.

    Aggregation rule: a node is UP iff its own procedure (if any)
    reported up and every child aggregated UP. A node without procedure
    and without children is UP. The execution failure flag stays on the
    node whose procedure faulted; ancestors only become DOWN.
    """

    def __init__(
        self,
        registry: CheckRegistry,
        executor: ProcedureExecutor,
        reporter: Optional[SystemReporter] = None,
        metrics: Optional[CheckMetrics] = None,
    ):
        """
        Initialize aggregator.

        Args:
            registry: Registry to resolve identifiers against
            executor: Executor running individual procedures
            reporter: Optional SystemReporter for logging
            metrics: Optional metrics recorder (disabled when None)
        """
        self.registry = registry
        self.executor = executor
        self.reporter = reporter or SystemReporter(name="vigie")
        self.metrics = metrics or CheckMetrics(enabled=False)

    async def invoke(self, identifier: str = "") -> CheckResult:
        """
        Invoke every procedure below an identifier and aggregate.

        Args:
            identifier: Identifier of the subtree root ("" for the root)

        Returns:
            Fresh CheckResult tree

        Raises:
            CheckNotFoundError: If identifier addresses nothing
        """
        try:
            node = self.registry.resolve_subtree(identifier)
        except CheckNotFoundError:
            self.metrics.record_invocation("not_found")
            self.reporter.info(
                f"No check registered at '{identifier}'",
                context="Aggregator",
                verbose_level=2,
            )
            raise

        base = CheckIdentifier(str(identifier))
        statuses = await self._run_all(node, base)
        result = self._fold(node, (), statuses)

        self.metrics.record_invocation("up" if result.is_up else "down")
        self.reporter.info(
            f"Invoked '{base}': {result.outcome.value} "
            f"({len(statuses)} procedures)",
            context="Aggregator",
            verbose_level=2,
        )
        return result

    async def _run_all(
        self, node: CheckNode, base: CheckIdentifier
    ) -> Dict[Path, Status]:
        """Run all procedures of the subtree concurrently, keyed by path."""
        runnable = [(path, child) for path, child in node.walk() if child.has_procedure]
        if not runnable:
            return {}

        statuses = await asyncio.gather(
            *(
                self.executor.run(
                    child.procedure,
                    child.timeout,
                    identifier=self._full_identifier(base, path),
                )
                for path, child in runnable
            )
        )
        return {path: status for (path, _), status in zip(runnable, statuses)}

    def _fold(
        self, node: CheckNode, path: Path, statuses: Dict[Path, Status]
    ) -> CheckResult:
        """Build the result of node from its own status and its children."""
        checks = tuple(
            self._fold(child, path + (segment,), statuses)
            for segment, child in node.children.items()
        )
        up = all(check.is_up for check in checks)

        status = statuses.get(path)
        data = None
        if status is not None:
            up = up and status.up
            data = status.data

        return CheckResult(
            identifier=node.segment,
            outcome=Outcome.from_flag(up),
            data=data,
            checks=checks,
            executed=status is not None,
        )

    @staticmethod
    def _full_identifier(base: CheckIdentifier, path: Path) -> str:
        """Absolute identifier of a node below base."""
        return CheckIdentifier.from_segments(base.segments + path).value
