"""
HealthChecks facade - the object boundary layers talk to.

Wires one registry, one executor and one aggregator together. There is
no process-wide instance: create one where the application is
assembled and hand it to the adapters that need it.
"""

from typing import Any, Callable, List, Optional, Tuple

from vigie.application.classification import HealthClassification, classify
from vigie.config import Settings, get_settings
from vigie.domain.entities import CheckResult
from vigie.domain.exceptions import CheckNotFoundError
from vigie.infrastructure import CheckAggregator, CheckRegistry, ProcedureExecutor
from vigie.observability import CheckMetrics
from vigie.reporter import SystemReporter


class HealthChecks:
    """
    Hierarchical health check registry and execution engine.

    Example:
        checks = HealthChecks()
        checks.register("database.primary", ping_primary, timeout=0.5)
        checks.register("cache", lambda: Status.ok({"hits": 42}))

        result = await checks.invoke("database")
        print(result.to_dict())
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize engine.

        Args:
            settings: Settings (loaded from config when None)
            reporter: Optional SystemReporter (built from settings when None)
        """
        self.settings = settings or get_settings()
        self.reporter = reporter or SystemReporter.from_settings(self.settings)
        self.metrics = CheckMetrics(enabled=self.settings.metrics_enabled)

        self.registry = CheckRegistry(
            default_timeout=self.settings.default_timeout,
            reporter=self.reporter,
        )
        self.executor = ProcedureExecutor(reporter=self.reporter, metrics=self.metrics)
        self.aggregator = CheckAggregator(
            registry=self.registry,
            executor=self.executor,
            reporter=self.reporter,
            metrics=self.metrics,
        )

    def register(
        self,
        identifier: str,
        procedure: Callable[[], Any],
        timeout: Optional[float] = None,
    ) -> "HealthChecks":
        """
        Register a procedure.

        Args:
            identifier: Dot-separated, non-empty identifier
            procedure: Zero-argument callable (sync or async)
            timeout: Timeout in seconds (settings default when None)

        Returns:
            Self, for chaining

        Raises:
            InvalidIdentifierError: If identifier is empty or malformed
        """
        self.registry.register(identifier, procedure, timeout=timeout)
        return self

    def unregister(self, identifier: str) -> bool:
        """
        Remove a procedure and everything registered below it.

        Returns:
            True if something was removed, False if nothing was registered
        """
        return self.registry.unregister(identifier)

    async def invoke(self, identifier: str = "") -> CheckResult:
        """
        Invoke the subtree at an identifier.

        Raises:
            CheckNotFoundError: If identifier addresses nothing
        """
        return await self.aggregator.invoke(identifier)

    async def check_status(
        self, identifier: str = ""
    ) -> Tuple[Optional[CheckResult], HealthClassification]:
        """
        Invoke and classify in one step.

        Returns:
            (result, classification); result is None when not found
        """
        try:
            result = await self.invoke(identifier)
        except CheckNotFoundError:
            return None, HealthClassification.NOT_FOUND
        return result, classify(result)

    def identifiers(self) -> List[str]:
        """Get identifiers of all registered procedures."""
        return self.registry.identifiers()

    def __len__(self) -> int:
        """Number of registered procedures."""
        return len(self.registry)
