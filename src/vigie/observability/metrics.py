"""
Prometheus metrics for check execution.

Collectors are registered once on the default prometheus_client
registry; expose them with prometheus_client.make_wsgi_app or
start_http_server.
"""

from prometheus_client import Counter, Histogram

PROCEDURE_RUNS = Counter(
    "vigie_procedure_runs_total",
    "Procedure executions by result",
    ["result"],
)

PROCEDURE_DURATION = Histogram(
    "vigie_procedure_duration_seconds",
    "Wall-clock duration of procedure executions",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

INVOCATIONS = Counter(
    "vigie_invocations_total",
    "Subtree invocations by aggregated result",
    ["result"],
)


class CheckMetrics:
    """
    Recorder for check metrics.

    Disabled recorders are no-ops so callers never branch on settings.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize recorder.

        Args:
            enabled: Whether observations are recorded
        """
        self.enabled = enabled

    def record_procedure(self, result: str, duration: float) -> None:
        """
        Record one procedure execution.

        Args:
            result: One of "up", "down", "fault", "timeout"
            duration: Execution time in seconds
        """
        if not self.enabled:
            return
        PROCEDURE_RUNS.labels(result=result).inc()
        PROCEDURE_DURATION.observe(duration)

    def record_invocation(self, result: str) -> None:
        """
        Record one subtree invocation.

        Args:
            result: One of "up", "down", "not_found"
        """
        if not self.enabled:
            return
        INVOCATIONS.labels(result=result).inc()
