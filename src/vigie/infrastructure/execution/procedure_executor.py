"""
Procedure executor - fault-isolated, time-bounded procedure runs.

Each run races the procedure against a timer. Whichever finishes first
resolves a single future; the loser's completion is a no-op. Faults and
timeouts are converted into DOWN statuses flagged as execution
failures and never propagate to the caller.
"""

import asyncio
import inspect
import threading
import time
from typing import Any, Callable, Optional

from vigie.domain.exceptions import ProcedureFault
from vigie.domain.value_objects import Status
from vigie.observability import CheckMetrics
from vigie.reporter import SystemReporter


class ProcedureExecutor:
    """
    Runs one procedure with a bounded timeout.

    Procedures are zero-argument callables:
    - Coroutine functions are awaited on the running loop
    - Plain functions run on a dedicated daemon thread; an awaitable
      they return is awaited as well. A hung function keeps only its
      own thread and never blocks other checks or loop shutdown

    A procedure reports by returning a Status, None (UP, no data) or a
    bool (UP/DOWN, no data). Anything else is treated as a fault.

    Example:
        executor = ProcedureExecutor()
        status = await executor.run(ping_database, timeout=0.5)
        if status.is_execution_failure:
            ...
    """

    def __init__(
        self,
        reporter: Optional[SystemReporter] = None,
        metrics: Optional[CheckMetrics] = None,
    ):
        """
        Initialize executor.

        Args:
            reporter: Optional SystemReporter for logging
            metrics: Optional metrics recorder (disabled when None)
        """
        self.reporter = reporter or SystemReporter(name="vigie")
        self.metrics = metrics or CheckMetrics(enabled=False)

    async def run(
        self,
        procedure: Callable[[], Any],
        timeout: float,
        identifier: str = "",
    ) -> Status:
        """
        Run a procedure and capture its outcome.

        Args:
            procedure: Procedure to run
            timeout: Timeout in seconds
            identifier: Check identifier, for logging and fault messages

        Returns:
            Reported status, or a DOWN execution-failure status if the
            procedure raised, returned garbage or timed out
        """
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future = loop.create_future()
        started = time.monotonic()

        def settle(status: Status, result: str) -> None:
            # First completion wins
            if outcome.done():
                return
            outcome.set_result(status)
            self.metrics.record_procedure(result, time.monotonic() - started)

        def on_timeout() -> None:
            if outcome.done():
                return
            self.reporter.warning(
                f"Check '{identifier}' timed out after {timeout}s",
                context="Executor",
            )
            settle(
                Status.failure(
                    f"Timeout: procedure did not complete within {timeout}s"
                ),
                "timeout",
            )

        def on_done(finished: asyncio.Future) -> None:
            if finished.cancelled():
                settle(Status.failure("Procedure was cancelled"), "fault")
                return

            error = finished.exception()
            if error is None:
                try:
                    status = self._to_status(finished.result(), identifier)
                except ProcedureFault as fault:
                    error = fault
                else:
                    settle(status, "up" if status.up else "down")
                    return

            if outcome.done():
                return
            cause = self._describe(error)
            self.reporter.warning(
                f"Check '{identifier}' failed: {cause}", context="Executor"
            )
            settle(Status.failure(cause), "fault")

        task = loop.create_task(self._call(procedure, identifier))
        task.add_done_callback(on_done)
        timer = loop.call_later(timeout, on_timeout)

        try:
            return await outcome
        finally:
            timer.cancel()
            if not task.done():
                task.cancel()

    @staticmethod
    async def _call(procedure: Callable[[], Any], identifier: str = "") -> Any:
        """Invoke procedure on the loop or on its own thread."""
        if inspect.iscoroutinefunction(procedure):
            result = await procedure()
        else:
            result = await ProcedureExecutor._in_thread(procedure, identifier)

        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _in_thread(procedure: Callable[[], Any], identifier: str) -> asyncio.Future:
        """
        Run a blocking procedure on a dedicated daemon thread.

        The thread hands its result or exception back to the loop. A
        thread outliving its run is abandoned: the loop is not waited
        on it, and its late result is dropped.

        Args:
            procedure: Plain callable to run
            identifier: Check identifier, used for the thread name

        Returns:
            Future resolved on the loop with the procedure's result
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def deliver(result: Any, error: Optional[BaseException]) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def target() -> None:
            result, error = None, None
            try:
                result = procedure()
            except Exception as exc:
                error = exc
            try:
                loop.call_soon_threadsafe(deliver, result, error)
            except RuntimeError:
                # Loop closed while the procedure was still running
                return

        thread = threading.Thread(
            target=target,
            name=f"vigie-check-{identifier or 'root'}",
            daemon=True,
        )
        thread.start()
        return future

    @staticmethod
    def _to_status(result: Any, identifier: str) -> Status:
        """
        Convert a procedure's return value into a Status.

        Raises:
            ProcedureFault: If the value cannot be interpreted
        """
        if isinstance(result, Status):
            return result
        if result is None:
            return Status.ok()
        if isinstance(result, bool):
            return Status(up=result)
        raise ProcedureFault(
            identifier,
            f"unsupported result of type {type(result).__name__}",
        )

    @staticmethod
    def _describe(error: BaseException) -> str:
        """Describe a fault as '<Type>: <message>'."""
        if isinstance(error, ProcedureFault):
            return f"ProcedureFault: {error.cause}"
        message = str(error)
        if message:
            return f"{type(error).__name__}: {message}"
        return type(error).__name__
