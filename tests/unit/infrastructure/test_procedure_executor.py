"""
Unit tests for ProcedureExecutor.

Tests status capture, fault isolation, timeouts and the first-completion
race.

Usage:
    pytest tests/unit/infrastructure/test_procedure_executor.py
"""

import asyncio
import threading
import time

import pytest
from prometheus_client import REGISTRY

from vigie.domain.value_objects import PROCEDURE_EXECUTION_FAILURE, Status
from vigie.infrastructure import ProcedureExecutor
from vigie.observability import CheckMetrics
from vigie.tests import LaborantTest


def _runs(result):
    """Current value of the procedure run counter for a result label."""
    value = REGISTRY.get_sample_value("vigie_procedure_runs_total", {"result": result})
    return value or 0.0


class TestProcedureExecutor(LaborantTest):
    """Unit tests for ProcedureExecutor."""

    component_name = "vigie"
    test_category = "unit"

    def setup_test(self):
        """Create executor."""
        self.executor = ProcedureExecutor(reporter=self.reporter)

    # ================================================================
    # Reported status tests
    # ================================================================

    async def test_async_procedure_status_returned_verbatim(self):
        """Test status of an async procedure is returned as is."""
        self.reporter.info("Testing async procedure", context="Test")

        async def procedure():
            await asyncio.sleep(0)
            return Status.ok({"latency_ms": 3})

        status = await self.executor.run(procedure, timeout=1.0, identifier="db")

        assert status == Status.ok({"latency_ms": 3})
        assert status.is_execution_failure is False

    async def test_sync_procedure_status_returned_verbatim(self):
        """Test status of a plain function is returned as is."""
        status = await self.executor.run(lambda: Status.ko({"disk": "full"}), 1.0)

        assert status.up is False
        assert status.data == {"disk": "full"}
        assert status.is_execution_failure is False

    async def test_sync_procedure_returning_awaitable(self):
        """Test an awaitable returned by a plain function is awaited."""

        async def probe():
            return Status.ok()

        status = await self.executor.run(lambda: probe(), timeout=1.0)

        assert status.up is True

    async def test_none_means_up(self):
        """Test returning None reports UP without data."""

        async def procedure():
            return None

        status = await self.executor.run(procedure, timeout=1.0)

        assert status == Status.ok()

    async def test_bool_results(self):
        """Test returning a bool reports UP/DOWN without data."""
        assert (await self.executor.run(lambda: True, 1.0)) == Status.ok()
        assert (await self.executor.run(lambda: False, 1.0)) == Status.ko()

    # ================================================================
    # Fault tests
    # ================================================================

    async def test_exception_becomes_flagged_down(self):
        """Test a raising procedure yields DOWN with the failure flag."""
        self.reporter.info("Testing fault capture", context="Test")

        async def procedure():
            raise ValueError("boom")

        status = await self.executor.run(procedure, timeout=1.0, identifier="db")

        assert status.up is False
        assert status.data[PROCEDURE_EXECUTION_FAILURE] is True
        assert status.data["cause"] == "ValueError: boom"

    async def test_sync_exception_becomes_flagged_down(self):
        """Test a raising plain function is captured too."""

        def procedure():
            raise RuntimeError()

        status = await self.executor.run(procedure, timeout=1.0)

        assert status.is_execution_failure is True
        assert status.data["cause"] == "RuntimeError"

    async def test_unsupported_result_is_fault(self):
        """Test an uninterpretable return value is a fault."""
        status = await self.executor.run(lambda: "yes", timeout=1.0, identifier="x")

        assert status.is_execution_failure is True
        assert "unsupported result of type str" in status.data["cause"]

    # ================================================================
    # Timeout tests
    # ================================================================

    async def test_never_completing_procedure_times_out(self):
        """Test a procedure that never completes is DOWN after timeout."""
        self.reporter.info("Testing timeout", context="Test")

        async def procedure():
            await asyncio.Event().wait()

        start = time.monotonic()
        status = await self.executor.run(procedure, timeout=0.05, identifier="slow")
        elapsed = time.monotonic() - start

        assert status.up is False
        assert status.data[PROCEDURE_EXECUTION_FAILURE] is True
        assert status.data["cause"].startswith("Timeout")
        assert 0.03 <= elapsed < 0.5

        self.reporter.info(f"Timed out after {elapsed:.3f}s", context="Test")

    async def test_timed_out_coroutine_is_cancelled(self):
        """Test the procedure task is cancelled once the timer wins."""
        cancelled = asyncio.Event()

        async def procedure():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        await self.executor.run(procedure, timeout=0.02)
        await asyncio.wait_for(cancelled.wait(), timeout=1.0)

        assert cancelled.is_set()

    async def test_late_completion_is_discarded(self):
        """Test a thread procedure finishing after the timeout changes nothing."""
        finished = []

        def procedure():
            time.sleep(0.15)
            finished.append(True)
            return Status.ok()

        status = await self.executor.run(procedure, timeout=0.03)
        assert status.is_execution_failure is True

        await asyncio.sleep(0.3)

        assert finished == [True]
        assert status.is_execution_failure is True

    async def test_caller_cancellation_cancels_procedure(self):
        """Test cancelling the caller does not leave the procedure running."""
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def procedure():
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        task = asyncio.create_task(self.executor.run(procedure, timeout=5.0))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        await asyncio.wait_for(cancelled.wait(), timeout=1.0)

    async def test_hung_sync_procedures_do_not_starve_later_checks(self):
        """Test blocked plain functions leave later runs unaffected."""
        self.reporter.info("Testing hung thread procedures", context="Test")
        release = threading.Event()

        def hung():
            release.wait(5.0)
            return Status.ok()

        try:
            statuses = await asyncio.gather(
                *(
                    self.executor.run(hung, timeout=0.05, identifier=f"hung.h{i}")
                    for i in range(16)
                )
            )
            assert all(status.is_execution_failure for status in statuses)

            status = await self.executor.run(
                lambda: Status.ok(), timeout=0.5, identifier="fast"
            )
        finally:
            release.set()

        assert status == Status.ok()

    def test_event_loop_exit_not_blocked_by_hung_procedure(self):
        """Test asyncio.run returns after the timeout, not after the procedure."""
        release = threading.Event()

        def hung():
            release.wait(5.0)

        start = time.monotonic()
        try:
            status = asyncio.run(
                self.executor.run(hung, timeout=0.05, identifier="slow")
            )
            elapsed = time.monotonic() - start
        finally:
            release.set()

        assert status.is_execution_failure is True
        assert elapsed < 1.0

        self.reporter.info(f"Loop exited after {elapsed:.3f}s", context="Test")

    # ================================================================
    # Metrics tests
    # ================================================================

    async def test_metrics_recorded_when_enabled(self):
        """Test executions are counted by result when metrics are enabled."""
        executor = ProcedureExecutor(
            reporter=self.reporter, metrics=CheckMetrics(enabled=True)
        )
        before_up = _runs("up")
        before_timeout = _runs("timeout")

        async def never():
            await asyncio.Event().wait()

        await executor.run(lambda: True, timeout=1.0)
        await executor.run(never, timeout=0.01)

        assert _runs("up") == before_up + 1
        assert _runs("timeout") == before_timeout + 1

    async def test_metrics_not_recorded_when_disabled(self):
        """Test default executor records nothing."""
        before = _runs("down")

        await self.executor.run(lambda: False, timeout=1.0)

        assert _runs("down") == before


if __name__ == "__main__":
    TestProcedureExecutor.run_as_main()
