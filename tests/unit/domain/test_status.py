"""
Unit tests for Status value object.

Usage:
    pytest tests/unit/domain/test_status.py
"""

import dataclasses

import pytest

from vigie.domain.value_objects import PROCEDURE_EXECUTION_FAILURE, Status
from vigie.tests import LaborantTest


class TestStatus(LaborantTest):
    """Unit tests for Status."""

    component_name = "vigie"
    test_category = "unit"

    def test_ok_and_ko(self):
        """Test factory methods set the flag."""
        assert Status.ok().up is True
        assert Status.ko().up is False
        assert Status.ok().data is None

    def test_data_is_copied(self):
        """Test caller mutations do not leak into the status."""
        data = {"connections": 3}
        status = Status.ok(data)

        data["connections"] = 99

        assert status.data == {"connections": 3}

    def test_data_is_read_only(self):
        """Test data of a produced status cannot be mutated."""
        status = Status.ok({"connections": 3})

        with pytest.raises(TypeError):
            status.data["connections"] = 99

        assert status.data == {"connections": 3}

    def test_status_is_frozen(self):
        """Test status cannot be reassigned."""
        status = Status.ok()

        with pytest.raises(dataclasses.FrozenInstanceError):
            status.up = False

    def test_non_mapping_data_rejected(self):
        """Test data must be a mapping."""
        with pytest.raises(TypeError):
            Status(up=True, data=["not", "a", "mapping"])

    def test_failure_sets_flag_and_cause(self):
        """Test failure status carries the execution failure flag."""
        status = Status.failure("Timeout")

        assert status.up is False
        assert status.data[PROCEDURE_EXECUTION_FAILURE] is True
        assert status.data["cause"] == "Timeout"
        assert status.is_execution_failure is True

    def test_plain_down_is_not_execution_failure(self):
        """Test a reported DOWN is not flagged."""
        assert Status.ko({"reason": "disk full"}).is_execution_failure is False
        assert Status.ko().is_execution_failure is False

    def test_equality(self):
        """Test value equality."""
        assert Status.ok({"a": 1}) == Status.ok({"a": 1})
        assert Status.ok() != Status.ko()


if __name__ == "__main__":
    TestStatus.run_as_main()
