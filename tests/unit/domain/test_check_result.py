"""
Unit tests for CheckResult entity.

Tests derived queries (flatten, emptiness, failure detection) and
dictionary serialization.

Usage:
    pytest tests/unit/domain/test_check_result.py
"""

import pytest

from vigie.domain.entities import CheckResult, Outcome
from vigie.domain.value_objects import PROCEDURE_EXECUTION_FAILURE
from vigie.tests import LaborantTest


def _leaf(identifier, up=True, data=None):
    """Build an executed leaf result."""
    return CheckResult(
        identifier=identifier,
        outcome=Outcome.from_flag(up),
        data=data,
        executed=True,
    )


class TestCheckResult(LaborantTest):
    """Unit tests for CheckResult."""

    component_name = "vigie"
    test_category = "unit"

    def setup_test(self):
        """Build a small result tree."""
        self.failed = _leaf(
            "replica",
            up=False,
            data={PROCEDURE_EXECUTION_FAILURE: True, "cause": "Timeout"},
        )
        self.database = CheckResult(
            identifier="database",
            outcome=Outcome.DOWN,
            checks=(_leaf("primary"), self.failed),
        )
        self.root = CheckResult(
            identifier="",
            outcome=Outcome.DOWN,
            checks=(self.database, _leaf("cache")),
        )

    # ================================================================
    # Outcome tests
    # ================================================================

    def test_outcome_from_flag(self):
        """Test Outcome.from_flag mapping."""
        assert Outcome.from_flag(True) is Outcome.UP
        assert Outcome.from_flag(False) is Outcome.DOWN
        assert Outcome.UP.value == "UP"

    def test_is_up(self):
        """Test is_up reflects outcome."""
        assert _leaf("a").is_up is True
        assert self.root.is_up is False

    # ================================================================
    # Tree query tests
    # ================================================================

    def test_flatten_yields_executed_nodes_in_order(self):
        """Test flatten skips grouping nodes and keeps order."""
        names = [result.identifier for result in self.root.flatten()]

        assert names == ["primary", "replica", "cache"]

    def test_is_empty(self):
        """Test emptiness means no executed procedure anywhere."""
        empty = CheckResult(
            identifier="",
            outcome=Outcome.UP,
            checks=(CheckResult(identifier="group", outcome=Outcome.UP),),
        )

        assert empty.is_empty is True
        assert self.root.is_empty is False

    def test_has_procedure_failure_searches_subtree(self):
        """Test execution failure flag is found at any depth."""
        assert self.failed.is_execution_failure is True
        assert self.database.is_execution_failure is False
        assert self.database.has_procedure_failure() is True
        assert self.root.has_procedure_failure() is True
        assert _leaf("ok", up=False).has_procedure_failure() is False

    def test_find(self):
        """Test find navigates by relative segments."""
        assert self.root.find("database", "replica") is self.failed
        assert self.root.find() is self.root
        assert self.root.find("database", "missing") is None

    # ================================================================
    # Serialization tests
    # ================================================================

    def test_to_dict_shape(self):
        """Test serialization emits id, status, outcome, data, checks."""
        payload = self.root.to_dict()

        assert payload["id"] == ""
        assert payload["status"] == "DOWN"
        assert payload["outcome"] == "DOWN"
        assert "data" not in payload
        assert [check["id"] for check in payload["checks"]] == ["database", "cache"]

        replica = payload["checks"][0]["checks"][1]
        assert replica["data"][PROCEDURE_EXECUTION_FAILURE] is True
        assert replica["checks"] == []

    def test_to_dict_copies_data(self):
        """Test serialized data is detached from the result."""
        result = _leaf("a", data={"k": 1})

        payload = result.to_dict()
        payload["data"]["k"] = 2

        assert result.data == {"k": 1}

    def test_data_is_read_only(self):
        """Test data of a result cannot be mutated after creation."""
        source = {"k": 1}
        result = _leaf("a", data=source)
        source["k"] = 2

        with pytest.raises(TypeError):
            result.data["k"] = 3

        assert result.data == {"k": 1}
        assert result.to_dict()["data"] == {"k": 1}


if __name__ == "__main__":
    TestCheckResult.run_as_main()
