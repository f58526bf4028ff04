"""
Unit tests for CheckNode entity.

Tests copy-on-write operations keep originals intact.

Usage:
    pytest tests/unit/domain/test_check_node.py
"""

import pytest

from vigie.domain.entities import CheckNode
from vigie.tests import LaborantTest


def _procedure():
    return True


class TestCheckNode(LaborantTest):
    """Unit tests for CheckNode."""

    component_name = "vigie"
    test_category = "unit"

    def test_with_child_does_not_mutate_original(self):
        """Test adding a child returns a new node."""
        root = CheckNode("", 1.0)
        updated = root.with_child(CheckNode("db", 1.0, _procedure))

        assert list(root.children) == []
        assert list(updated.children) == ["db"]

    def test_replaced_child_keeps_position(self):
        """Test replacing a child preserves insertion order."""
        root = (
            CheckNode("", 1.0)
            .with_child(CheckNode("a", 1.0))
            .with_child(CheckNode("b", 1.0))
        )

        updated = root.with_child(CheckNode("a", 2.0, _procedure))

        assert list(updated.children) == ["a", "b"]
        assert updated.get_child("a").timeout == 2.0

    def test_without_child(self):
        """Test removing a child returns a new node."""
        root = CheckNode("", 1.0).with_child(CheckNode("a", 1.0))

        updated = root.without_child("a")

        assert list(updated.children) == []
        assert list(root.children) == ["a"]

    def test_with_procedure_keeps_children(self):
        """Test rebinding a procedure keeps children."""
        node = CheckNode("db", 1.0).with_child(CheckNode("primary", 1.0))

        rebound = node.with_procedure(_procedure, 0.5)

        assert rebound.has_procedure is True
        assert rebound.timeout == 0.5
        assert list(rebound.children) == ["primary"]
        assert node.has_procedure is False

    def test_children_view_is_read_only(self):
        """Test children mapping cannot be mutated."""
        node = CheckNode("", 1.0)

        with pytest.raises(TypeError):
            node.children["x"] = CheckNode("x", 1.0)

    def test_walk_and_count(self):
        """Test depth-first walk order and procedure count."""
        db = (
            CheckNode("db", 1.0)
            .with_child(CheckNode("primary", 1.0, _procedure))
            .with_child(CheckNode("replica", 1.0, _procedure))
        )
        root = CheckNode("", 1.0).with_child(db).with_child(
            CheckNode("cache", 1.0, _procedure)
        )

        paths = [path for path, _ in root.walk()]

        assert paths == [
            (),
            ("db",),
            ("db", "primary"),
            ("db", "replica"),
            ("cache",),
        ]
        assert root.count_procedures() == 3


if __name__ == "__main__":
    TestCheckNode.run_as_main()
