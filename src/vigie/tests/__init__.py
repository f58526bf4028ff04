"""
Shared testing utilities for Vigie.

All test classes inherit from LaborantTest.
"""

from vigie.tests.test_base import LaborantTest, ResultStatus

__all__ = [
    "LaborantTest",
    "ResultStatus",
]
