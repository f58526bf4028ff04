"""
Check registry infrastructure.
"""

from vigie.infrastructure.registry.check_registry import (
    DEFAULT_TIMEOUT,
    CheckRegistry,
)

__all__ = [
    "CheckRegistry",
    "DEFAULT_TIMEOUT",
]
