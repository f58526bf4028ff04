"""
HTTP API for Vigie.
"""

from vigie.presentation.api.app import create_app

__all__ = [
    "create_app",
]
