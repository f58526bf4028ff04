"""
API routes for Vigie.
"""

from vigie.presentation.api.routes.health import (
    create_health_router,
    path_to_identifier,
)

__all__ = [
    "create_health_router",
    "path_to_identifier",
]
