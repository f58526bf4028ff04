"""
FastAPI application factory.
"""

from typing import Optional

from fastapi import FastAPI

from vigie.application import HealthChecks
from vigie.presentation.api.routes import create_health_router
from vigie.presentation.api.routes.health import Authenticator


def create_app(
    health_checks: HealthChecks,
    authenticator: Optional[Authenticator] = None,
    prefix: Optional[str] = None,
) -> FastAPI:
    """
    Create FastAPI application serving a HealthChecks engine.

    Args:
        health_checks: Engine to expose
        authenticator: Optional request authenticator
        prefix: Route prefix (settings api_prefix when None)

    Returns:
        FastAPI application
    """
    app = FastAPI(title="Vigie", version="0.1.0")
    app.include_router(
        create_health_router(
            health_checks,
            authenticator=authenticator,
            prefix=prefix or health_checks.settings.api_prefix,
        )
    )
    return app
