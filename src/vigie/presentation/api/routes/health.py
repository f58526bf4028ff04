"""
Health check API routes.

Serves any node of the check tree under a prefix:
- GET/POST {prefix}            - invoke the root
- GET/POST {prefix}/{path}     - invoke the node at path

Path segments map to identifier segments: /health/database/primary
and /health/database.primary both address "database.primary".
"""

import inspect
import json
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from fastapi import APIRouter, Request, Response

from vigie.application import (
    HealthChecks,
    HealthClassification,
    classify,
    normalize_outcome_fields,
)
from vigie.domain.exceptions import CheckNotFoundError, HealthCheckError

JSON_MEDIA_TYPE = "application/json;charset=UTF-8"

Authenticator = Callable[[Dict[str, Any]], Union[bool, Awaitable[bool]]]


def path_to_identifier(path: str) -> str:
    """
    Convert a URL path suffix into a check identifier.

    Args:
        path: Path after the router prefix, e.g. "/database/primary"

    Returns:
        Identifier, "" for the root
    """
    return path.strip("/").replace("/", ".")


def _json_response(status_code: int, body: Dict[str, Any]) -> Response:
    """Build a JSON response with explicit charset."""
    return Response(
        content=json.dumps(body),
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
    )


def create_health_router(
    health_checks: HealthChecks,
    authenticator: Optional[Authenticator] = None,
    prefix: str = "/health",
) -> APIRouter:
    """
    Create router exposing a HealthChecks engine.

    Args:
        health_checks: Engine to invoke
        authenticator: Optional callable receiving request headers, query
            parameters and JSON body merged in one dict; a falsy result
            or an exception rejects the request with 403
        prefix: Route prefix

    Returns:
        APIRouter to include in an application
    """
    router = APIRouter(prefix=prefix, tags=["health"])
    reporter = health_checks.reporter

    async def collect_auth_data(request: Request) -> Dict[str, Any]:
        """Merge headers, query parameters and JSON body."""
        auth_data: Dict[str, Any] = dict(request.headers.items())
        auth_data.update(request.query_params.items())

        content_type = request.headers.get("content-type", "")
        if request.method == "POST" and "application/json" in content_type:
            try:
                body = await request.json()
            except ValueError as e:
                reporter.error(
                    f"Invalid authentication json body: {e}", context="HealthAPI"
                )
            else:
                if isinstance(body, dict):
                    auth_data.update(body)

        return auth_data

    async def authenticate(request: Request) -> bool:
        """Delegate authentication to the configured authenticator."""
        auth_data = await collect_auth_data(request)
        try:
            verdict = authenticator(auth_data)
            if inspect.isawaitable(verdict):
                verdict = await verdict
        except Exception as e:
            reporter.warning(f"Authentication failed: {e}", context="HealthAPI")
            return False
        return bool(verdict)

    async def respond(request: Request, path: str) -> Response:
        """Invoke the addressed node and map the result to a response."""
        if authenticator is not None and not await authenticate(request):
            return Response(status_code=403)

        identifier = path_to_identifier(path)
        try:
            result = await health_checks.invoke(identifier)
        except CheckNotFoundError as e:
            return _json_response(404, {"message": str(e)})
        except HealthCheckError as e:
            return _json_response(400, {"message": str(e)})

        classification = classify(result)
        if classification is HealthClassification.NO_CHECKS:
            return Response(status_code=classification.http_status)

        return _json_response(
            classification.http_status,
            normalize_outcome_fields(result.to_dict()),
        )

    async def invoke_root(request: Request) -> Response:
        """Invoke the whole check tree."""
        return await respond(request, "")

    async def invoke_node(path: str, request: Request) -> Response:
        """Invoke the check subtree addressed by path."""
        return await respond(request, path)

    router.add_api_route("", invoke_root, methods=["GET", "POST"])
    router.add_api_route("/{path:path}", invoke_node, methods=["GET", "POST"])

    return router
