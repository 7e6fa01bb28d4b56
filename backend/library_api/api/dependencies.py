"""Request Dependencies — store handles and resolved request fields for routes.

Invariants:
    - Repository and procedure gateway share the request's AsyncSession
    - An empty body reads as {}; a malformed or non-object body is a 400
    - Field resolution is delegated to core.resolve_params (body > query > default)

Design Decisions:
    - request_fields() is a dependency factory so each route states its rules
      in its signature: fields: dict = Depends(request_fields(RULES))
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.errors import InvalidArgumentError
from library_api.core.repository_protocols import (
    CirculationProcedures, LibraryStore,
)
from library_api.core.resolve_params import FieldRule, resolve_fields
from library_api.infrastructure.database import get_db
from library_api.infrastructure.library_repository import LibraryRepository
from library_api.infrastructure.procedures import SqlProcedureGateway

logger = logging.getLogger(__name__)


def get_repository(db: AsyncSession = Depends(get_db)) -> LibraryStore:
    return LibraryRepository(db)


def get_procedures(
    db: AsyncSession = Depends(get_db),
) -> CirculationProcedures:
    return SqlProcedureGateway(db)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object, treating no body as {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        raise InvalidArgumentError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise InvalidArgumentError("Request body must be a JSON object")
    return body


def request_fields(
    rules: tuple[FieldRule, ...],
) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Build a dependency that resolves `rules` against body and query string."""

    async def dependency(request: Request) -> dict[str, Any]:
        body = await read_json_body(request)
        fields = resolve_fields(rules, body, request.query_params)
        logger.info(
            f"{request.method} {request.url.path} final values: {fields}",
        )
        return fields

    return dependency
