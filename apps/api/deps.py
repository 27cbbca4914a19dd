"""FastAPI dependencies shared by the routers."""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

from fastapi import Header, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from domain.enums import Role
from domain.errors import InvalidInputError
from services.access_guard import guard_role, parse_role
from services.rate_limiter import RateLimiter
from services.scheduling_store import SchedulingStore


ROLE_HEADER = "X-User-Role"


PayloadT = TypeVar("PayloadT", bound=BaseModel)


def get_store(request: Request) -> SchedulingStore:
    """Get the scheduling store owned by the application."""
    return request.app.state.store


def get_rate_limiter(request: Request) -> RateLimiter:
    """Get the rate limiter owned by the application."""
    return request.app.state.rate_limiter


def require_roles(*allowed: Role) -> Callable[..., Role]:
    """
    Build a dependency that admits only the given roles.

    Handlers that take a body read it with read_payload, so the role
    check runs before the body is decoded.
    """

    async def _dependency(x_user_role: Optional[str] = Header(None, alias=ROLE_HEADER)) -> Role:
        role = parse_role(x_user_role)
        guard_role(role, allowed)
        return Role(role)

    return _dependency


async def read_payload(request: Request, model: Type[PayloadT]) -> PayloadT:
    """
    Decode and validate a JSON request body.

    Handlers call this after their role dependency has run, so a caller
    without a valid role is rejected before the body is looked at.

    Raises:
        InvalidInputError: If the body is not JSON or does not match the model
    """
    try:
        data = await request.json()
    except ValueError:
        raise InvalidInputError("Request body must be valid JSON")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(
            "Invalid request payload",
            details=jsonable_encoder(e.errors(include_url=False)),
        )


def request_body_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    """OpenAPI request body for handlers that read their payload with read_payload."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }
