"""Role-based access checks for scheduling actions."""
from typing import Iterable, Optional, Union

from domain.enums import Role
from domain.errors import ForbiddenError, UnauthorizedError


def parse_role(value: Optional[str]) -> Union[Role, str, None]:
    """
    Interpret a raw role tag.

    Returns the matching Role, the raw string for unknown tags,
    or None when no tag was supplied.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        return Role(value)
    except ValueError:
        return value


def guard_role(role: Union[Role, str, None], allowed: Iterable[Role]) -> None:
    """
    Ensure the caller's role is permitted.

    Raises:
        UnauthorizedError: If no role is supplied
        ForbiddenError: If the role is not in `allowed`
    """
    if not role:
        raise UnauthorizedError()
    if role not in list(allowed):
        raise ForbiddenError()
