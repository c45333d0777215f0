"""
Request identity for the API.

Authentication happens upstream: the gateway validates the session and
forwards the user id and role as ``X-User-Id`` / ``X-User-Role``
headers. This module only reads them and enforces roles.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from fastapi import Depends, Header

from app.shared.errors.exceptions import ForbiddenError, NotAuthenticatedError


class Role(Enum):
    CUSTOMER = "CUSTOMER"
    CREATOR = "CREATOR"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> CurrentUser:
    """Build the caller identity from the gateway headers.

    Raises:
        NotAuthenticatedError: If no user id is forwarded.
    """
    if not x_user_id or not x_user_id.strip():
        raise NotAuthenticatedError()
    try:
        role = Role((x_user_role or Role.CUSTOMER.value).upper())
    except ValueError:
        role = Role.CUSTOMER
    return CurrentUser(id=x_user_id.strip(), role=role)


def require_creator(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Creators act on their own catalog; admins may act as one."""
    if user.role not in (Role.CREATOR, Role.ADMIN):
        raise ForbiddenError(Role.CREATOR.value)
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role is not Role.ADMIN:
        raise ForbiddenError(Role.ADMIN.value)
    return user
