"""
FastAPI dependencies for authentication and authorization.

Tokens are validated statelessly: the principal is built from the signed
claims only, no database lookup.
"""

from typing import Iterable, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .exceptions import AuthError, ForbiddenError
from .security import decode_token, TokenData


# HTTP Bearer token scheme. auto_error is off so a missing header maps to
# our own "No token" error instead of FastAPI's default 403.
security = HTTPBearer(auto_error=False)


ADMIN = "admin"
MANAGER = "manager"
STAFF = "staff"

PRIVILEGED_ROLES = (ADMIN, MANAGER)


def authorize(payload: Optional[dict], roles: Iterable[str] = ()) -> TokenData:
    """
    Authorization predicate.

    Takes decoded token claims and the allowed roles (empty = any
    authenticated user). Returns the principal or raises.
    """
    if payload is None:
        raise AuthError("Invalid token")

    principal = TokenData.from_dict(payload)
    if not principal.id:
        raise AuthError("Invalid token")

    allowed = tuple(roles)
    if allowed and principal.role not in allowed:
        raise ForbiddenError("Forbidden")

    return principal


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Extract and decode the bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthError("No token")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthError("Invalid token")
    return payload


class RoleChecker:
    """
    Role checker dependency.

    Usage:
        @router.delete("/{id}")
        def delete(user: TokenData = Depends(RoleChecker([ADMIN, MANAGER]))): ...
    """

    def __init__(self, allowed_roles: Iterable[str] = ()):
        self.allowed_roles = tuple(allowed_roles)

    def __call__(self, payload: dict = Depends(get_token_payload)) -> TokenData:
        return authorize(payload, self.allowed_roles)


# Convenience dependencies
get_current_user = RoleChecker()
require_admin = RoleChecker([ADMIN])
require_manager_or_admin = RoleChecker(PRIVILEGED_ROLES)
