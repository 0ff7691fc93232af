"""FastAPI auth dependencies.

Used as Depends() in routers to resolve the caller from the
Authorization: Bearer <jwt> header and enforce role requirements.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from tienda.auth import ROLE_ADMIN, ROLE_USER
from tienda.auth.jwt import TokenError, verify_token


class CurrentIdentity:
    """The authenticated caller, as read from the access token."""

    def __init__(
        self,
        user_id: Optional[int] = None,
        username: Optional[str] = None,
        roles: Optional[list[str]] = None,
    ):
        self.user_id = user_id
        self.username = username
        self.roles = roles if roles is not None else [ROLE_USER]

    def has_role(self, role: str) -> bool:
        return role in self.roles


async def get_current_user_optional(
    authorization: Optional[str] = Header(None),
) -> Optional[CurrentIdentity]:
    """Soft auth — returns None when no bearer token is sent."""
    if authorization and authorization.startswith("Bearer "):
        return _authenticate_jwt(authorization[7:])
    return None


async def get_current_user(
    identity: Optional[CurrentIdentity] = Depends(get_current_user_optional),
) -> CurrentIdentity:
    """Hard auth — 401 when no identity could be resolved."""
    if not identity:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


def require_role(role: str):
    """Build a dependency that 403s unless the caller holds `role`."""

    async def checker(
        identity: CurrentIdentity = Depends(get_current_user),
    ) -> CurrentIdentity:
        if not identity.has_role(role):
            raise HTTPException(status_code=403, detail="Forbidden")
        return identity

    return checker


require_user = require_role(ROLE_USER)
require_admin = require_role(ROLE_ADMIN)


def _authenticate_jwt(token: str) -> CurrentIdentity:
    try:
        payload = verify_token(token)
    except TokenError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentIdentity(
        user_id=int(payload["sub"]),
        username=payload.get("username"),
        roles=payload.get("roles", []),
    )
