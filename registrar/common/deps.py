"""Shared FastAPI dependencies for authentication and authorization."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from registrar.core.config import get_settings


logger = logging.getLogger("auth.deps")
security = HTTPBearer(auto_error=True)


class CurrentUser(BaseModel):
    """Minimal caller identity shared across endpoints.

    ``id`` is the business identifier: the student number for students and
    the faculty number for teaching staff.
    """
    id: str
    role: str
    email: Optional[str] = None


@lru_cache()
def _admin_roles() -> set[str]:
    return {"admin", "super_admin"}


def decode_token(token: str) -> dict:
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """Verify the bearer token and return the typed identity it carries."""
    try:
        claims = decode_token(credentials.credentials)
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authentication credentials") from exc

    user_id = claims.get("sub")
    role = claims.get("role")
    if not user_id or not role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token missing subject or role")

    current = CurrentUser(id=str(user_id), role=str(role).lower(), email=claims.get("email"))
    logger.info(
        "auth_resolved user_id=%s role=%s request_id=%s path=%s",
        current.id,
        current.role,
        getattr(request.state, "request_id", None),
        request.url.path,
    )
    return current


def require_role(*roles: str) -> Callable:
    """Factory returning dependency enforcing that user has one of the roles.

    Admin roles always pass. Empty ``roles`` means any authenticated user.
    """
    normalized = {r.lower() for r in roles if r}

    async def _checker(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not normalized:
            return current
        if current.role in normalized or current.role in _admin_roles():
            return current
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")

    return _checker


def require_admin() -> Callable:
    return require_role("admin")


def require_faculty() -> Callable:
    return require_role("faculty")


def require_student() -> Callable:
    return require_role("student")
