# /reporting-backend/app/core/deps.py

"""
FastAPI dependencies that attach the authenticated principal to a request.

Tokens are issued elsewhere; this module only verifies the bearer JWT and
reads the `id` and `role` claims from it. `require_role` builds a dependency
that additionally gates an endpoint to specific roles.
"""

import logging
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from app.core.config import settings
from app.models.principal_model import Principal

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_principal(token: str) -> Principal:
    """Verifies the token signature and turns its claims into a Principal."""
    claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    return Principal(id=claims.get("id"), role=claims.get("role"))


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No token provided")
    try:
        return decode_principal(credentials.credentials)
    except (JWTError, ValidationError) as e:
        logger.warning("Token verification failed", extra={"reason": str(e)})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def require_role(*roles: str) -> Callable[..., Principal]:
    """Dependency factory: the caller must hold one of `roles`."""

    def _checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: insufficient role")
        return principal

    return _checker
