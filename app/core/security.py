"""Bearer token authentication.

Tokens are issued by the identity service; this module only verifies the
signature and expiry with PyJWT and turns the claims into a ``UserContext``.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from app.core.config import settings
from app.models.user import UserContext

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer()


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT, raising 401 on any verification failure."""
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification is not configured",
        )
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> UserContext:
    """Dependency returning the caller described by the bearer token."""
    payload = decode_token(credentials.credentials)
    try:
        return UserContext.model_validate(payload)
    except ValidationError:
        logger.warning("token_claims_invalid")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        )
