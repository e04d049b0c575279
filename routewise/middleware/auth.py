"""
Authentication dependencies for FastAPI.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from routewise.middleware.request_id import set_user_id
from routewise.services.auth_service import AuthenticatedUser, AuthError, AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    # Same response for every failure so callers learn nothing about why
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts the JWT from the Authorization header and validates it.

    Raises:
        HTTPException: 401 if not authenticated or the token is invalid
    """
    if not credentials:
        raise _unauthorized()

    try:
        user = AuthService().verify_jwt(credentials.credentials)
    except AuthError as e:
        logger.info(f"Rejected bearer token: {e.message}")
        raise _unauthorized()

    set_user_id(user.user_id)
    return user
