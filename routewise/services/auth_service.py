"""
Authentication service for bearer JWT handling.

Sessions are issued elsewhere (the frontend's identity provider); this
service only answers whether a token identifies an authenticated caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from routewise.config.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Authentication error."""

    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class AuthenticatedUser:
    """Identity extracted from a verified token."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


class AuthService:
    """Service for authentication operations."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or get_app_settings()

    def create_jwt(
        self,
        user_id: str,
        email: Optional[str] = None,
        name: Optional[str] = None,
        expires_in: timedelta = timedelta(hours=24),
    ) -> str:
        """
        Create a JWT token for a user.

        Args:
            user_id: Subject identifier
            email: Optional email claim
            name: Optional display name claim
            expires_in: Token lifetime

        Returns:
            JWT token string
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "exp": now + expires_in,
            "iat": now,
        }
        if email:
            payload["email"] = email
        if name:
            payload["name"] = name

        return jwt.encode(
            payload,
            self.settings.jwt_secret_key.get_secret_value(),
            algorithm=self.settings.jwt_algorithm,
        )

    def verify_jwt(self, token: str) -> AuthenticatedUser:
        """
        Verify a JWT token and return the caller's identity.

        Raises:
            AuthError: If the token is invalid, expired or has no subject
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret_key.get_secret_value(),
                algorithms=[self.settings.jwt_algorithm],
            )
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise AuthError("Invalid or expired token")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthError("Invalid token: missing user ID")

        return AuthenticatedUser(
            user_id=str(user_id),
            email=payload.get("email"),
            name=payload.get("name"),
        )
