from typing import Optional, Callable
from datetime import datetime, timedelta
import logging
import jwt
from fastapi import Request, Response

from ...core.config import Settings, ConfigurationError, settings as default_settings

logger = logging.getLogger(__name__)


class SessionService:
    """Mints and verifies stateless session tokens carried in a cookie.

    The token is an HS256 JWT with the user id as ``sub``; nothing is stored
    server-side, so validity is decided by signature and expiry alone.
    """

    def __init__(self, settings: Settings = default_settings, secret: Optional[str] = None,
                 now: Callable[[], datetime] = datetime.utcnow):
        self.settings = settings
        self._secret = secret
        self._now = now

    @property
    def max_age(self) -> timedelta:
        return timedelta(days=self.settings.SESSION_MAX_AGE_DAYS)

    @property
    def cookie_name(self) -> str:
        return self.settings.SESSION_COOKIE_NAME

    def _get_secret(self) -> str:
        if self._secret is None:
            secret = self.settings.JWT_SECRET
            if not secret:
                raise ConfigurationError("JWT_SECRET is not configured")
            self._secret = secret
        return self._secret

    def create_session_token(self, user_id: str) -> str:
        issued_at = self._now()
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.max_age,
        }
        return jwt.encode(payload, self._get_secret(), algorithm=self.settings.JWT_ALGORITHM)

    def verify_token(self, token: str) -> Optional[str]:
        """Return the user id for a valid token, or None. Never raises."""
        if not isinstance(token, str) or not token:
            return None
        secret = self._get_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected session token: {e}")
            return None
        user_id = payload.get("sub")
        return user_id if isinstance(user_id, str) and user_id else None

    def set_session_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.max_age.total_seconds()),
            path="/",
            secure=self.settings.is_production,
            httponly=True,
            samesite="lax",
        )

    def create_session(self, response: Response, user_id: str) -> str:
        token = self.create_session_token(user_id)
        self.set_session_cookie(response, token)
        return token

    def get_session_user_id(self, request: Request) -> Optional[str]:
        token = request.cookies.get(self.cookie_name)
        if not token:
            return None
        return self.verify_token(token)

    def clear_session(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.settings.is_production,
            httponly=True,
            samesite="lax",
        )
