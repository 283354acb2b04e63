# api/auth.py
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from core.config import Settings, get_settings
from core.errors import UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity taken from a token the auth service already issued."""
    id: str
    email: Optional[str] = None


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    settings: Optional[Settings] = None,
    expires_delta: timedelta = timedelta(days=365),
) -> str:
    """Sign a token the way the auth service does. Used by the CLI and tests."""
    settings = settings or get_settings()
    claims = {"sub": str(user_id), "exp": datetime.now(UTC) + expires_delta}
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """FastAPI dependency resolving the bearer token to a CurrentUser.

    Accepts the user id in either the ``sub`` or the older ``id`` claim.
    """
    if credentials is None:
        raise UnauthorizedError("Not authorized, no token")

    try:
        payload = jwt.decode(credentials.credentials, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise UnauthorizedError("Not authorized, token failed") from e

    user_id = payload.get("sub") or payload.get("id")
    if not user_id:
        raise UnauthorizedError("Not authorized, token failed")
    return CurrentUser(id=str(user_id), email=payload.get("email"))
