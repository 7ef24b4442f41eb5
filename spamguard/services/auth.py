"""Session verification against Supabase auth."""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..logging_config import get_logger
from .supabase_client import get_supabase_client

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user behind a verified session token."""

    id: str
    email: Optional[str] = None


def resolve_user(token: str, client: Optional[Any] = None) -> Optional[AuthenticatedUser]:
    """Return the user owning ``token``, or None when the session is not valid."""

    client = client if client is not None else get_supabase_client()
    if not client:
        logger.warning("Cannot verify session: Supabase client not available")
        return None

    try:
        response = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Session verification failed: {e}")
        return None

    user = getattr(response, "user", None)
    if user is None:
        return None
    return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None))


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthenticatedUser]:
    """Dependency resolving the session user when one is present."""
    if not credentials:
        return None
    return resolve_user(credentials.credentials)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """Dependency requiring an authenticated session."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.debug(f"User authenticated: {user.id}")
    return user
