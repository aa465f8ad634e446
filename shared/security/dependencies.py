from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import SESSION_COOKIE_NAME
from services.auth_service.models import User
from services.auth_service.repository import UserRepository
from .access import AccessTier, authorize
from .jwt_handler import verify_access_token

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth.login", auto_error=False)


def _extract_token(request: Request, bearer: Optional[str]) -> Optional[str]:
    if bearer:
        return bearer
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Resolve the caller from the bearer token or session cookie, or None."""
    token = _extract_token(request, token)
    if not token:
        return None

    payload = verify_access_token(token)
    if payload is None:
        return None

    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        return None

    user = await UserRepository.get_by_id(db, int(sub))
    if user is None or not user.is_active:
        return None

    # Store in request state for downstream use (like rate limiting)
    request.state.user_id = user.id
    return user


def requires(tier: AccessTier):
    """Dependency factory: resolves the caller and enforces the tier before the handler runs."""

    async def dependency(user: Optional[User] = Depends(get_optional_user)) -> Optional[User]:
        authorize(user, tier)
        return user

    dependency.__name__ = f"requires_{tier.value}"
    return dependency


get_current_user = requires(AccessTier.AUTHENTICATED)
get_admin_user = requires(AccessTier.ADMIN)
