"""
Shared route dependencies.

Bearer-token authentication and role guards.
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fieldtrack.db.session import get_async_db
from fieldtrack.features.activities import ActivityService
from fieldtrack.features.tracking import TrackingService
from fieldtrack.features.users import InvalidToken, User, UserRepository, decode_access_token
from fieldtrack.shared.constants import UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_async_db),
) -> User:
    """Resolve the calling user from the Authorization header."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidToken as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await UserRepository(db).get_by_id(payload["sub"])
    if not user:
        logger.warning(f"Token for unknown user {payload['sub']}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def require_role(role: UserRole):
    """Dependency factory: only users with `role` pass."""

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role != role.value:
            detail = "Only field officers allowed" if role == UserRole.FIELD else "Only admin allowed"
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return user

    return _check


require_field_officer = require_role(UserRole.FIELD)
require_admin = require_role(UserRole.ADMIN)


async def get_tracking_service(db: AsyncSession = Depends(get_async_db)) -> TrackingService:
    return TrackingService(db)


async def get_activity_service(
    tracking: TrackingService = Depends(get_tracking_service),
) -> ActivityService:
    return ActivityService(tracking.db, tracking=tracking)
