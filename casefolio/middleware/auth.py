"""
Authentication and authorization dependencies.
"""
import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from casefolio.database.session import get_session
from casefolio.models.user import User
from casefolio.services.session_service import SessionService
from casefolio.services.storage import DatabaseStorage

logger = logging.getLogger("casefolio.auth_middleware")


def get_session_service(request: Request) -> SessionService:
    return request.app.state.session_service


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_session),
    session_service: SessionService = Depends(get_session_service),
) -> User:
    """
    Resolve the logged-in user from the session cookie.

    Raises:
        HTTPException: 401 when there is no valid session
    """
    session_data = await session_service.get_session(db, request.cookies.get(session_service.cookie_name))
    if not session_data:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = await DatabaseStorage(db).get_user(session_data["user_id"])
    if user is None:
        logger.warning(f"Session refers to missing user {session_data.get('user_id')}")
        raise HTTPException(status_code=401, detail="Not authenticated")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require admin role."""
    if not user.is_admin:
        logger.info(f"Admin access denied for user {user.username}")
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
