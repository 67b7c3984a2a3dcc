"""
Authentication routes.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from casefolio.database.session import get_session
from casefolio.middleware.auth import get_current_user, get_session_service
from casefolio.models.user import User
from casefolio.schemas.user import LoginRequest, UserPublic
from casefolio.schemas.validation import validate_payload
from casefolio.services.auth_service import authenticate
from casefolio.services.session_service import SessionService
from casefolio.services.storage import DatabaseStorage

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger("casefolio.auth")


@router.post("/login")
async def login(
    request: Request,
    response: Response,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_session),
    session_service: SessionService = Depends(get_session_service),
) -> UserPublic:
    """
    Check credentials and start a session.

    Sets the signed session cookie on success.
    """
    credentials = validate_payload(LoginRequest, payload, "Invalid login data")
    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"Auth attempt for login: {credentials.username} client_ip={client_ip}")

    user = await authenticate(DatabaseStorage(db), credentials.username, credentials.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    cookie_value = await session_service.create_session(db, user)
    response.set_cookie(
        key=session_service.cookie_name,
        value=cookie_value,
        max_age=session_service.max_age,
        httponly=True,
        secure=request.url.scheme == "https",
        samesite="lax",
    )
    return UserPublic.model_validate(user)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_session),
    session_service: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    await session_service.destroy_session(db, request.cookies.get(session_service.cookie_name))
    response.delete_cookie(session_service.cookie_name)
    return {"success": True}


@router.get("/user")
async def current_user(user: User = Depends(get_current_user)) -> UserPublic:
    return UserPublic.model_validate(user)
