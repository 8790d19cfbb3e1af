import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.config import settings
from habitpal.database import get_db
from habitpal.dependencies import get_current_user
from habitpal.models.user import User
from habitpal.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from habitpal.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _start_session(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=auth_service.issue_session_token(user.id),
        max_age=settings.SESSION_EXPIRE_DAYS * 86400,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and sign it in."""
    try:
        user = await auth_service.register_user(db, data.username, data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    _start_session(response, user)
    logger.info("Registered user %s", user.username)
    return user


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await auth_service.login(db, data.username, data.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    _start_session(response, user)
    return user


@router.post("/logout")
async def logout(req: Request, response: Response):
    token = req.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        await auth_service.revoke_session_token(token, req.app.state.redis)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "logged_out"}


@router.get("/user", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Return the currently authenticated user."""
    return user
