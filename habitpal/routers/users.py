import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.database import get_db
from habitpal.dependencies import IdPath, get_current_user
from habitpal.models.user import User
from habitpal.schemas.auth import UserResponse
from habitpal.schemas.habit import HabitResponse
from habitpal.services import friend_service, habit_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


async def _search_available_users(db: AsyncSession, user: User, term: str) -> list[User]:
    """Search results minus the caller, their friends, and pending requests either way."""
    if not term:
        return []

    users = await user_service.search_users(db, term)
    friend_ids = {f.id for f in await friend_service.get_friends(db, user.id)}
    pending_ids = await friend_service.get_pending_user_ids(db, user.id)

    available = [
        u for u in users
        if u.id != user.id and u.id not in friend_ids and u.id not in pending_ids
    ]
    logger.info(
        "User search %r: %d matches, %d available", term, len(users), len(available)
    )
    return available


@router.get("/search/users", response_model=list[UserResponse])
async def search_users(
    q: str = Query(default=""),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _search_available_users(db, user, q.strip())


@router.get("/users", response_model=list[UserResponse])
async def search_users_legacy(
    search: str = Query(default=""),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _search_available_users(db, user, search.strip())


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await user_service.get_user(db, user_id)
    if profile is None:
        logger.info("User not found with ID: %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


@router.get("/users/{user_id}/habits", response_model=list[HabitResponse])
async def get_user_habits(
    user_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    owner = await user_service.get_user(db, user_id)
    if owner is None:
        logger.info("User not found for habits with ID: %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return await habit_service.get_habits(db, user_id)
