import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.database import get_db
from habitpal.dependencies import IdPath, get_current_user
from habitpal.models.user import User
from habitpal.schemas.auth import UserResponse
from habitpal.schemas.social import FriendRequestResponse, FriendRequestSent
from habitpal.services import friend_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/friends", tags=["friends"])


@router.get("", response_model=list[UserResponse])
async def list_friends(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await friend_service.get_friends(db, user.id)


@router.get("/requests", response_model=list[FriendRequestResponse])
async def list_friend_requests(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await friend_service.get_friend_requests(db, user.id)


@router.post("/request/{friend_id}", response_model=FriendRequestSent)
async def send_friend_request(
    friend_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if friend_id == user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot send friend request to yourself",
        )

    friend = await user_service.get_user(db, friend_id)
    if friend is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    try:
        result = await friend_service.send_friend_request(db, user.id, friend_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Friend request sent from %s to %s", user.username, friend.username)
    return {"status": result}


@router.post("/accept/{friend_id}")
async def accept_friend_request(
    friend_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await friend_service.accept_friend_request(db, user.id, friend_id)
    return {"status": "accepted"}


@router.post("/reject/{friend_id}")
async def reject_friend_request(
    friend_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await friend_service.reject_friend_request(db, user.id, friend_id)
    return {"status": "rejected"}
