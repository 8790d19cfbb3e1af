import logging

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.models.friend import Friend
from habitpal.models.user import User

logger = logging.getLogger(__name__)


async def get_friends(db: AsyncSession, user_id: int) -> list[User]:
    """Accepted friends, whichever side sent the original request."""
    result = await db.execute(
        select(Friend).where(
            or_(Friend.user_id == user_id, Friend.friend_id == user_id),
            Friend.status == "accepted",
        )
    )
    friend_ids = [
        f.friend_id if f.user_id == user_id else f.user_id
        for f in result.scalars().all()
    ]
    if not friend_ids:
        return []

    users_result = await db.execute(
        select(User).where(User.id.in_(friend_ids)).order_by(User.username.asc())
    )
    return list(users_result.scalars().all())


async def get_friend_requests(db: AsyncSession, user_id: int) -> list[dict]:
    """Pending requests received by user_id."""
    result = await db.execute(
        select(User)
        .join(Friend, Friend.user_id == User.id)
        .where(Friend.friend_id == user_id, Friend.status == "pending")
        .order_by(Friend.created_at.asc(), Friend.id.asc())
    )
    return [{"user": sender, "status": "pending"} for sender in result.scalars().all()]


async def get_pending_user_ids(db: AsyncSession, user_id: int) -> set[int]:
    """Users with a pending request to or from user_id."""
    result = await db.execute(
        select(Friend.user_id, Friend.friend_id).where(
            or_(Friend.user_id == user_id, Friend.friend_id == user_id),
            Friend.status == "pending",
        )
    )
    return {
        row.friend_id if row.user_id == user_id else row.user_id
        for row in result.all()
    }


async def send_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> str:
    """Send a request from user_id to friend_id. Returns the resulting edge status.

    At most one edge exists per pair of users. If friend_id already asked
    user_id, that pending request is accepted rather than stored twice.
    """
    result = await db.execute(
        select(Friend).where(
            or_(
                and_(Friend.user_id == user_id, Friend.friend_id == friend_id),
                and_(Friend.user_id == friend_id, Friend.friend_id == user_id),
            )
        )
    )
    edges = result.scalars().all()

    if any(edge.status == "accepted" for edge in edges):
        raise ValueError("Already friends")

    if any(edge.user_id == user_id for edge in edges):
        raise ValueError("Friend request already exists")

    if edges:
        reverse = edges[0]
        reverse.status = "accepted"
        await db.flush()
        logger.info("Mutual friend request between %s and %s accepted", user_id, friend_id)
        return "accepted"

    db.add(Friend(user_id=user_id, friend_id=friend_id, status="pending"))
    try:
        await db.flush()
    except IntegrityError as e:
        raise ValueError("Friend request already exists") from e
    return "pending"


async def accept_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> None:
    """Accept the pending request friend_id sent to user_id. No-op if there is none."""
    await db.execute(
        update(Friend)
        .where(
            Friend.user_id == friend_id,
            Friend.friend_id == user_id,
            Friend.status == "pending",
        )
        .values(status="accepted")
    )
    await db.flush()


async def reject_friend_request(db: AsyncSession, user_id: int, friend_id: int) -> None:
    """Delete the pending request friend_id sent to user_id. No-op if there is none."""
    await db.execute(
        delete(Friend).where(
            Friend.user_id == friend_id,
            Friend.friend_id == user_id,
            Friend.status == "pending",
        )
    )
    await db.flush()
