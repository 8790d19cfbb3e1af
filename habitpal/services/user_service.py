from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.models.user import User


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, username: str, password_hash: str) -> User:
    """Insert a user. A taken username raises the store's IntegrityError."""
    user = User(username=username, password=password_hash)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


def _like_escape(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def search_users(db: AsyncSession, term: str) -> list[User]:
    """Case-insensitive substring match on username. Includes the caller."""
    pattern = f"%{_like_escape(term)}%"
    result = await db.execute(
        select(User)
        .where(User.username.ilike(pattern, escape="\\"))
        .order_by(User.username.asc())
    )
    return list(result.scalars().all())
