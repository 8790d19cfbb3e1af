from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.models.habit import Habit
from habitpal.models.habit_completion import HabitCompletion
from habitpal.models.user import User


async def create_habit(
    db: AsyncSession,
    owner_id: int,
    title: str,
    description: str | None = None,
) -> Habit:
    habit = Habit(user_id=owner_id, title=title, description=description)
    db.add(habit)
    await db.flush()
    await db.refresh(habit)
    return habit


async def get_habits(db: AsyncSession, owner_id: int) -> list[Habit]:
    result = await db.execute(
        select(Habit)
        .where(Habit.user_id == owner_id)
        .order_by(Habit.created_at.asc(), Habit.id.asc())
    )
    return list(result.scalars().all())


async def get_habit(db: AsyncSession, habit_id: int) -> Habit | None:
    return await db.get(Habit, habit_id)


async def delete_habit(db: AsyncSession, habit_id: int) -> None:
    """Delete a habit and its completions in the caller's transaction."""
    await db.execute(delete(HabitCompletion).where(HabitCompletion.habit_id == habit_id))
    await db.execute(delete(Habit).where(Habit.id == habit_id))
    await db.flush()


async def complete_habit(db: AsyncSession, habit_id: int, user_id: int) -> HabitCompletion:
    # No existence check on habit_id; the store decides.
    completion = HabitCompletion(habit_id=habit_id, user_id=user_id)
    db.add(completion)
    await db.flush()
    await db.refresh(completion)
    return completion


async def get_habit_completions(db: AsyncSession, habit_id: int) -> list[HabitCompletion]:
    result = await db.execute(
        select(HabitCompletion)
        .where(HabitCompletion.habit_id == habit_id)
        .order_by(HabitCompletion.completed_at.asc(), HabitCompletion.id.asc())
    )
    return list(result.scalars().all())


async def get_habit_completion_counts(db: AsyncSession, user_ids: list[int]) -> list[dict]:
    """Total completions across all habits of each user, 0 for users with none."""
    if not user_ids:
        return []

    result = await db.execute(
        select(
            User.id,
            User.username,
            func.count(HabitCompletion.id).label("completion_count"),
        )
        .select_from(User)
        .outerjoin(Habit, Habit.user_id == User.id)
        .outerjoin(HabitCompletion, HabitCompletion.habit_id == Habit.id)
        .where(User.id.in_(user_ids))
        .group_by(User.id, User.username)
    )
    return [
        {
            "id": row.id,
            "username": row.username,
            "completion_count": row.completion_count,
        }
        for row in result.all()
    ]
