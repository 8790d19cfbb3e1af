from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.services import friend_service, habit_service


async def get_leaderboard(db: AsyncSession, user_id: int) -> list[dict]:
    """Completion counts for the user and their accepted friends, ranked."""
    friends = await friend_service.get_friends(db, user_id)
    user_ids = [user_id, *(f.id for f in friends)]

    entries = await habit_service.get_habit_completion_counts(db, user_ids)

    # Sort by completion_count descending and assign ranks
    entries.sort(key=lambda e: (-e["completion_count"], e["username"]))
    for i, entry in enumerate(entries):
        entry["rank"] = i + 1

    return entries
