import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.models.friend import Friend
from habitpal.models.habit import Habit
from habitpal.models.habit_completion import HabitCompletion


async def _habit_with_completions(db: AsyncSession, user_id: int, count: int) -> Habit:
    habit = Habit(user_id=user_id, title=f"Habit of {user_id}")
    db.add(habit)
    await db.flush()
    db.add_all([HabitCompletion(habit_id=habit.id, user_id=user_id) for _ in range(count)])
    await db.commit()
    return habit


@pytest.mark.asyncio
async def test_leaderboard_without_friends(client, test_user):
    response = await client.get("/api/leaderboard")
    assert response.status_code == 200
    assert response.json() == [
        {"id": test_user.id, "username": "alice", "completion_count": 0, "rank": 1}
    ]


@pytest.mark.asyncio
async def test_leaderboard_ranks_friends(
    client, db_session: AsyncSession, test_user, second_user, third_user
):
    db_session.add(Friend(user_id=second_user.id, friend_id=test_user.id, status="accepted"))
    await db_session.commit()

    await _habit_with_completions(db_session, test_user.id, 1)
    await _habit_with_completions(db_session, second_user.id, 2)
    await _habit_with_completions(db_session, second_user.id, 1)
    # carol is not a friend
    await _habit_with_completions(db_session, third_user.id, 10)

    response = await client.get("/api/leaderboard")
    assert response.status_code == 200
    assert response.json() == [
        {"id": second_user.id, "username": "bob", "completion_count": 3, "rank": 1},
        {"id": test_user.id, "username": "alice", "completion_count": 1, "rank": 2},
    ]


@pytest.mark.asyncio
async def test_leaderboard_excludes_pending(client, db_session: AsyncSession, test_user, second_user):
    db_session.add(Friend(user_id=test_user.id, friend_id=second_user.id, status="pending"))
    await db_session.commit()

    response = await client.get("/api/leaderboard")
    assert [e["id"] for e in response.json()] == [test_user.id]


@pytest.mark.asyncio
async def test_leaderboard_counts_completions_through_api(client, act_as, test_user, second_user):
    habit_id = (await client.post("/api/habits", json={"title": "Exercise"})).json()["id"]
    await client.post(f"/api/habits/{habit_id}/complete")
    await client.post(f"/api/friends/request/{second_user.id}")

    act_as(second_user)
    await client.post(f"/api/friends/accept/{test_user.id}")

    response = await client.get("/api/leaderboard")
    assert response.json() == [
        {"id": test_user.id, "username": "alice", "completion_count": 1, "rank": 1},
        {"id": second_user.id, "username": "bob", "completion_count": 0, "rank": 2},
    ]
