from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.database import get_db
from habitpal.dependencies import IdPath, get_current_user
from habitpal.models.user import User
from habitpal.schemas.habit import CompletionResponse, HabitCreate, HabitResponse
from habitpal.services import habit_service

router = APIRouter(prefix="/api/habits", tags=["habits"])


@router.post("", response_model=HabitResponse)
async def create_habit(
    data: HabitCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await habit_service.create_habit(db, user.id, data.title, data.description)


@router.get("", response_model=list[HabitResponse])
async def list_habits(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await habit_service.get_habits(db, user.id)


@router.get("/{habit_id}/completions", response_model=list[CompletionResponse])
async def list_completions(
    habit_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await habit_service.get_habit_completions(db, habit_id)


@router.post("/{habit_id}/complete")
async def complete_habit(
    habit_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await habit_service.complete_habit(db, habit_id, user.id)
    return {"status": "completed"}


@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: IdPath,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    habit = await habit_service.get_habit(db, habit_id)
    if habit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Habit not found")

    if habit.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this habit",
        )

    await habit_service.delete_habit(db, habit_id)
    return {"status": "deleted"}
