from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from habitpal.database import get_db
from habitpal.dependencies import get_current_user
from habitpal.models.user import User
from habitpal.schemas.social import LeaderboardEntry
from habitpal.services import stats_service

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await stats_service.get_leaderboard(db, user.id)
