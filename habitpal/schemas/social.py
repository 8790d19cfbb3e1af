from pydantic import BaseModel

from habitpal.schemas.auth import UserResponse


class FriendRequestResponse(BaseModel):
    user: UserResponse
    status: str  # always "pending"

    model_config = {"from_attributes": True}


class FriendRequestSent(BaseModel):
    status: str  # "pending", or "accepted" when it answered a reverse request


class LeaderboardEntry(BaseModel):
    id: int
    username: str
    completion_count: int
    rank: int
