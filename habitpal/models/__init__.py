from habitpal.models.base import Base
from habitpal.models.friend import Friend
from habitpal.models.habit import Habit
from habitpal.models.habit_completion import HabitCompletion
from habitpal.models.user import User

__all__ = [
    "Base",
    "Friend",
    "Habit",
    "HabitCompletion",
    "User",
]
