from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitpal.models.base import Base


class Habit(Base):
    __tablename__ = "habits"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="habits")  # noqa: F821
    completions: Mapped[list["HabitCompletion"]] = relationship(  # noqa: F821
        back_populates="habit", cascade="all, delete-orphan", passive_deletes=True
    )
