from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitpal.models.base import Base


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash

    # Relationships
    habits: Mapped[list["Habit"]] = relationship(back_populates="user", cascade="all, delete-orphan")  # noqa: F821
