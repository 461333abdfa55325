"""Feedback model: a comment left by an author."""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Feedback(Base):
    """User feedback comment."""

    __tablename__ = "feedbacks"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Free-text label supplied by the caller, not a foreign key
    user_id: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Feedback {self.id} by {self.name} ({self.created_at})>"
