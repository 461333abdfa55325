"""Data access for feedback records.

``FeedbackRepository`` wraps the request-scoped ``AsyncSession`` handed out by
the SQLAlchemy plugin. Each mutating call is one transaction: it commits and
refreshes the instance so store-assigned values are loaded.
"""

from typing import List, Optional

from sqlalchemy import asc, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Feedback
from app.utils.logging import debug_log


class FeedbackRepository:
    """CRUD operations on the feedbacks table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(self, order: str = "asc") -> List[Feedback]:
        """Return every feedback ordered by creation time."""
        direction = desc if order == "desc" else asc
        stmt = select(Feedback).order_by(
            direction(Feedback.created_at),
            direction(Feedback.id),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, feedback_id: int) -> Optional[Feedback]:
        return await self.session.get(Feedback, feedback_id)

    async def create(
        self,
        name: str,
        comment: str,
        user_id: Optional[str] = None,
    ) -> Feedback:
        feedback = Feedback(name=name, comment=comment, user_id=user_id)
        self.session.add(feedback)
        await self.session.commit()
        await self.session.refresh(feedback)
        debug_log("Created feedback %s", feedback.id)
        return feedback

    async def update_comment(self, feedback: Feedback, comment: str) -> Feedback:
        """Overwrite the comment only; updated_at advances on flush."""
        feedback.comment = comment
        await self.session.commit()
        await self.session.refresh(feedback)
        debug_log("Updated feedback %s", feedback.id)
        return feedback

    async def delete(self, feedback: Feedback) -> None:
        feedback_id = feedback.id
        await self.session.delete(feedback)
        await self.session.commit()
        debug_log("Deleted feedback %s", feedback_id)


def provide_feedback_repository(session: AsyncSession) -> FeedbackRepository:
    """Dependency provider binding the repository to the request's session."""
    return FeedbackRepository(session)
