"""Feedbacks database models."""

from app.models.base import Base
from app.models.feedback import Feedback

__all__ = [
    "Base",
    "Feedback",
]
