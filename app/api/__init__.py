"""Feedbacks API routes."""

from app.api.feedback import FeedbackController

__all__ = ["FeedbackController"]
