"""Error taxonomy for the feedbacks API.

Every error carries the HTTP status it maps to. Messages are safe to show to
callers; internal details belong in the logs only.
"""

from typing import Optional

from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class FeedbackError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(FeedbackError):
    """A required field is missing or empty."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class ForbiddenError(FeedbackError):
    """Caller identity does not match the stored author."""

    status_code = HTTP_403_FORBIDDEN
    default_message = "You can only modify your own feedback."


class NotFoundError(FeedbackError):
    """No feedback exists with the requested id."""

    status_code = HTTP_404_NOT_FOUND
    default_message = "Feedback not found."


class ServerError(FeedbackError):
    """Unexpected or store failure. The message never includes the cause."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR
