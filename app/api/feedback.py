"""Feedback API endpoints."""

import logging
from datetime import datetime
from typing import List, Optional, Union

from litestar import Controller, Request, delete, get, post, put
from litestar.datastructures import State
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK, HTTP_201_CREATED
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator
from sqlalchemy.exc import SQLAlchemyError

from app.auth.authorship import AuthorIdentity, AuthorVerifier, provide_author_verifier
from app.errors import NotFoundError, ServerError, ValidationError
from app.repositories.feedback import FeedbackRepository, provide_feedback_repository
from app.utils.logging import error_log

logger = logging.getLogger("Feedbacks.api")

# Ids outside the INTEGER primary key range cannot exist in the store
MAX_FEEDBACK_ID = 2**31 - 1


# --- Request/Response Schemas ---

class AuthorRequest(BaseModel):
    """Identity claimed by the caller. Both fields are self-reported."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=200)
    user_id: Optional[str] = Field(default=None, alias="userId", max_length=200)

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, value: Union[int, str, None]) -> Optional[str]:
        # Numeric ids are accepted and stored as text
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def identity(self) -> AuthorIdentity:
        return AuthorIdentity(name=self.name, user_id=self.user_id)


class FeedbackRequest(AuthorRequest):
    """Body of create and update requests."""
    comment: Optional[str] = None


class FeedbackResponse(BaseModel):
    """Feedback as returned to callers."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    userId: Optional[str] = Field(default=None, validation_alias="user_id")
    comment: str
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class DeleteResponse(BaseModel):
    message: str


# --- Helper Functions ---

async def parse_author(request: Request) -> AuthorRequest:
    """Parse the optional JSON body of a delete request."""
    raw = await request.body()
    if not raw.strip():
        return AuthorRequest()
    try:
        return AuthorRequest.model_validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError("Request body must be a JSON object with 'name' or 'userId'.") from e


async def get_feedback_or_404(feedbacks: FeedbackRepository, feedback_id: int, operation: str):
    if not 1 <= feedback_id <= MAX_FEEDBACK_ID:
        logger.info(f"Feedback {feedback_id} out of range ({operation})")
        raise NotFoundError("Feedback not found.")
    try:
        feedback = await feedbacks.get(feedback_id)
    except SQLAlchemyError as e:
        error_log(f"Failed to load feedback for {operation}", exc=e, context={"feedback_id": feedback_id})
        raise ServerError(f"Could not {operation} the feedback.") from e
    if feedback is None:
        logger.info(f"Feedback {feedback_id} not found ({operation})")
        raise NotFoundError("Feedback not found.")
    return feedback


# --- Controller ---

class FeedbackController(Controller):
    """CRUD endpoints for feedback comments."""

    path = "/feedbacks"
    tags = ["feedbacks"]
    dependencies = {
        "feedbacks": Provide(provide_feedback_repository, sync_to_thread=False),
        "verifier": Provide(provide_author_verifier, sync_to_thread=False),
    }

    @get("/")
    async def list_feedbacks(
        self,
        feedbacks: FeedbackRepository,
        state: State,
    ) -> List[FeedbackResponse]:
        """List all feedbacks ordered by creation time."""
        try:
            records = await feedbacks.list(order=state.settings.sort_order)
        except SQLAlchemyError as e:
            error_log("Failed to list feedbacks", exc=e)
            raise ServerError("Could not list feedbacks.") from e
        return [FeedbackResponse.model_validate(f) for f in records]

    @post("/", status_code=HTTP_201_CREATED)
    async def create_feedback(
        self,
        data: FeedbackRequest,
        feedbacks: FeedbackRepository,
        state: State,
    ) -> FeedbackResponse:
        """Create a feedback. Name and comment are required, and userId when it decides ownership."""
        if state.settings.owner_field == "userId":
            if not data.user_id or not data.name or not data.comment:
                raise ValidationError("User id, name and comment are required.")
        elif not data.name or not data.comment:
            raise ValidationError("Name and comment are required.")

        try:
            feedback = await feedbacks.create(
                name=data.name,
                comment=data.comment,
                user_id=data.user_id,
            )
        except SQLAlchemyError as e:
            error_log("Failed to create feedback", exc=e, context={"name": data.name})
            raise ServerError("Could not create the feedback.") from e

        logger.info(f"Feedback {feedback.id} created by {data.name}")
        return FeedbackResponse.model_validate(feedback)

    @put("/{feedback_id:int}")
    async def update_feedback(
        self,
        feedback_id: int,
        data: FeedbackRequest,
        feedbacks: FeedbackRepository,
        verifier: AuthorVerifier,
    ) -> FeedbackResponse:
        """Replace the comment of a feedback owned by the caller."""
        feedback = await get_feedback_or_404(feedbacks, feedback_id, "update")
        verifier.verify(feedback, data.identity(), "update")

        if not data.comment:
            raise ValidationError("Comment is required.")

        try:
            feedback = await feedbacks.update_comment(feedback, data.comment)
        except SQLAlchemyError as e:
            error_log("Failed to update feedback", exc=e, context={"feedback_id": feedback_id})
            raise ServerError("Could not update the feedback.") from e

        logger.info(f"Feedback {feedback_id} updated")
        return FeedbackResponse.model_validate(feedback)

    @delete("/{feedback_id:int}", status_code=HTTP_200_OK)
    async def delete_feedback(
        self,
        feedback_id: int,
        request: Request,
        feedbacks: FeedbackRepository,
        verifier: AuthorVerifier,
    ) -> DeleteResponse:
        """Delete a feedback owned by the caller."""
        author = await parse_author(request)
        feedback = await get_feedback_or_404(feedbacks, feedback_id, "delete")
        verifier.verify(feedback, author.identity(), "delete")

        try:
            await feedbacks.delete(feedback)
        except SQLAlchemyError as e:
            error_log("Failed to delete feedback", exc=e, context={"feedback_id": feedback_id})
            raise ServerError("Could not delete the feedback.") from e

        logger.info(f"Feedback {feedback_id} deleted")
        return DeleteResponse(message="Feedback deleted successfully.")
