"""Author verification for feedback updates and deletions.

Callers identify themselves with a self-reported ``name`` or ``userId``. This
is not authentication: the check only compares that value with the one stored
when the feedback was created. Handlers depend on the ``AuthorVerifier``
interface, so a real identity check can replace ``FieldMatchVerifier`` without
changing them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from litestar.datastructures import State

from app.errors import ForbiddenError
from app.models import Feedback

logger = logging.getLogger("Feedbacks.auth")


@dataclass(frozen=True)
class AuthorIdentity:
    """Identity claimed by the caller of a mutating request."""

    name: Optional[str] = None
    user_id: Optional[str] = None


class AuthorVerifier(ABC):
    """Decides whether a caller may modify a feedback."""

    @abstractmethod
    def verify(self, feedback: Feedback, identity: AuthorIdentity, action: str) -> None:
        """Raise ForbiddenError if ``identity`` may not perform ``action`` on ``feedback``."""


class FieldMatchVerifier(AuthorVerifier):
    """Grants access when one identity field equals the stored value."""

    def __init__(self, attribute: str = "name") -> None:
        if attribute not in ("name", "user_id"):
            raise ValueError(f"Unsupported ownership attribute '{attribute}'")
        self.attribute = attribute

    def verify(self, feedback: Feedback, identity: AuthorIdentity, action: str) -> None:
        claimed = getattr(identity, self.attribute)
        stored = getattr(feedback, self.attribute)

        if claimed is None or stored is None or str(claimed) != str(stored):
            logger.warning(
                f"Ownership mismatch on feedback {feedback.id}: "
                f"{self.attribute}={claimed!r} tried to {action}"
            )
            raise ForbiddenError(f"You can only {action} your own feedback.")


def provide_author_verifier(state: State) -> AuthorVerifier:
    """Dependency provider returning the verifier configured on the app."""
    return state.author_verifier
