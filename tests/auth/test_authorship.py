import pytest

from app.auth.authorship import AuthorIdentity, AuthorVerifier, FieldMatchVerifier
from app.errors import ForbiddenError
from app.models import Feedback


def make_feedback(**overrides) -> Feedback:
    values = {"id": 1, "name": "Alice", "user_id": "42", "comment": "Great!"}
    values.update(overrides)
    return Feedback(**values)


def test_name_match_allows_author():
    verifier = FieldMatchVerifier("name")
    verifier.verify(make_feedback(), AuthorIdentity(name="Alice"), "update")


def test_name_mismatch_is_forbidden():
    verifier = FieldMatchVerifier("name")
    with pytest.raises(ForbiddenError, match="only delete your own"):
        verifier.verify(make_feedback(), AuthorIdentity(name="Bob"), "delete")


def test_missing_identity_never_matches():
    verifier = FieldMatchVerifier("user_id")
    with pytest.raises(ForbiddenError):
        verifier.verify(make_feedback(), AuthorIdentity(name="Alice"), "update")

    # A record created without a user id cannot be claimed by one
    with pytest.raises(ForbiddenError):
        verifier.verify(make_feedback(user_id=None), AuthorIdentity(user_id="42"), "update")


def test_user_id_match_ignores_name():
    verifier = FieldMatchVerifier("user_id")
    verifier.verify(make_feedback(), AuthorIdentity(name="Someone else", user_id="42"), "update")


def test_unknown_attribute_rejected():
    with pytest.raises(ValueError, match="Unsupported ownership attribute"):
        FieldMatchVerifier("comment")


def test_forbidden_error_maps_to_403():
    exc = ForbiddenError()
    assert exc.status_code == 403
    assert exc.to_response() == {"error": "You can only modify your own feedback."}


class AllowEveryone(AuthorVerifier):
    def verify(self, feedback, identity, action):
        return None


@pytest.mark.asyncio
async def test_custom_verifier_replaces_ownership_check(make_app, serve):
    async with serve(make_app(verifier=AllowEveryone())) as client:
        created = (await client.post("/feedbacks", json={"name": "Alice", "comment": "Hi"})).json()

        resp = await client.put(f"/feedbacks/{created['id']}", json={"name": "Bob", "comment": "Moderated"})
        assert resp.status_code == 200
        assert resp.json()["comment"] == "Moderated"
        assert resp.json()["name"] == "Alice"
