"""PostService unit tests: submission pipeline ordering, ownership and queries."""

import base64
from unittest.mock import AsyncMock

import pytest

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.post import EditPostCommand, MediaUpload, SubmitPostCommand
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.interfaces.services import ClassificationServiceError
from cowconnect.application.services import Categorizer, ContentGate
from cowconnect.application.use_cases.posts import PostService
from cowconnect.domain.enums import MediaKind, Role, VerificationState
from cowconnect.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ContentRejectedException,
    PersistenceFailureException,
    ResourceNotFoundException,
    UpstreamUnavailableException,
    ValidationException,
)
from cowconnect.domain.value_objects.core import Attestation, MediaRef
from cowconnect.infrastructure.exceptions import StorageUploadError
from tests.builders import make_post
from tests.conftest import ACCEPT, ACCEPT_NEEDS_REVIEW, REJECT
from tests.fakes import FakeClassifier, FakeStorage

FARMER = Identity(user_id="farmer1", role=Role.FARMER)
PHOTO = MediaUpload(
    kind=MediaKind.IMAGE, data=b"\xff\xd8jpeg", filename="../../cow.jpg", content_type="image/jpeg"
)


def _farmer_profile() -> ProfileResult:
    return ProfileResult(
        id="farmer1",
        collection="farmers",
        role=Role.FARMER,
        name=" Ramesh Bhai ",
        contact_no="9000000001",
        profile_pic="https://media.test/ramesh.png",
    )


def _service(*replies, storage: FakeStorage | None = None):
    classifier = FakeClassifier(*replies)
    post_repo = AsyncMock()
    profile_repo = AsyncMock()
    profile_repo.get_profile = AsyncMock(return_value=_farmer_profile())
    profile_repo.find_profile = AsyncMock(return_value=_farmer_profile())
    writer = AsyncMock()
    storage = storage or FakeStorage()
    svc = PostService(
        post_repo=post_repo,
        profile_repo=profile_repo,
        writer=writer,
        gate=ContentGate(classifier),
        categorizer=Categorizer(classifier),
        storage=storage,
    )
    return svc, classifier, post_repo, profile_repo, writer, storage


class TestSubmit:
    async def test_accepted_post_is_tagged_and_committed(self) -> None:
        svc, classifier, _, profile_repo, writer, _ = _service(ACCEPT, '["health", "calving"]')

        post = await svc.submit(FARMER, SubmitPostCommand(content="Cow not eating after calving"))

        assert post.verification_state is VerificationState.UNVERIFIED
        assert post.tags == ("health", "calving")
        assert post.owner_id == "farmer1"
        assert post.owner_role is Role.FARMER
        assert post.owner_profile.name == "Ramesh Bhai"
        assert post.attestations == ()
        assert len(classifier.calls) == 2
        profile_repo.get_profile.assert_awaited_once_with("farmer1", "farmers")
        writer.create_post.assert_awaited_once()
        written, collection = writer.create_post.await_args.args
        assert written == post
        assert collection == "farmers"

    async def test_needs_review_makes_post_pending(self) -> None:
        svc, *_ = _service(ACCEPT_NEEDS_REVIEW, '["treatment"]')
        post = await svc.submit(FARMER, SubmitPostCommand(content="Neem oil cures mastitis"))
        assert post.verification_state is VerificationState.PENDING

    async def test_rejected_post_writes_nothing(self) -> None:
        svc, classifier, _, profile_repo, writer, storage = _service(REJECT)

        with pytest.raises(ContentRejectedException) as exc_info:
            await svc.submit(FARMER, SubmitPostCommand(content="Selling phones", media=PHOTO))

        assert exc_info.value.retryable is False
        assert len(classifier.calls) == 1
        writer.create_post.assert_not_awaited()
        profile_repo.get_profile.assert_not_awaited()
        assert storage.uploads == []

    async def test_unavailable_gate_is_retryable_and_writes_nothing(self) -> None:
        svc, classifier, _, _, writer, storage = _service(
            ClassificationServiceError("Gemini error (503)")
        )

        with pytest.raises(UpstreamUnavailableException) as exc_info:
            await svc.submit(FARMER, SubmitPostCommand(content="Lumpy skin treatment?"))

        assert exc_info.value.retryable is True
        assert exc_info.value.details == {"reason": "Gemini error (503)"}
        assert len(classifier.calls) == 1
        writer.create_post.assert_not_awaited()
        assert storage.uploads == []

    async def test_anonymous_is_rejected_before_classification(self) -> None:
        svc, classifier, _, _, writer, _ = _service()
        with pytest.raises(AuthenticationException):
            await svc.submit(Identity.anonymous(), SubmitPostCommand(content="Hello"))
        assert classifier.calls == []
        writer.create_post.assert_not_awaited()

    async def test_empty_submission_is_invalid(self) -> None:
        svc, classifier, *_ = _service()
        with pytest.raises(ValidationException):
            await svc.submit(FARMER, SubmitPostCommand(content="  <p></p> "))
        assert classifier.calls == []

    async def test_media_is_classified_then_uploaded(self) -> None:
        svc, classifier, _, _, writer, storage = _service(ACCEPT, '["breeds"]')

        post = await svc.submit(FARMER, SubmitPostCommand(content="", media=PHOTO))

        gate_media = classifier.calls[0][1]
        assert gate_media.mime_type == "image/jpeg"
        assert base64.b64decode(gate_media.data_base64) == PHOTO.data
        assert classifier.calls[1][1] == gate_media
        ref, data, content_type = storage.uploads[0]
        assert ref == f"posts/{post.id}/image/cow.jpg"
        assert data == PHOTO.data
        assert content_type == "image/jpeg"
        assert post.media == MediaRef(kind=MediaKind.IMAGE, url=f"https://media.test/{ref}")
        writer.create_post.assert_awaited_once()

    async def test_categorizer_failure_still_creates_post(self) -> None:
        svc, _, _, _, writer, _ = _service(ACCEPT, ClassificationServiceError("quota"))
        post = await svc.submit(FARMER, SubmitPostCommand(content="Gir cow milk yield"))
        assert post.tags == ()
        writer.create_post.assert_awaited_once()

    async def test_missing_profile_writes_nothing(self) -> None:
        svc, _, _, profile_repo, writer, storage = _service(ACCEPT, "[]")
        profile_repo.get_profile = AsyncMock(return_value=None)
        with pytest.raises(ResourceNotFoundException):
            await svc.submit(FARMER, SubmitPostCommand(content="Hello cows", media=PHOTO))
        writer.create_post.assert_not_awaited()
        assert storage.uploads == []

    async def test_role_unknown_looks_up_both_collections(self) -> None:
        svc, _, _, profile_repo, _, _ = _service(ACCEPT, "[]")
        await svc.submit(Identity(user_id="farmer1"), SubmitPostCommand(content="Hi"))
        profile_repo.find_profile.assert_awaited_once_with("farmer1")
        profile_repo.get_profile.assert_not_awaited()

    async def test_upload_failure_aborts_before_commit(self) -> None:
        storage = FakeStorage(error=StorageUploadError("posts/x", "disk full"))
        svc, _, _, _, writer, _ = _service(ACCEPT, "[]", storage=storage)
        with pytest.raises(StorageUploadError):
            await svc.submit(FARMER, SubmitPostCommand(content="Hi", media=PHOTO))
        writer.create_post.assert_not_awaited()

    async def test_commit_failure_propagates(self) -> None:
        svc, _, _, _, writer, _ = _service(ACCEPT, "[]")
        writer.create_post.side_effect = PersistenceFailureException("create_post", "ConnectError")
        with pytest.raises(PersistenceFailureException) as exc_info:
            await svc.submit(FARMER, SubmitPostCommand(content="Hi"))
        assert exc_info.value.retryable is True

    async def test_content_is_sanitized(self) -> None:
        svc, classifier, *_ = _service(ACCEPT, "[]")
        post = await svc.submit(FARMER, SubmitPostCommand(content=" <b>Sahiwal</b> heifer\n"))
        assert post.content == "Sahiwal heifer"
        assert "<b>" not in classifier.calls[0][0]


class TestEditAndDelete:
    def _attested_post(self):
        attestation = Attestation(attester_id="doc1", role=Role.DOCTOR, name="Dr. Mehta")
        return make_post(attestations=(attestation,))

    async def test_edit_keeps_tags_and_attestations_without_regating(self) -> None:
        svc, classifier, post_repo, _, writer, _ = _service()
        original = self._attested_post()
        post_repo.get_by_id = AsyncMock(return_value=original)

        updated = await svc.edit(FARMER, "post1", EditPostCommand(content="Updated\ntext"))

        assert updated.content == "Updated\ntext"
        assert updated.tags == original.tags
        assert updated.attestations == original.attestations
        assert updated.verification_state is VerificationState.VERIFIED
        assert classifier.calls == []
        writer.update_post.assert_awaited_once_with(updated)

    async def test_edit_replaces_media(self) -> None:
        svc, _, post_repo, _, writer, storage = _service()
        post_repo.get_by_id = AsyncMock(return_value=make_post())
        updated = await svc.edit(FARMER, "post1", EditPostCommand(content="x", media=PHOTO))
        assert storage.uploads[0][0] == "posts/post1/image/cow.jpg"
        assert updated.media.kind is MediaKind.IMAGE

    async def test_edit_removes_media(self) -> None:
        from dataclasses import replace

        svc, _, post_repo, _, _, _ = _service()
        post = replace(make_post(), media=MediaRef(kind=MediaKind.VIDEO, url="https://v"))
        post_repo.get_by_id = AsyncMock(return_value=post)
        updated = await svc.edit(FARMER, "post1", EditPostCommand(content="x", remove_media=True))
        assert updated.media is None

    async def test_edit_by_non_owner_is_denied(self) -> None:
        svc, _, post_repo, _, writer, _ = _service()
        post_repo.get_by_id = AsyncMock(return_value=make_post(owner_id="someone-else"))
        with pytest.raises(AuthorizationException):
            await svc.edit(FARMER, "post1", EditPostCommand(content="x"))
        writer.update_post.assert_not_awaited()

    async def test_edit_to_empty_post_is_invalid(self) -> None:
        svc, _, post_repo, _, writer, _ = _service()
        post_repo.get_by_id = AsyncMock(return_value=make_post())
        with pytest.raises(ValidationException):
            await svc.edit(FARMER, "post1", EditPostCommand(content=""))
        writer.update_post.assert_not_awaited()

    async def test_delete_retracts_from_owner_index(self) -> None:
        svc, _, post_repo, _, writer, _ = _service()
        post_repo.get_by_id = AsyncMock(return_value=make_post())
        await svc.delete(FARMER, "post1")
        writer.delete_post.assert_awaited_once_with("post1", "farmer1", "farmers")

    async def test_delete_missing_post(self) -> None:
        svc, _, post_repo, _, writer, _ = _service()
        post_repo.get_by_id = AsyncMock(return_value=None)
        with pytest.raises(ResourceNotFoundException):
            await svc.delete(FARMER, "nope")
        writer.delete_post.assert_not_awaited()

    async def test_delete_by_non_owner_is_denied(self) -> None:
        svc, _, post_repo, _, writer, _ = _service()
        post_repo.get_by_id = AsyncMock(return_value=make_post(owner_id="farmer2"))
        with pytest.raises(AuthorizationException):
            await svc.delete(FARMER, "post1")
        writer.delete_post.assert_not_awaited()


class TestQueries:
    async def test_filtered_without_criteria_lists_recent(self) -> None:
        svc, _, post_repo, *_ = _service()
        post_repo.list_recent = AsyncMock(return_value=[])
        await svc.list_filtered_posts([" ", ""], None, limit=10)
        post_repo.list_recent.assert_awaited_once_with(limit=10)
        post_repo.list_filtered.assert_not_awaited()

    async def test_filtered_normalizes_and_dedupes_tags(self) -> None:
        svc, _, post_repo, *_ = _service()
        post_repo.list_filtered = AsyncMock(return_value=[])
        await svc.list_filtered_posts(["Health", "health ", "Dairy"], Role.DOCTOR)
        post_repo.list_filtered.assert_awaited_once_with(
            ["health", "dairy"], Role.DOCTOR, limit=50
        )

    async def test_list_my_posts_requires_sign_in(self) -> None:
        svc, *_ = _service()
        with pytest.raises(AuthenticationException):
            await svc.list_my_posts(Identity.anonymous())

    async def test_get_post_not_found(self) -> None:
        svc, _, post_repo, *_ = _service()
        post_repo.get_by_id = AsyncMock(return_value=None)
        with pytest.raises(ResourceNotFoundException):
            await svc.get_post("missing")
