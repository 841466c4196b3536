"""VerificationLedger and RegistrationLedger unit tests."""

from unittest.mock import AsyncMock

import pytest

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.services import RegistrationLedger, VerificationLedger
from cowconnect.domain.enums import Role, VerificationState
from cowconnect.domain.exceptions import (
    AlreadyRegisteredException,
    AuthenticationException,
    AuthorizationException,
    PersistenceFailureException,
    ResourceNotFoundException,
)
from cowconnect.domain.value_objects.core import Attestation, Registration
from tests.builders import make_post, make_workshop

DOCTOR = Identity(user_id="doc1", role=Role.DOCTOR, display_name="Dr. Mehta")
INSTITUTE = Identity(user_id="ndri", role=Role.RESEARCH_INSTITUTION)


def _profile(user_id: str, role: Role, name: str = "Someone") -> ProfileResult:
    return ProfileResult(
        id=user_id,
        collection=role.profile_collection,
        role=role,
        name=name,
        contact_no="9123456780",
        profile_pic=f"https://media.test/{user_id}.png",
    )


def _verification(post):
    post_repo = AsyncMock()
    post_repo.get_by_id = AsyncMock(return_value=post)
    profile_repo = AsyncMock()
    profile_repo.get_profile = AsyncMock(
        return_value=_profile("ndri", Role.RESEARCH_INSTITUTION, "NDRI Karnal")
    )
    writer = AsyncMock()
    return VerificationLedger(post_repo, profile_repo, writer), post_repo, writer


class TestVerificationLedger:
    async def test_doctor_attests_pending_post(self) -> None:
        ledger, _, writer = _verification(make_post(state=VerificationState.PENDING))

        view = await ledger.attest(DOCTOR, "post1")

        assert view.is_verified
        assert view.verified_by_me
        assert view.can_attest
        assert [a.attester_id for a in view.attestations] == ["doc1"]
        post_id, attestation = writer.add_attestation.await_args.args
        assert post_id == "post1"
        assert attestation.name == "Dr. Mehta"
        assert attestation.role is Role.DOCTOR

    async def test_attestation_uses_profile_name_without_display_name(self) -> None:
        ledger, _, writer = _verification(make_post())
        await ledger.attest(INSTITUTE, "post1")
        attestation = writer.add_attestation.await_args.args[1]
        assert attestation.name == "NDRI Karnal"
        assert attestation.profile_pic == "https://media.test/ndri.png"

    async def test_unverified_post_can_be_attested(self) -> None:
        ledger, _, writer = _verification(make_post(state=VerificationState.UNVERIFIED))
        view = await ledger.attest(INSTITUTE, "post1")
        assert view.is_verified
        writer.add_attestation.assert_awaited_once()

    async def test_second_attestation_by_same_expert_is_noop(self) -> None:
        existing = Attestation(attester_id="doc1", role=Role.DOCTOR, name="Dr. Mehta")
        ledger, _, writer = _verification(make_post(attestations=(existing,)))

        view = await ledger.attest(DOCTOR, "post1")

        assert view.verified_by_me
        assert len(view.attestations) == 1
        writer.add_attestation.assert_not_awaited()

    @pytest.mark.parametrize("role", [Role.NGO, Role.VOLUNTEER, Role.FARMER, None])
    async def test_other_roles_cannot_attest_and_nothing_is_read(self, role) -> None:
        ledger, post_repo, writer = _verification(make_post())
        with pytest.raises(AuthorizationException):
            await ledger.attest(Identity(user_id="u1", role=role), "post1")
        post_repo.get_by_id.assert_not_awaited()
        writer.add_attestation.assert_not_awaited()

    async def test_anonymous_cannot_attest(self) -> None:
        ledger, _, _ = _verification(make_post())
        with pytest.raises(AuthenticationException):
            await ledger.attest(Identity.anonymous(), "post1")

    async def test_missing_post(self) -> None:
        ledger, _, writer = _verification(None)
        with pytest.raises(ResourceNotFoundException):
            await ledger.attest(DOCTOR, "post1")
        writer.add_attestation.assert_not_awaited()

    async def test_view_for_non_attesting_role(self) -> None:
        existing = Attestation(attester_id="doc1", role=Role.DOCTOR, name="Dr. Mehta")
        ledger, _, _ = _verification(make_post(attestations=(existing,)))
        view = await ledger.view(Identity(user_id="doc1", role=Role.NGO), "post1")
        assert view.is_verified
        assert view.can_attest is False
        assert view.verified_by_me is False


def _registration(workshop, profile: ProfileResult | None):
    workshop_repo = AsyncMock()
    workshop_repo.get_by_id = AsyncMock(return_value=workshop)
    profile_repo = AsyncMock()
    profile_repo.get_profile = AsyncMock(return_value=profile)
    profile_repo.find_profile = AsyncMock(return_value=profile)
    writer = AsyncMock()
    return RegistrationLedger(workshop_repo, profile_repo, writer), workshop_repo, profile_repo, writer


class TestRegistrationLedger:
    async def test_farmer_registers_with_profile_snapshot(self) -> None:
        profile = _profile("farmer1", Role.FARMER, " Ramesh ")
        ledger, _, profile_repo, writer = _registration(make_workshop(), profile)

        result = await ledger.register(Identity(user_id="farmer1", role=Role.FARMER), "ws1")

        assert result.workshop_id == "ws1"
        assert result.registration == Registration(
            user_id="farmer1", name="Ramesh", contact_no="9123456780", role=Role.FARMER
        )
        profile_repo.get_profile.assert_awaited_once_with("farmer1", "farmers")
        writer.add_registration.assert_awaited_once_with(
            "ws1", result.registration, "farmers"
        )

    async def test_expert_registration_indexes_experts_collection(self) -> None:
        ledger, _, _, writer = _registration(make_workshop(), _profile("ngo1", Role.NGO))
        await ledger.register(Identity(user_id="ngo1", role=Role.NGO), "ws1")
        assert writer.add_registration.await_args.args[2] == "experts"

    async def test_duplicate_registration_writes_nothing(self) -> None:
        reg = Registration(user_id="farmer1", name="R", contact_no="1", role=Role.FARMER)
        ledger, _, _, writer = _registration(
            make_workshop(registrations=(reg,)), _profile("farmer1", Role.FARMER)
        )
        with pytest.raises(AlreadyRegisteredException):
            await ledger.register(Identity(user_id="farmer1", role=Role.FARMER), "ws1")
        writer.add_registration.assert_not_awaited()

    async def test_missing_profile_checked_before_workshop(self) -> None:
        ledger, workshop_repo, _, writer = _registration(make_workshop(), None)
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await ledger.register(Identity(user_id="ghost"), "ws1")
        assert exc_info.value.details["resource_type"] == "profile"
        workshop_repo.get_by_id.assert_not_awaited()
        writer.add_registration.assert_not_awaited()

    async def test_missing_workshop(self) -> None:
        ledger, _, _, writer = _registration(None, _profile("farmer1", Role.FARMER))
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await ledger.register(Identity(user_id="farmer1", role=Role.FARMER), "ws1")
        assert exc_info.value.details["resource_type"] == "workshop"
        writer.add_registration.assert_not_awaited()

    async def test_anonymous_cannot_register(self) -> None:
        ledger, workshop_repo, _, _ = _registration(make_workshop(), None)
        with pytest.raises(AuthenticationException):
            await ledger.register(Identity.anonymous(), "ws1")
        workshop_repo.get_by_id.assert_not_awaited()

    async def test_commit_failure_is_reported(self) -> None:
        ledger, _, _, writer = _registration(make_workshop(), _profile("farmer1", Role.FARMER))
        writer.add_registration.side_effect = PersistenceFailureException("add_registration")
        with pytest.raises(PersistenceFailureException):
            await ledger.register(Identity(user_id="farmer1", role=Role.FARMER), "ws1")
