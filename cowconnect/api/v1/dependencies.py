"""API v1 dependencies: composition root for repositories, services and identity.

Routes never construct repositories or services themselves; they declare
what they need with ``Annotated[..., Depends(...)]`` and this module wires
the Firestore client, classification client and storage backend together.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.interfaces.services import IClassificationClient
from cowconnect.application.interfaces.storage import IMediaStorage
from cowconnect.application.services import (
    Categorizer,
    ContentGate,
    RegistrationLedger,
    VerificationLedger,
)
from cowconnect.application.use_cases.posts import PostService
from cowconnect.application.use_cases.workshops import WorkshopService
from cowconnect.domain.exceptions import (
    AuthenticationException,
    StoreNotConfiguredException,
)
from cowconnect.infrastructure.firebase._rest_client import FirestoreRESTClient
from cowconnect.infrastructure.firebase.client import get_firestore_client
from cowconnect.infrastructure.firebase.repositories import (
    FirestorePostRepository,
    FirestoreProfileRepository,
    FirestoreWorkshopRepository,
)
from cowconnect.infrastructure.firebase.services import FirestoreTransactionalWriter
from cowconnect.infrastructure.security import verify_id_token
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


def get_firestore() -> FirestoreRESTClient:
    """Return the Firestore client or raise a retryable 503 when it is not configured."""
    client = get_firestore_client()
    if client is None:
        raise StoreNotConfiguredException()
    return client


def get_post_repo(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestorePostRepository:
    return FirestorePostRepository(client)


def get_workshop_repo(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestoreWorkshopRepository:
    return FirestoreWorkshopRepository(client)


def get_profile_repo(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestoreProfileRepository:
    return FirestoreProfileRepository(client)


def get_writer(
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> FirestoreTransactionalWriter:
    return FirestoreTransactionalWriter(client)


def get_classifier(request: Request) -> IClassificationClient:
    """Shared classification client created in the lifespan."""
    return request.app.state.classifier


def get_storage(request: Request) -> IMediaStorage:
    """Media storage backend created in the lifespan."""
    return request.app.state.storage


async def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    profile_repo: Annotated[FirestoreProfileRepository, Depends(get_profile_repo)],
) -> Identity:
    """Build the caller identity from a Firebase ID token.

    No Authorization header yields an anonymous identity; operations that
    need a signed-in user reject it themselves. A token that is present but
    invalid is rejected here.
    """
    if not credentials:
        return Identity.anonymous()
    try:
        claims = await verify_id_token(credentials.credentials)
    except ValueError as e:
        logger.info("Rejected ID token: %s", e)
        raise AuthenticationException("Invalid or expired ID token") from e
    user_id = claims["sub"]
    role = await profile_repo.role_for(user_id)
    return Identity(user_id=user_id, role=role, display_name=claims.get("name"))


def get_content_gate(
    classifier: Annotated[IClassificationClient, Depends(get_classifier)],
) -> ContentGate:
    return ContentGate(classifier)


def get_categorizer(
    classifier: Annotated[IClassificationClient, Depends(get_classifier)],
) -> Categorizer:
    return Categorizer(classifier)


def get_post_service(
    post_repo: Annotated[FirestorePostRepository, Depends(get_post_repo)],
    profile_repo: Annotated[FirestoreProfileRepository, Depends(get_profile_repo)],
    writer: Annotated[FirestoreTransactionalWriter, Depends(get_writer)],
    gate: Annotated[ContentGate, Depends(get_content_gate)],
    categorizer: Annotated[Categorizer, Depends(get_categorizer)],
    storage: Annotated[IMediaStorage, Depends(get_storage)],
) -> PostService:
    """Post service (composition root)."""
    return PostService(
        post_repo=post_repo,
        profile_repo=profile_repo,
        writer=writer,
        gate=gate,
        categorizer=categorizer,
        storage=storage,
    )


def get_workshop_service(
    workshop_repo: Annotated[FirestoreWorkshopRepository, Depends(get_workshop_repo)],
    profile_repo: Annotated[FirestoreProfileRepository, Depends(get_profile_repo)],
    writer: Annotated[FirestoreTransactionalWriter, Depends(get_writer)],
    storage: Annotated[IMediaStorage, Depends(get_storage)],
) -> WorkshopService:
    """Workshop service (composition root)."""
    return WorkshopService(
        workshop_repo=workshop_repo,
        profile_repo=profile_repo,
        writer=writer,
        storage=storage,
    )


def get_verification_ledger(
    post_repo: Annotated[FirestorePostRepository, Depends(get_post_repo)],
    profile_repo: Annotated[FirestoreProfileRepository, Depends(get_profile_repo)],
    writer: Annotated[FirestoreTransactionalWriter, Depends(get_writer)],
) -> VerificationLedger:
    return VerificationLedger(post_repo, profile_repo, writer)


def get_registration_ledger(
    workshop_repo: Annotated[FirestoreWorkshopRepository, Depends(get_workshop_repo)],
    profile_repo: Annotated[FirestoreProfileRepository, Depends(get_profile_repo)],
    writer: Annotated[FirestoreTransactionalWriter, Depends(get_writer)],
) -> RegistrationLedger:
    return RegistrationLedger(workshop_repo, profile_repo, writer)
