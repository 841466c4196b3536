"""Post API: thin routes delegating to PostService and VerificationLedger."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from cowconnect.api.v1.dependencies import (
    get_identity,
    get_post_service,
    get_verification_ledger,
)
from cowconnect.api.v1.uploads import read_upload
from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.post import EditPostCommand, SubmitPostCommand
from cowconnect.application.services import VerificationLedger
from cowconnect.application.use_cases.posts import PostService
from cowconnect.core.limiter import limit_submit, limit_writes
from cowconnect.domain.enums import Role
from cowconnect.schemas.common import ErrorResponse
from cowconnect.schemas.post import PostResponse, VerificationResponse

router = APIRouter()

_SUBMIT_ERRORS = {
    422: {"description": "Content rejected by the gate", "model": ErrorResponse},
    503: {"description": "Content analysis or storage unavailable (retryable)", "model": ErrorResponse},
}


@router.post("", response_model=PostResponse, status_code=201, responses=_SUBMIT_ERRORS)
@limit_submit
async def submit_post(
    request: Request,
    identity: Annotated[Identity, Depends(get_identity)],
    post_svc: Annotated[PostService, Depends(get_post_service)],
    content: Annotated[str, Form()] = "",
    media: Annotated[UploadFile | None, File()] = None,
):
    """Submit a post. It is gated, tagged and saved together with the owner's index."""
    upload = await read_upload(media)
    post = await post_svc.submit(identity, SubmitPostCommand(content=content, media=upload))
    return PostResponse.from_entity(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    post_svc: Annotated[PostService, Depends(get_post_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    """Community feed, newest first."""
    posts = await post_svc.list_posts(limit=limit)
    return [PostResponse.from_entity(p) for p in posts]


@router.get("/mine", response_model=list[PostResponse])
async def list_my_posts(
    identity: Annotated[Identity, Depends(get_identity)],
    post_svc: Annotated[PostService, Depends(get_post_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    posts = await post_svc.list_my_posts(identity, limit=limit)
    return [PostResponse.from_entity(p) for p in posts]


@router.get("/filter", response_model=list[PostResponse])
async def filter_posts(
    post_svc: Annotated[PostService, Depends(get_post_service)],
    tags: Annotated[list[str], Query()] = [],
    role: Annotated[Role | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    """Posts carrying any of the given tags and/or written by the given role."""
    posts = await post_svc.list_filtered_posts(tags, role, limit=limit)
    return [PostResponse.from_entity(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    post_svc: Annotated[PostService, Depends(get_post_service)],
):
    post = await post_svc.get_post(post_id)
    return PostResponse.from_entity(post)


@router.put("/{post_id}", response_model=PostResponse)
@limit_writes
async def edit_post(
    request: Request,
    post_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    post_svc: Annotated[PostService, Depends(get_post_service)],
    content: Annotated[str, Form()] = "",
    media: Annotated[UploadFile | None, File()] = None,
    remove_media: Annotated[bool, Form()] = False,
):
    """Replace text and media of your own post. Tags and verification are kept."""
    upload = await read_upload(media)
    post = await post_svc.edit(
        identity,
        post_id,
        EditPostCommand(content=content, media=upload, remove_media=remove_media),
    )
    return PostResponse.from_entity(post)


@router.delete("/{post_id}", status_code=204)
@limit_writes
async def delete_post(
    request: Request,
    post_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    post_svc: Annotated[PostService, Depends(get_post_service)],
):
    """Delete your own post and remove it from your profile."""
    await post_svc.delete(identity, post_id)


@router.get("/{post_id}/verification", response_model=VerificationResponse)
async def get_verification(
    post_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    ledger: Annotated[VerificationLedger, Depends(get_verification_ledger)],
):
    """Attestations on the post and whether the caller may (or did) attest."""
    view = await ledger.view(identity, post_id)
    return VerificationResponse.from_view(view)


@router.post("/{post_id}/verification", response_model=VerificationResponse)
@limit_writes
async def attest_post(
    request: Request,
    post_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    ledger: Annotated[VerificationLedger, Depends(get_verification_ledger)],
):
    """Attest the post as a doctor or research institution. Repeating is a no-op."""
    view = await ledger.attest(identity, post_id)
    return VerificationResponse.from_view(view)
