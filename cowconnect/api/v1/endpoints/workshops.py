"""Workshop API: thin routes delegating to WorkshopService and RegistrationLedger."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from cowconnect.api.v1.dependencies import (
    get_identity,
    get_registration_ledger,
    get_workshop_service,
)
from cowconnect.api.v1.uploads import read_upload
from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.workshop import CreateWorkshopCommand
from cowconnect.application.services import RegistrationLedger
from cowconnect.application.use_cases.workshops import WorkshopService
from cowconnect.core.limiter import limit_upload, limit_writes
from cowconnect.domain.enums import Role, WorkshopMode
from cowconnect.domain.exceptions import ValidationException
from cowconnect.schemas.common import ErrorResponse
from cowconnect.schemas.workshop import (
    RegisterResponse,
    RegistrationResponse,
    WorkshopResponse,
)

router = APIRouter()


@router.post("", response_model=WorkshopResponse, status_code=201)
@limit_upload
async def create_workshop(
    request: Request,
    identity: Annotated[Identity, Depends(get_identity)],
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
    title: Annotated[str, Form(min_length=1, max_length=200)],
    date_from: Annotated[date, Form()],
    date_to: Annotated[date, Form()],
    time_from: Annotated[str, Form()],
    time_to: Annotated[str, Form()],
    mode: Annotated[WorkshopMode, Form()],
    thumbnail: Annotated[UploadFile, File()],
    description: Annotated[str, Form(max_length=5000)] = "",
    location: Annotated[str | None, Form()] = None,
    link: Annotated[str | None, Form()] = None,
    tags: Annotated[list[str], Form()] = [],
):
    """Create a workshop (experts only). The thumbnail image is required."""
    upload = await read_upload(thumbnail, images_only=True, field="thumbnail")
    if upload is None:
        raise ValidationException("A thumbnail image is required", field="thumbnail")
    workshop = await workshop_svc.create(
        identity,
        CreateWorkshopCommand(
            title=title,
            description=description,
            date_from=date_from,
            date_to=date_to,
            time_from=time_from,
            time_to=time_to,
            mode=mode,
            thumbnail=upload,
            location=location,
            link=link,
            tags=tags,
        ),
    )
    return WorkshopResponse.from_entity(workshop)


@router.get("/upcoming", response_model=list[WorkshopResponse])
async def list_upcoming_workshops(
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    """Workshops starting today or later, earliest first."""
    workshops = await workshop_svc.list_upcoming_workshops(limit=limit)
    return [WorkshopResponse.from_entity(w) for w in workshops]


@router.get("/mine", response_model=list[WorkshopResponse])
async def list_my_workshops(
    identity: Annotated[Identity, Depends(get_identity)],
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    workshops = await workshop_svc.list_my_workshops(identity, limit=limit)
    return [WorkshopResponse.from_entity(w) for w in workshops]


@router.get("/filter", response_model=list[WorkshopResponse])
async def filter_workshops(
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
    tags: Annotated[list[str], Query()] = [],
    role: Annotated[Role | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
):
    workshops = await workshop_svc.list_filtered_workshops(tags, role, limit=limit)
    return [WorkshopResponse.from_entity(w) for w in workshops]


@router.get("/{workshop_id}", response_model=WorkshopResponse)
async def get_workshop(
    workshop_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
):
    """Workshop detail, including whether the caller is registered."""
    view = await workshop_svc.get_workshop(identity, workshop_id)
    return WorkshopResponse.from_entity(
        view.workshop, current_user_registered=view.current_user_registered
    )


@router.post(
    "/{workshop_id}/registrations",
    response_model=RegisterResponse,
    status_code=201,
    responses={409: {"description": "Already registered", "model": ErrorResponse}},
)
@limit_writes
async def register_for_workshop(
    request: Request,
    workshop_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    ledger: Annotated[RegistrationLedger, Depends(get_registration_ledger)],
):
    """Register the caller. Name and contact number are copied from their profile."""
    result = await ledger.register(identity, workshop_id)
    return RegisterResponse.from_result(result)


@router.get("/{workshop_id}/registrations", response_model=list[RegistrationResponse])
async def get_registration_details(
    workshop_id: str,
    identity: Annotated[Identity, Depends(get_identity)],
    workshop_svc: Annotated[WorkshopService, Depends(get_workshop_service)],
):
    """Registrants of the workshop; visible to its owner only."""
    registrations = await workshop_svc.get_registration_details(identity, workshop_id)
    return [RegistrationResponse.from_registration(r) for r in registrations]
