"""Firestore document <-> domain mapping for posts, workshops and profiles.

Stored documents use the web client's camelCase field names. Multi-line text
(post content, workshop description) is stored newline-escaped.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import MediaKind, Role, VerificationState, WorkshopMode
from cowconnect.domain.value_objects.core import (
    Attestation,
    MediaRef,
    ProfileSnapshot,
    Registration,
    TimeOfDay,
)
from cowconnect.domain.value_objects.profiles import parse_role_details
from cowconnect.shared.utils.datetime import ensure_utc, utc_now
from cowconnect.shared.utils.text import escape_newlines, unescape_newlines


def snapshot_to_dict(snapshot: ProfileSnapshot) -> dict[str, Any]:
    return {"name": snapshot.name, "profilePic": snapshot.profile_pic}


def _snapshot_from(data: dict[str, Any] | None) -> ProfileSnapshot:
    data = data or {}
    return ProfileSnapshot(
        name=data.get("name", ""), profile_pic=data.get("profilePic") or ""
    )


def attestation_to_dict(attestation: Attestation) -> dict[str, Any]:
    return {
        "id": attestation.attester_id,
        "role": attestation.role.value,
        "name": attestation.name,
        "profilePic": attestation.profile_pic,
    }


def registration_to_dict(registration: Registration) -> dict[str, Any]:
    return {
        "id": registration.user_id,
        "name": registration.name,
        "contactNo": registration.contact_no,
        "role": registration.role.value,
    }


def _first_per_id(items: Any, key: str) -> list[dict[str, Any]]:
    """Keep the first entry per id; racing ArrayUnion writes can store two."""
    seen: set[str] = set()
    unique = []
    for item in items or []:
        if item[key] in seen:
            continue
        seen.add(item[key])
        unique.append(item)
    return unique


def _timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return utc_now()


def post_to_document(post: PostEntity) -> dict[str, Any]:
    """Full post document as written at creation."""
    return {
        "id": post.id,
        "ownerId": post.owner_id,
        "ownerRole": post.owner_role.value,
        "content": escape_newlines(post.content),
        "media": (
            {"kind": post.media.kind.value, "url": post.media.url}
            if post.media
            else None
        ),
        "filters": list(post.tags),
        "verificationState": post.verification_state.value,
        "attestations": [attestation_to_dict(a) for a in post.attestations],
        "profileData": snapshot_to_dict(post.owner_profile),
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
    }


def post_from_document(doc_id: str, data: dict[str, Any]) -> PostEntity:
    """Build a PostEntity from a stored document.

    Raises:
        KeyError, ValueError: If the document is missing required fields or holds
            unknown enum values.
    """
    media_data = data.get("media")
    media = (
        MediaRef(kind=MediaKind(media_data["kind"]), url=media_data["url"])
        if media_data
        else None
    )
    attestations = tuple(
        Attestation(
            attester_id=a["id"],
            role=Role(a["role"]),
            name=a.get("name", ""),
            profile_pic=a.get("profilePic") or "",
        )
        for a in _first_per_id(data.get("attestations"), "id")
    )
    if attestations:
        state = VerificationState.VERIFIED
    else:
        state = VerificationState(data.get("verificationState") or "unverified")
    return PostEntity(
        id=doc_id,
        owner_id=data["ownerId"],
        owner_role=Role(data["ownerRole"]),
        content=unescape_newlines(data.get("content") or ""),
        media=media,
        tags=tuple(data.get("filters") or ()),
        verification_state=state,
        attestations=attestations,
        owner_profile=_snapshot_from(data.get("profileData")),
        created_at=_timestamp(data.get("createdAt")),
        updated_at=_timestamp(data.get("updatedAt")),
    )


def workshop_to_document(workshop: WorkshopEntity) -> dict[str, Any]:
    """Full workshop document as written at creation."""
    return {
        "id": workshop.id,
        "owner": workshop.owner_id,
        "role": workshop.owner_role.value,
        "title": workshop.title,
        "description": escape_newlines(workshop.description),
        "dateFrom": workshop.date_from,
        "dateTo": workshop.date_to,
        "timeFrom": workshop.time_from.value,
        "timeTo": workshop.time_to.value,
        "mode": workshop.mode.value,
        "location": workshop.location,
        "link": workshop.link,
        "thumbnail": workshop.thumbnail,
        "filters": list(workshop.tags),
        "profileData": snapshot_to_dict(workshop.owner_profile),
        "registrations": [registration_to_dict(r) for r in workshop.registrations],
        "createdAt": workshop.created_at,
        "updatedAt": workshop.updated_at,
    }


def workshop_from_document(doc_id: str, data: dict[str, Any]) -> WorkshopEntity:
    """Build a WorkshopEntity from a stored document.

    Raises:
        KeyError, ValueError: If the document is missing required fields or holds
            invalid values.
    """
    registrations = tuple(
        Registration(
            user_id=r["id"],
            name=r.get("name", ""),
            contact_no=r.get("contactNo", ""),
            role=Role(r["role"]),
        )
        for r in _first_per_id(data.get("registrations"), "id")
    )
    return WorkshopEntity(
        id=doc_id,
        owner_id=data["owner"],
        owner_role=Role(data["role"]),
        title=data.get("title", ""),
        description=unescape_newlines(data.get("description") or ""),
        date_from=_timestamp(data.get("dateFrom")),
        date_to=_timestamp(data.get("dateTo")),
        time_from=TimeOfDay(data["timeFrom"]),
        time_to=TimeOfDay(data["timeTo"]),
        mode=WorkshopMode(data["mode"]),
        location=data.get("location") or None,
        link=data.get("link") or None,
        thumbnail=data.get("thumbnail") or "",
        tags=tuple(data.get("filters") or ()),
        owner_profile=_snapshot_from(data.get("profileData")),
        registrations=registrations,
        created_at=_timestamp(data.get("createdAt")),
        updated_at=_timestamp(data.get("updatedAt")),
    )


def profile_from_document(
    doc_id: str, collection: str, data: dict[str, Any]
) -> ProfileResult:
    """Build a ProfileResult; role-specific fields are read from the top level.

    Farmer documents may omit the role field; the collection implies it.

    Raises:
        KeyError, ValueError: If the stored role is missing or unknown.
    """
    default = Role.FARMER.value if collection == Role.FARMER.profile_collection else None
    role = Role(data.get("role") or default)
    return ProfileResult(
        id=doc_id,
        collection=collection,
        role=role,
        name=data.get("name", ""),
        contact_no=str(data.get("contactNo", "")),
        profile_pic=data.get("profilePic") or "",
        details=parse_role_details(role, data),
        workshops=tuple(data.get("workshops") or ()),
        posts=tuple(data.get("posts") or ()),
        registrations=tuple(data.get("registrations") or ()),
    )
