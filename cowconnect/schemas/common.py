"""Schemas shared by the post and workshop APIs."""

from pydantic import BaseModel, Field

from cowconnect.domain.value_objects.core import ProfileSnapshot


class ProfileSnapshotResponse(BaseModel):
    """Owner name and avatar captured when the item was created."""

    name: str
    profile_pic: str = ""

    @classmethod
    def from_snapshot(cls, snapshot: ProfileSnapshot) -> "ProfileSnapshotResponse":
        return cls(name=snapshot.name, profile_pic=snapshot.profile_pic)


class ErrorResponse(BaseModel):
    """Discriminated error body returned for every failed request."""

    error: str = Field(..., description="Machine-readable error code")
    message: str
    details: dict = Field(default_factory=dict)
    retryable: bool = Field(
        default=False, description="Whether resubmitting the same request may succeed"
    )
