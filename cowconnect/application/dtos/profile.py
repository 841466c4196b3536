"""DTOs for profile reads."""

from dataclasses import dataclass, field

from cowconnect.domain.enums import Role
from cowconnect.domain.value_objects.core import ProfileSnapshot
from cowconnect.domain.value_objects.profiles import RoleDetails


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model (experts or farmers collection)."""

    id: str
    collection: str
    role: Role
    name: str
    contact_no: str
    profile_pic: str = ""
    details: RoleDetails | None = None
    workshops: tuple[str, ...] = field(default_factory=tuple)
    posts: tuple[str, ...] = field(default_factory=tuple)
    registrations: tuple[str, ...] = field(default_factory=tuple)

    def snapshot(self) -> ProfileSnapshot:
        """Denormalized name + avatar stored on posts and workshops."""
        return ProfileSnapshot(name=self.name.strip(), profile_pic=self.profile_pic or "")
