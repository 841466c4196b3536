"""Caller identity passed explicitly into every core operation."""

from dataclasses import dataclass

from cowconnect.domain.enums import Role
from cowconnect.domain.exceptions import AuthenticationException


@dataclass(frozen=True)
class Identity:
    """Who is calling. Built by the identity adapter, never read from globals.

    An anonymous identity has no user_id; operations reject it as
    unauthenticated. role is None for a signed-in user without a profile.
    """

    user_id: str | None
    role: Role | None = None
    display_name: str | None = None

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls(user_id=None)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_user_id(self) -> str:
        """Return user_id or raise AuthenticationException."""
        if not self.user_id:
            raise AuthenticationException()
        return self.user_id
