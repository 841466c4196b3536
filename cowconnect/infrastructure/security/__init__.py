"""Security: Firebase ID token verification."""

from cowconnect.infrastructure.security.firebase_auth import verify_id_token

__all__ = ["verify_id_token"]
