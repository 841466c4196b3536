"""Firebase ID token verification.

Uses google-auth to check the token signature against Google's public
certificates and the audience against the Firebase project id. Certificate
fetching is blocking I/O, so verification runs in a worker thread.
"""

import asyncio
from typing import Any

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from cowconnect.core.config import get_settings


def _verify_sync(token: str, project_id: str | None) -> dict[str, Any]:
    return id_token.verify_firebase_token(
        token, google_requests.Request(), audience=project_id
    )


async def verify_id_token(token: str, project_id: str | None = None) -> dict[str, Any]:
    """Verify a Firebase ID token and return its claims.

    Args:
        token: ID token from the Authorization header.
        project_id: Expected audience; defaults to settings.firebase_project_id.

    Returns:
        Decoded claims (``sub`` is the Firebase uid).

    Raises:
        ValueError: If the token is invalid, expired, or has no subject.
    """
    audience = project_id or get_settings().firebase_project_id
    if not audience:
        raise ValueError("Firebase project id is not configured")
    try:
        claims = await asyncio.to_thread(_verify_sync, token, audience)
    except (ValueError, google_exceptions.GoogleAuthError) as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not claims or not claims.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return claims
