"""Session cookie decoding and credential forwarding to the notes API.

The session token is issued by the notes API as a compact JOSE
serialization. Its protected header carries the session and user ids in
clear text. This module reads those claims without checking the token's
authenticity: the notes API re-validates the token on every call it
receives, so the claims are only a convenience for building URLs.
"""

import base64
import json
from collections.abc import Mapping
from uuid import UUID

import httpx
import pydantic
import structlog
from pydantic import BaseModel

logger = structlog.get_logger(__name__)

SESSION_TOKEN_COOKIE = "sessionToken"
USER_ID_COOKIE = "userId"

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Token headers are a few hundred bytes; anything far larger is not ours
MAX_HEADER_LENGTH = 4096


class Session(BaseModel):
    """Request-scoped session decoded from the session cookie."""

    token: str  # Opaque credential, forwarded as-is
    id: UUID  # Session id claim (unverified)
    user_id: UUID  # User id claim (unverified)

    model_config = {"frozen": True}


def _b64url_decode(segment: str) -> bytes:
    padding = "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(segment + padding)


def decode_session_token(token: str) -> Session | None:
    """Decode the unverified header claims of a session token.

    Returns None for anything that is not a well-formed token with UUID
    `session_id` and `user_id` header claims.
    """
    parts = token.split(".")
    if len(parts) < 3 or not parts[0] or len(parts[0]) > MAX_HEADER_LENGTH:
        return None

    try:
        header = json.loads(_b64url_decode(parts[0]))
    except (ValueError, RecursionError):
        return None

    if not isinstance(header, dict):
        return None

    session_id = header.get("session_id")
    user_id = header.get("user_id")
    if not isinstance(session_id, str) or not isinstance(user_id, str):
        return None

    try:
        return Session(token=token, id=session_id, user_id=user_id)
    except pydantic.ValidationError:
        return None


def read_session(cookies: Mapping[str, str]) -> Session | None:
    """Build the session from request cookies, if any."""
    token = cookies.get(SESSION_TOKEN_COOKIE)
    if not token:
        return None
    session = decode_session_token(token)
    if session is None:
        logger.debug("Ignoring malformed session cookie")
    return session


def _origin(url: httpx.URL) -> tuple[str, int | None]:
    return url.host, url.port or _DEFAULT_PORTS.get(url.scheme)


def forward_credentials(session: Session | None, target: httpx.URL, backend: httpx.URL) -> dict[str, str]:
    """Headers to add to an outbound request.

    Only requests to the notes API host (matched by hostname and port) carry
    the bearer token.
    """
    if session is None:
        return {}
    if _origin(target) != _origin(backend):
        return {}
    return {"Authorization": f"Bearer {session.token}"}
