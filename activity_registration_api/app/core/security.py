"""
Bearer-token authentication.

Tokens are compact JWTs signed with HMAC-SHA256 using the application's
secret key.  The ``sub`` claim carries the user's stable identifier
(a UUID issued by the account system); registrations are recorded
against it verbatim.  A token whose ``role`` claim is ``"admin"``, or
the static ``ADMIN_TOKEN`` from the settings, grants administrative
access.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


ADMIN_ROLE = "admin"


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64_url_decode(segment: str) -> bytes:
    # Token segments are sent without "=" padding.
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _sign(signing_input: bytes) -> bytes:
    return hmac.new(settings.secret_key.encode("utf-8"), signing_input, hashlib.sha256).digest()


def _same_secret(presented: str, expected: str) -> bool:
    """Constant-time comparison that also accepts non-ASCII input."""
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def create_access_token(claims: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Issue a token for one registrant or administrator.

    Parameters
    ----------
    claims : dict
        ``sub`` is the registrant's UUID, under which signups are stored;
        add ``"role": "admin"`` for a token that may create activities.
    expires_delta : Optional[int]
        Lifetime in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``; a negative value
        yields an already expired token.

    Returns
    -------
    str
        ``header.claims.signature``, each part base64url encoded.
    """
    lifetime = settings.access_token_expire_minutes * 60 if expires_delta is None else expires_delta
    body = dict(claims, exp=int(time.time()) + lifetime)
    segments = [
        _b64_url_encode(json.dumps(part, separators=(",", ":")).encode("utf-8"))
        for part in ({"alg": "HS256", "typ": "JWT"}, body)
    ]
    signing_input = ".".join(segments).encode("ascii")
    return ".".join(segments + [_b64_url_encode(_sign(signing_input))])


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims of a token issued by ``create_access_token``.

    Returns ``None`` if the token is malformed, its signature does not
    match or it has expired.  The claims are not otherwise validated.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, claims_b64, signature_b64 = parts
    try:
        signing_input = f"{header_b64}.{claims_b64}".encode("ascii")
        if not hmac.compare_digest(_sign(signing_input), _b64_url_decode(signature_b64)):
            return None
        claims = json.loads(_b64_url_decode(claims_b64).decode("utf-8"))
    except ValueError:
        return None
    if not isinstance(claims, dict) or not isinstance(claims.get("exp"), int):
        return None
    if claims["exp"] < int(time.time()):
        return None
    return claims


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency that returns the claims of the authenticated caller.

    The static ``ADMIN_TOKEN`` yields administrator claims without a
    ``sub``.  Any other token must be valid, unexpired and carry a
    non-empty string ``sub``; otherwise HTTP 401 is raised.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    token = credentials.credentials

    if settings.admin_token and _same_secret(token, settings.admin_token):
        return {"sub": None, "role": ADMIN_ROLE}

    claims = decode_access_token(token)
    if not claims:
        raise _unauthorized("Invalid or expired token")
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise _unauthorized("Token does not identify a user")
    return claims


def require_user(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency for routes acting on the caller's own registrations.

    The static admin token has no user identity and gets HTTP 403.
    """
    if current_user.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The admin token cannot hold registrations",
        )
    return current_user


def require_admin(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency that only lets administrators through (HTTP 403 otherwise)."""
    if current_user.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user
