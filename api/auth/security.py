"""
Auth security helpers.
"""

from __future__ import annotations

import time
from typing import Any

import jwt

from core import settings

# Registered JWT claims PyJWT validates on decode; a posted user object must
# not be able to set them.
REGISTERED_CLAIMS = frozenset({"type", "iat", "exp", "nbf", "sub", "aud", "iss", "jti"})


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    return settings.jwt_secret()


def jwt_algorithm() -> str:
    return settings.jwt_algorithm()


def access_token_expire_minutes() -> int:
    return settings.access_token_expire_minutes()


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(user: dict[str, Any]) -> str:
    """
    Sign the user object plus the standard time claims. Registered claims
    in the user object are dropped.
    """
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        **{k: v for (k, v) in user.items() if k not in REGISTERED_CLAIMS},
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
