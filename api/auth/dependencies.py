"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, Query, status

from . import service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized access.",
        )

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def get_access_token(
    token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> str:
    # Browsers send the cookie; scripts may use a bearer header instead.
    if token and token.strip():
        return token.strip()
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_access_token)) -> dict:
    return service.get_user_from_access_token(access_token)


async def require_owner(
    email: str | None = Query(default=None),
    current_user: dict = Depends(get_current_user),
) -> str:
    """
    Resolve the `email` query parameter, refusing anyone but its owner.
    """
    return service.ensure_owner(current_user, email)
