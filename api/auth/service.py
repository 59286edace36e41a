"""
Auth business logic.

Token transport is a cookie named `token`; signing lives in `security`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Response, status

from core import settings

from . import schemas, security

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"


def _cookie_options() -> dict[str, Any]:
    production = settings.is_production()
    return {
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "strict",
    }


def issue_token(payload: schemas.TokenRequest, response: Response) -> schemas.SuccessResponse:
    user = payload.model_dump()
    email = str(user.get("email") or "").strip()
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email is required.",
        )
    claims = {**user, "email": email}

    token = security.build_access_token(claims)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=security.access_token_expire_minutes() * 60,
        **_cookie_options(),
    )
    logger.info("token_issued email=%s", email)
    return schemas.SuccessResponse()


def logout(response: Response) -> schemas.SuccessResponse:
    response.delete_cookie(TOKEN_COOKIE, **_cookie_options())
    return schemas.SuccessResponse()


def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    email = str(payload.get("email") or "").strip()
    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )
    payload["email"] = email
    return payload


def ensure_owner(current_user: dict, email: str | None) -> str:
    """
    The one authorization rule: you may only list your own artifacts.
    """
    requested = (email or "").strip()
    if not requested or requested != str(current_user.get("email") or ""):
        logger.info("owner_mismatch requested=%s", requested or "-")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden access.",
        )
    return requested
