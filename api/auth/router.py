"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from . import schemas, service

router = APIRouter()


@router.post("/jwt")
async def create_token(payload: schemas.TokenRequest, response: Response) -> schemas.SuccessResponse:
    return service.issue_token(payload, response)


@router.post("/logout")
async def logout(response: Response) -> schemas.SuccessResponse:
    return service.logout(response)
