"""
Artifact API endpoints.

Static paths (`/artifacts/top`, `/artifacts/liked`, `/artifacts/details/...`)
are declared before `/artifacts/{artifact_id}` so they are matched first.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.get("/artifacts")
async def list_artifacts() -> list[dict]:
    return await service.list_artifacts()


@router.get("/artifacts/top")
async def top_artifacts(limit: int | None = Query(default=None, ge=1, le=50)) -> list[dict]:
    return await service.top_artifacts(limit)


@router.get("/artifacts/details/{artifact_id}")
async def artifact_details(
    artifact_id: str,
    email: str | None = Query(default=None, max_length=320),
) -> dict:
    return await service.artifact_details(artifact_id, requester_email=email)


@router.get("/myArtifacts")
async def my_artifacts(email: str = Depends(auth_dependencies.require_owner)) -> list[dict]:
    return await service.artifacts_by_owner(email)


@router.get("/artifacts/liked")
async def liked_artifacts(email: str = Depends(auth_dependencies.require_owner)) -> list[dict]:
    return await service.artifacts_liked_by(email)


@router.get("/artifacts/{artifact_id}")
async def get_artifact(artifact_id: str) -> dict:
    return await service.get_artifact(artifact_id)


@router.post("/artifacts")
async def create_artifact(body: dict[str, Any] = Body(...)) -> dict:
    artifact_id = await service.create_artifact(body)
    return {"acknowledged": True, "insertedId": artifact_id}


@router.put("/artifacts/update/{artifact_id}")
async def update_artifact(artifact_id: str, body: dict[str, Any] = Body(...)) -> dict:
    return await service.update_artifact(artifact_id, body)


@router.put("/artifacts/{artifact_id}/like")
async def toggle_like(artifact_id: str, request: schemas.LikeRequest) -> dict:
    return await service.toggle_like(artifact_id, email=request.email, action=request.action)


@router.delete("/artifacts/{artifact_id}")
async def delete_artifact(artifact_id: str) -> dict:
    return await service.delete_artifact(artifact_id)
