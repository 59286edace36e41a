"""
Artifact business logic.

Scope:
- id validation (malformed ids never reach the store)
- row -> JSON document mapping
- NotFound handling for single-artifact operations
- like/dislike toggling
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from fastapi import HTTPException, status

from core import settings

from . import repository, schemas

logger = logging.getLogger(__name__)

ARTIFACT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def validate_artifact_id(artifact_id: str) -> str:
    raw = (artifact_id or "").strip()
    if not ARTIFACT_ID_PATTERN.match(raw):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid artifact id.",
        )
    return raw.lower()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Artifact not found.",
    )


def _decode_extra(raw: Any) -> dict:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, str) and raw:
        value = json.loads(raw)
        return value if isinstance(value, dict) else {}
    return {}


def to_artifact(row: dict) -> dict:
    """
    Build the JSON document for one artifact row.

    Extra keys come first so a stored extra can never shadow a real column.
    """
    doc = _decode_extra(row.get("extra"))
    doc["_id"] = str(row["id"]).strip()
    for field, column in schemas.CREATE_FIELDS.items():
        doc[field] = row.get(column)
    doc["likes"] = int(row.get("likes") or 0)
    doc["likedBy"] = list(row.get("liked_by") or [])
    return doc


def _split_fields(body: dict[str, Any], allowed: dict[str, str]) -> tuple[dict[str, str | None], dict]:
    """
    Split a request body into column values and leftover keys.

    Values of known fields must be strings (or null).
    """
    values: dict[str, str | None] = {}
    extra: dict = {}
    for key, value in body.items():
        if key in schemas.RESERVED_FIELDS:
            continue
        column = allowed.get(key)
        if column is None:
            extra[key] = value
            continue
        if value is not None and not isinstance(value, str):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Field '{key}' must be a string.",
            )
        values[column] = value
    return values, extra


async def list_artifacts() -> list[dict]:
    rows = await repository.list_artifacts()
    return [to_artifact(r) for r in rows]


async def top_artifacts(limit: int | None = None) -> list[dict]:
    n = limit if limit is not None else settings.top_artifacts_limit()
    if n < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="limit must be at least 1.")
    rows = await repository.list_top_artifacts(n)
    return [to_artifact(r) for r in rows]


async def get_artifact(artifact_id: str) -> dict:
    artifact_id = validate_artifact_id(artifact_id)
    row = await repository.get_artifact(artifact_id)
    if row is None:
        raise _not_found()
    return to_artifact(row)


async def artifact_details(artifact_id: str, *, requester_email: str | None = None) -> dict:
    doc = await get_artifact(artifact_id)
    email = (requester_email or "").strip()
    doc["isLikedByUser"] = bool(email) and email in doc["likedBy"]
    return doc


async def artifacts_by_owner(email: str) -> list[dict]:
    rows = await repository.list_artifacts_by_owner(email)
    return [to_artifact(r) for r in rows]


async def artifacts_liked_by(email: str) -> list[dict]:
    rows = await repository.list_artifacts_liked_by(email)
    return [to_artifact(r) for r in rows]


async def create_artifact(body: dict[str, Any]) -> str:
    values, extra = _split_fields(body, schemas.CREATE_FIELDS)
    artifact_id = await repository.insert_artifact(values, extra=extra)
    logger.info(
        "artifact_created id=%s owner=%s extra_keys=%s",
        artifact_id,
        values.get("added_by_email"),
        len(extra),
    )
    return artifact_id


async def update_artifact(artifact_id: str, body: dict[str, Any]) -> dict:
    artifact_id = validate_artifact_id(artifact_id)
    # Owner and unknown keys are dropped here; only mutable columns pass.
    values, _ = _split_fields(body, schemas.MUTABLE_FIELDS)
    matched = await repository.update_artifact(artifact_id, values)
    if matched == 0:
        raise _not_found()
    logger.info("artifact_updated id=%s fields=%s", artifact_id, ",".join(sorted(values)))
    return {
        "acknowledged": True,
        "matchedCount": matched,
        "modifiedCount": matched if values else 0,
    }


async def delete_artifact(artifact_id: str) -> dict:
    artifact_id = validate_artifact_id(artifact_id)
    deleted = await repository.delete_artifact(artifact_id)
    if deleted == 0:
        raise _not_found()
    logger.info("artifact_deleted id=%s", artifact_id)
    return {"acknowledged": True, "deletedCount": deleted}


async def toggle_like(artifact_id: str, *, email: str, action: str) -> dict:
    artifact_id = validate_artifact_id(artifact_id)
    action = (action or "").strip().lower()
    if action not in schemas.LIKE_ACTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"action must be one of {list(schemas.LIKE_ACTIONS)}.",
        )
    email = (email or "").strip()
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="email is required.")

    row = await repository.toggle_like(
        artifact_id,
        email=email,
        action=action,
        strict=settings.likes_strict(),
    )
    if row is None:
        raise _not_found()

    doc = to_artifact(row)
    logger.info("artifact_%sd id=%s likes=%s", action, artifact_id, doc["likes"])
    return doc
