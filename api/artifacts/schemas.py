"""
Artifact API schemas and wire/column name mapping.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# JSON field name -> column name for the fields `update` may overwrite.
MUTABLE_FIELDS: dict[str, str] = {
    "name": "name",
    "image": "image",
    "type": "type",
    "historicalContext": "historical_context",
    "createdAt": "created_at",
    "discoveredAt": "discovered_at",
    "discoveredBy": "discovered_by",
    "presentLocation": "present_location",
}

OWNER_FIELD = "addedByEmail"

# Stored in dedicated columns on create (owner is set once, never updated).
CREATE_FIELDS: dict[str, str] = {**MUTABLE_FIELDS, OWNER_FIELD: "added_by_email"}

# Keys a client may send but that the store owns.
RESERVED_FIELDS = frozenset({"_id", "likes", "likedBy", "isLikedByUser"})

LIKE_ACTIONS = ("like", "dislike")


class LikeRequest(BaseModel):
    action: str = Field(..., min_length=1, max_length=20)
    email: str = Field(..., min_length=1, max_length=320)
