"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    # The client posts its signed-in user; anything beyond email rides along
    # into the token payload.
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., min_length=3, max_length=320)


class SuccessResponse(BaseModel):
    success: bool = True
