"""
ogm.validators — Input schemas for permission-relevant mutations
=================================================================

Request bodies that change who can see or do what.  Handlers parse these
before calling the guards, so bad role names and non-positive levels never
reach the access rules.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from ogm.constants import LEADERBOARD_LIMIT, LEADERBOARD_MAX_LIMIT


class RoleUpdate(BaseModel):
    member_id: str
    # Ownership is transferred, never assigned.
    role: Literal["admin", "moderator", "member"]


class AwardPointsInput(BaseModel):
    member_id: str
    points: int = Field(gt=0)
    reason: str | None = None


class CourseUnlockUpdate(BaseModel):
    unlock_ghl_tag: str | None = Field(default=None, max_length=255)
    unlock_level: int | None = Field(default=None, gt=0)

    @field_validator("unlock_ghl_tag")
    @classmethod
    def _blank_tag_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ChannelAccessUpdate(BaseModel):
    is_private: bool = False
    required_ghl_tags: list[str] = Field(default_factory=list)

    @field_validator("required_ghl_tags")
    @classmethod
    def _clean_tags(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class GhlTagSync(BaseModel):
    member_id: str
    tags: list[str] = Field(default_factory=list)


class LeaderboardQuery(BaseModel):
    community_id: str
    limit: int = Field(default=LEADERBOARD_LIMIT, ge=1, le=LEADERBOARD_MAX_LIMIT)
