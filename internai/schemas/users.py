from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from internai.catalog.normalizer import normalize_skills


class UserProfile(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    skills: list[str] = Field(default_factory=list)
    region: str | None = None


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)
    skills: list[str] | None = Field(default=None, max_length=100)
    region: str | None = Field(default=None, max_length=100)

    @field_validator("skills")
    @classmethod
    def _dedupe_skills(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return normalize_skills(value)

    @field_validator("region")
    @classmethod
    def _blank_region_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None
