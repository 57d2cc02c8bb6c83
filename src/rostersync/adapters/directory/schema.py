"""Pydantic models describing organization-member payloads (GitHub REST shape)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DirectoryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class MemberPayload(DirectoryBaseModel):
    login: str = Field(min_length=1)
    id: int | None = None
    type: str | None = None
    site_admin: bool = False
    permissions: dict[str, bool] = Field(default_factory=dict)

    @field_validator("login", mode="before")
    @classmethod
    def _strip_login(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("permissions", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value
