"""Template request/response schemas."""

import json
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from prd_creator.schemas.base import CamelModel


class TemplateCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    content: str = Field(..., min_length=1)  # markdown body with {{TOKENS}}
    tags: list[str] = []


class TemplateUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = Field(default=None, min_length=1)
    tags: list[str] | None = None


class TemplateSummary(CamelModel):
    """List view — content is fetched only through get."""

    id: str
    name: str
    description: str | None = None
    tags: list[str] = []
    version: int
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return json.loads(v) if v else []
        return v


class TemplateResponse(TemplateSummary):
    content: str
    deleted: bool = False


class TemplateVersionResponse(CamelModel):
    id: str
    template_id: str
    version: int
    content: str
    created_at: datetime


class TemplateImportEntry(CamelModel):
    """One element of an import/export JSON array."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    content: str = Field(..., min_length=1)
    tags: list[str] | None = None


# ── Tool arguments ─────────────────────────────────────────────────


class TemplateLookup(CamelModel):
    id_or_name: str = Field(..., min_length=1)


class TemplateUpdateRequest(TemplateUpdate):
    id: str = Field(..., min_length=1)


class TemplateIdRequest(CamelModel):
    id: str = Field(..., min_length=1)


class TemplateFileRequest(CamelModel):
    file_path: str = Field(..., min_length=1)
