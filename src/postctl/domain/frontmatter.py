"""Front-matter schema models per document kind.

Canonical key ordering:
  title, type, date, draft, employer, client, tags, tools

All models use Pydantic with frozen config for immutability. Unknown keys
are allowed: site generators attach their own (slug, description, ...).
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, StrictBool, field_validator, model_validator

from postctl.domain.dates import as_calendar_date, coerce_date
from postctl.domain.types import DocumentKind


class Organization(BaseModel):
    """An employer or client reference: ``{name, link}``.

    A bare string is accepted as shorthand for ``{name: <string>}``.
    """

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    link: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class BaseFrontmatter(BaseModel):
    """Fields shared by every document kind."""

    model_config = {"frozen": True, "extra": "allow"}

    title: str
    date: dt.date | None = None
    draft: StrictBool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if value is None:
            return None
        return as_calendar_date(coerce_date(value))

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    def all_tags(self) -> list[str]:
        """Tags plus any kind-specific tag-like lists."""
        return list(self.tags)


class PostFrontmatter(BaseFrontmatter):
    """Front matter for a blog post."""


class WorkFrontmatter(BaseFrontmatter):
    """Front matter for a work-history entry."""

    employer: Organization | None = None
    client: Organization | None = None
    tools: list[str] = Field(default_factory=list)

    @field_validator("tools", mode="before")
    @classmethod
    def _null_tools(cls, value: Any) -> Any:
        return [] if value is None else value

    def all_tags(self) -> list[str]:
        return [*self.tags, *self.tools]


FRONTMATTER_MODELS: dict[DocumentKind, type[BaseFrontmatter]] = {
    DocumentKind.POST: PostFrontmatter,
    DocumentKind.WORK: WorkFrontmatter,
}


def get_frontmatter_model(kind: DocumentKind) -> type[BaseFrontmatter]:
    """Look up the front-matter model for a document kind."""
    return FRONTMATTER_MODELS[kind]
