"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, postctl.toml only contains
overrides. A content repository needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# --- postctl.toml sections ---


class ContentConfig(BaseModel):
    """[content] section."""

    model_config = {"frozen": True}

    dirs: list[str] = Field(default_factory=lambda: ["."])
    extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    skip_dirs: list[str] = Field(
        default_factory=lambda: [".git", "node_modules", "public", "resources"]
    )

    @field_validator("extensions")
    @classmethod
    def _dotted_lowercase(cls, v: list[str]) -> list[str]:
        """Accept ``md`` or ``.MD`` for ``.md``."""
        return [e.lower() if e.startswith(".") else f".{e.lower()}" for e in v]


class LintConfig(BaseModel):
    """[lint] section."""

    model_config = {"frozen": True}

    require_date: bool = False
    allow_future_dates: bool = False
    max_title_length: int = 120
    tag_pattern: str = r"^[a-z0-9][a-z0-9 .+#/-]*$"
    check_links: bool = True

