"""Document model and front-matter parsing/rendering utilities.

A document is a text file made of a metadata block followed by prose.
Two block syntaxes are recognized:

- YAML between ``---`` lines, parsed round-trip so comments and quote
  styles survive a rewrite.
- TOML between ``+++`` lines (read-only; never rewritten).

Pure parsing utilities (``parse_frontmatter``, ``order_frontmatter``,
``render_frontmatter``) live here so that the dependency direction stays
clean: infrastructure -> domain, never the reverse.
"""

from __future__ import annotations

import datetime as dt
import tomllib
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from postctl.domain.frontmatter import BaseFrontmatter, get_frontmatter_model
from postctl.domain.types import DocumentKind, FrontmatterFormat, classify

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful and a failed dump can leave a
    shared instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


# ---------------------------------------------------------------------------
# Canonical key ordering
# ---------------------------------------------------------------------------

CANONICAL_KEY_ORDER: list[str] = [
    "title",
    "type",
    "date",
    "draft",
    "employer",
    "client",
    "tags",
    "tools",
]

_DELIMITERS: dict[str, FrontmatterFormat] = {
    "---": FrontmatterFormat.YAML,
    "+++": FrontmatterFormat.TOML,
}


class FrontmatterError(ValueError):
    """Raised when a metadata block is present but cannot be parsed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


# ---------------------------------------------------------------------------
# Pure parsing / rendering utilities
# ---------------------------------------------------------------------------


def detect_format(content: str) -> FrontmatterFormat | None:
    """Return the block syntax announced by the first line, if any."""
    first = content.lstrip("\ufeff").split("\n", 1)[0].strip()
    return _DELIMITERS.get(first)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse the metadata block and body from document text.

    The first line must be ``---`` (YAML) or ``+++`` (TOML); the next line
    holding the same delimiter closes the block. Everything after is the
    body. Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. Text without an opening
        delimiter returns ``({}, content)``.

    Raises:
        FrontmatterError: The block is unterminated, syntactically invalid,
            or its top-level value is not a mapping.
    """
    normalized = content.replace("\r\n", "\n").lstrip("\ufeff")
    fmt = detect_format(normalized)
    if fmt is None:
        return {}, content

    lines = normalized.split("\n")
    delimiter = lines[0].strip()

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == delimiter:
            end_idx = i
            break

    if end_idx is None:
        msg = f"front matter opened with {delimiter!r} is never closed"
        raise FrontmatterError(msg, line=1)

    block = "\n".join(lines[1:end_idx]) + "\n"
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]

    if fmt is FrontmatterFormat.TOML:
        fm = _load_toml(block)
    else:
        fm = _load_yaml(block)
    return fm, body


def _load_yaml(block: str) -> dict[str, Any]:
    try:
        data = _new_yaml().load(block)
    except YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        # +2: one for the opening delimiter, one for 0-based marks
        line = mark.line + 2 if mark is not None else None
        raise FrontmatterError(f"invalid YAML front matter: {exc}", line=line) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"front matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(msg, line=2)
    return data


def _load_toml(block: str) -> dict[str, Any]:
    try:
        return tomllib.loads(block)
    except tomllib.TOMLDecodeError as exc:
        raise FrontmatterError(f"invalid TOML front matter: {exc}") from exc


def order_frontmatter(fm: dict[str, Any]) -> CommentedMap:
    """Return a copy of *fm* with keys in canonical order.

    Keys present in :data:`CANONICAL_KEY_ORDER` come first (in that
    order), followed by any remaining keys sorted alphabetically.
    ``None`` values are omitted. Comments loaded with the mapping travel
    with their keys.
    """
    canonical = [key for key in CANONICAL_KEY_ORDER if key in fm]
    rest = sorted((key for key in fm if key not in CANONICAL_KEY_ORDER), key=str)

    ordered = CommentedMap()
    for key in canonical + rest:
        if fm[key] is not None:
            ordered[key] = fm[key]

    if isinstance(fm, CommentedMap):
        ordered.ca.comment = fm.ca.comment
        for key in ordered:
            if key in fm.ca.items:
                ordered.ca.items[key] = fm.ca.items[key]
    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str, *, newline: str = "\n") -> str:
    """Render a front-matter dict and body text as a YAML-fronted document.

    *body* uses ``\\n`` line endings; *newline* sets the endings written.
    """
    ordered = order_frontmatter(frontmatter)
    buf = StringIO()
    _new_yaml().dump(ordered, buf)
    yaml_text = buf.getvalue()

    parts = ["---", "\n", yaml_text, "---", "\n"]
    if body:
        parts.append(body)
    text = "".join(parts)
    return text.replace("\n", newline) if newline != "\n" else text


def to_plain(value: Any) -> Any:
    """Convert loader-specific containers and scalars into JSON-friendly builtins."""
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, bool):
        return bool(value)
    if isinstance(value, str):
        return str(value)
    return value


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Document:
    """One parsed content file.

    Attributes:
        path: Location relative to the content root (the document's identity).
        frontmatter: Raw metadata mapping as loaded.
        body: Everything after the metadata block.
        format: Block syntax, or None when the file has no metadata block.
        newline: Line ending of the source file, restored on rewrite.
    """

    path: Path
    frontmatter: dict[str, Any]
    body: str
    format: FrontmatterFormat | None = None
    newline: str = "\n"

    @classmethod
    def from_text(cls, path: Path, content: str) -> Document:
        """Parse *content*; propagates :class:`FrontmatterError`."""
        fm, body = parse_frontmatter(content)
        first_line = content.split("\n", 1)[0]
        return cls(
            path=path,
            frontmatter=fm,
            body=body,
            format=detect_format(content),
            newline="\r\n" if first_line.endswith("\r") else "\n",
        )

    @property
    def kind(self) -> DocumentKind:
        return classify(self.frontmatter)

    def model(self) -> BaseFrontmatter:
        """Validate the front matter against the model for this document's kind.

        Raises:
            pydantic.ValidationError: A field has the wrong shape.
        """
        return get_frontmatter_model(self.kind).model_validate(dict(self.frontmatter))

    def summary(self, model: BaseFrontmatter) -> dict[str, Any]:
        """Compact listing row built from a validated *model*."""
        return {
            "path": self.path.as_posix(),
            "title": model.title,
            "kind": str(self.kind),
            "date": model.date.isoformat() if model.date else None,
            "draft": model.draft,
            "tags": model.all_tags(),
        }
