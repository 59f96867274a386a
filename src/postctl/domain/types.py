"""Document kinds and front-matter block formats."""

from __future__ import annotations

from enum import StrEnum


class DocumentKind(StrEnum):
    """Kinds of documents found in the content tree."""

    POST = "post"
    WORK = "work"


class FrontmatterFormat(StrEnum):
    """Syntaxes accepted for the metadata block."""

    YAML = "yaml"
    TOML = "toml"


# Keys whose presence marks a document as a work-history entry.
WORK_KEYS: frozenset[str] = frozenset({"employer", "client", "tools"})


def classify(frontmatter: dict[str, object]) -> DocumentKind:
    """Decide the kind of a document from its front matter.

    An explicit ``type: work`` wins; otherwise any of :data:`WORK_KEYS`
    marks a work entry. Everything else is a post.

    Examples:
        >>> classify({"title": "Hello"})
        <DocumentKind.POST: 'post'>
        >>> classify({"title": "Acme", "employer": {"name": "Acme"}})
        <DocumentKind.WORK: 'work'>
    """
    declared = frontmatter.get("type")
    if isinstance(declared, str) and declared.strip().lower() == DocumentKind.WORK:
        return DocumentKind.WORK
    if WORK_KEYS & frontmatter.keys():
        return DocumentKind.WORK
    return DocumentKind.POST
