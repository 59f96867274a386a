"""BaseService: foundation for all postctl services.

Every service receives a :class:`ContentRepository` at construction time.
Services that rewrite files own their transaction boundaries via
``self._repo.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from postctl.config.settings import PostSettings
    from postctl.infrastructure.repository import ContentRepository


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, repo: ContentRepository) -> None:
        self._repo = repo

    @property
    def _settings(self) -> PostSettings:
        return self._repo.settings
