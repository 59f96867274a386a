"""Tests for the configuration section models."""

import pytest
from pydantic import ValidationError

from postctl.config.models import ContentConfig, LintConfig


class TestDefaults:
    def test_content(self) -> None:
        cfg = ContentConfig()
        assert cfg.dirs == ["."]
        assert ".md" in cfg.extensions
        assert ".git" in cfg.skip_dirs

    def test_lint(self) -> None:
        cfg = LintConfig()
        assert cfg.require_date is False
        assert cfg.allow_future_dates is False
        assert cfg.check_links is True


class TestValidation:
    def test_sparse_dict(self) -> None:
        cfg = LintConfig.model_validate({"max_title_length": 70})
        assert cfg.max_title_length == 70
        assert cfg.check_links is True

    def test_extensions_normalized(self) -> None:
        cfg = ContentConfig.model_validate({"extensions": ["md", ".MARKDOWN"]})
        assert cfg.extensions == [".md", ".markdown"]

    def test_rejects_bad_types(self) -> None:
        with pytest.raises(ValidationError):
            ContentConfig.model_validate({"dirs": "content"})

    def test_frozen(self) -> None:
        cfg = LintConfig()
        with pytest.raises(Exception):
            cfg.require_date = True  # type: ignore[misc]
