"""Shared pytest fixtures and test helpers for postctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from postctl.config.settings import PostSettings
from postctl.infrastructure.repository import ContentRepository

HIGHER_ORDER_POST = """\
---
title: Higher-order functions in practice
date: 2019-03-01
draft: false
tags: [javascript, functional programming]
---

Passing functions around lets `filter` and `reduce` compose:

    const total = items.filter(isPaid).reduce(sum, 0);
"""

DRAFT_POST = """\
---
title: Notes on generators
date: 2020-01-10
draft: true
tags:
  - python
---

Half-written thoughts.
"""

WORK_ENTRY = """\
---
title: Senior Engineer
date: 2018-06-01
employer:
  name: Acme Corp
  link: https://acme.example
client:
  name: Globex
  link: https://globex.example
tools: [python, docker]
---

Built the billing pipeline.
"""


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's POSTCTL_* environment out of the tests."""
    monkeypatch.delenv("POSTCTL_CONFIG", raising=False)
    monkeypatch.delenv("POSTCTL_CONTENT_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Temporary content tree holding two posts and one work entry.

    Every document is clean under the default lint settings.
    """
    write_doc(tmp_path, "posts/higher-order-functions.md", HIGHER_ORDER_POST)
    write_doc(tmp_path, "posts/generators.md", DRAFT_POST)
    write_doc(tmp_path, "work/acme.md", WORK_ENTRY)
    return tmp_path


@pytest.fixture
def settings(content_root: Path) -> PostSettings:
    return PostSettings.from_cli(content_root=content_root)


@pytest.fixture
def repo(settings: PostSettings) -> ContentRepository:
    """Repository over the sample content tree."""
    return ContentRepository(settings)


@pytest.fixture
def _isolated_root(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the sample content tree so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(content_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_doc(root: Path, relative: str, text: str) -> Path:
    """Write a document under *root*, creating directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
