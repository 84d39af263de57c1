"""Shared test fixtures for flowerstall."""

from __future__ import annotations

from pathlib import Path

import pytest

from flowerstall.config import PreviewConfig


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Create a small document tree for testing.

    Layout::

        site/
          index.md            (with front matter)
          about.md
          guide/index.md
          guide/setup.md
          notes/              (directory, no index)
          style.css
          custom.css
          logo.bin
        secret.txt            (sibling of the root, must never be served)
        site-private/key.txt  (shares the root's name prefix)

    Returns the path to ``site/``.
    """
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.md").write_text(
        "---\ntitle: Home\n---\n\n# Welcome\n\nThis is the home page.\n"
    )
    (root / "about.md").write_text("# About\n\nAbout this site.\n")

    guide = root / "guide"
    guide.mkdir()
    (guide / "index.md").write_text("# Guide\n\nStart here.\n")
    (guide / "setup.md").write_text("# Setup\n\nInstall it.\n")

    (root / "notes").mkdir()
    (root / "style.css").write_text("body { margin: 0; }\n")
    (root / "custom.css").write_text("h1 { color: teal; }\n")
    (root / "logo.bin").write_bytes(bytes(range(256)) * 4)

    (tmp_path / "secret.txt").write_text("top secret\n")
    private = tmp_path / "site-private"
    private.mkdir()
    (private / "key.txt").write_text("private key\n")

    return root


@pytest.fixture
def directory_config(docs_root: Path) -> PreviewConfig:
    """Directory-mode config over ``docs_root`` with live reload off."""
    return PreviewConfig(root=docs_root, livereload=False)


@pytest.fixture
def document_config(docs_root: Path) -> PreviewConfig:
    """Single-document config serving ``about.md``."""
    return PreviewConfig(
        root=docs_root,
        document=docs_root / "about.md",
        livereload=False,
        stylesheets=(docs_root / "custom.css",),
    )
