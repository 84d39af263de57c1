"""Document renderer — converts Markdown source to an HTML fragment.

The dispatcher depends only on the :class:`DocumentRenderer` protocol, so a
different converter can be swapped in without touching routing.  The default
:class:`MarkdownRenderer` uses Patitas with common extensions enabled.
Raw HTML in the source passes through unescaped.
"""

from __future__ import annotations

from typing import Protocol

from flowerstall._errors import RenderError


class DocumentRenderer(Protocol):
    """Converts document source (front matter already stripped) to markup."""

    def render(self, source: str) -> str:
        """Return HTML for *source*.  Raises RenderError on failure."""
        ...


class MarkdownRenderer:
    """Renders CommonMark plus tables via Patitas.

    The Patitas ``Markdown`` instance is created lazily on first use and
    reused for every subsequent document.

    Args:
        plugins: Patitas plugin names to enable.

    """

    def __init__(self, plugins: tuple[str, ...] = ("table",)) -> None:
        self._plugins = plugins
        self._md: object | None = None

    def render(self, source: str) -> str:
        md = self._md
        if md is None:
            from patitas import Markdown

            md = self._md = Markdown(plugins=list(self._plugins))

        try:
            return str(md(source))  # type: ignore[operator]
        except Exception as exc:
            msg = f"Markdown conversion failed: {exc}"
            raise RenderError(msg) from exc
