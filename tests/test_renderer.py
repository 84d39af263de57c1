"""Tests for flowerstall.content.renderer — Markdown conversion."""

from __future__ import annotations

import re

import pytest

from flowerstall._errors import RenderError
from flowerstall.content.frontmatter import split_front_matter
from flowerstall.content.renderer import DocumentRenderer, MarkdownRenderer


@pytest.fixture
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


class TestMarkdownRenderer:
    """MarkdownRenderer — Patitas-backed conversion."""

    def test_heading(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("# Hello")
        assert re.search(r"<h1[^>]*>Hello</h1>", html)

    def test_inline_html_preserved(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render('Paragraph <div class="x">hi</div>')
        assert '<div class="x">hi</div>' in html

    def test_paragraph(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("Some *emphasis* here.")
        assert "<em>emphasis</em>" in html

    def test_table_plugin(self, renderer: MarkdownRenderer) -> None:
        html = renderer.render("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table" in html

    def test_instance_reused(self, renderer: MarkdownRenderer) -> None:
        renderer.render("one")
        first = renderer._md
        renderer.render("two")
        assert renderer._md is first

    def test_rendered_after_front_matter(self, renderer: MarkdownRenderer) -> None:
        source = split_front_matter("---\ntitle: Hidden\n---\n# Visible\n")
        html = renderer.render(source.body)
        assert "Visible" in html
        assert "Hidden" not in html

    def test_conversion_failure_wrapped(self, renderer: MarkdownRenderer) -> None:
        class _Broken:
            def __call__(self, source: str) -> str:
                raise ValueError("boom")

        renderer._md = _Broken()
        with pytest.raises(RenderError, match="boom"):
            renderer.render("# x")


class TestRendererProtocol:
    """Any object with render(str) -> str can stand in for the converter."""

    def test_custom_renderer_satisfies_protocol(self) -> None:
        class Upper:
            def render(self, source: str) -> str:
                return source.upper()

        renderer: DocumentRenderer = Upper()
        assert renderer.render("hi") == "HI"
