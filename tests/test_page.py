"""Tests for flowerstall.page and flowerstall.reactive.hmr — page assembly."""

from __future__ import annotations

from flowerstall.page import render_page, stylesheet_links
from flowerstall.reactive.hmr import reload_script


class TestReloadScript:
    """reload_script — the injected browser snippet."""

    def test_disabled_without_port(self) -> None:
        assert reload_script(None) == ""
        assert reload_script(0) == ""

    def test_contains_port_and_websocket(self) -> None:
        script = reload_script(35729)
        assert "data-flowerstall-reload" in script
        assert "var port = 35729;" in script
        assert "WebSocket" in script
        assert "location.reload()" in script

    def test_retries_on_close(self) -> None:
        assert "setTimeout(connect" in reload_script(4000)


class TestStylesheetLinks:
    def test_in_order(self) -> None:
        links = stylesheet_links(["/a.css", "/b.css"])
        assert links.index("/a.css") < links.index("/b.css")
        assert links.count('rel="stylesheet"') == 2

    def test_escapes_href(self) -> None:
        assert '"/a&quot;b.css"' in stylesheet_links(['/a"b.css'])


class TestRenderPage:
    """render_page — the full HTML document."""

    def test_body_inserted_verbatim(self) -> None:
        page = render_page('<h1>Hi</h1><div class="x">{braces}</div>')
        assert '<h1>Hi</h1><div class="x">{braces}</div>' in page

    def test_body_inside_main(self) -> None:
        page = render_page("<p>content</p>")
        assert page.index("<main") < page.index("<p>content</p>") < page.index("</main>")

    def test_title_escaped(self) -> None:
        assert "<title>a &lt;b&gt;</title>" in render_page("", title="a <b>")

    def test_stylesheets_linked(self) -> None:
        page = render_page("", stylesheets=["/custom.css"])
        assert '<link rel="stylesheet" href="/custom.css">' in page

    def test_reload_script_when_port_given(self) -> None:
        page = render_page("", reload_port=35729)
        assert "data-flowerstall-reload" in page
        assert page.index("data-flowerstall-reload") < page.index("</body>")

    def test_no_reload_script_without_port(self) -> None:
        assert "data-flowerstall-reload" not in render_page("")
