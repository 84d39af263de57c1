"""Page template — wraps a rendered document in a full HTML page.

The page pulls Tailwind's typography styles from the CDN, links the
configured stylesheets in order, and ends with the live reload script when
the reload channel is listening.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from flowerstall.reactive.hmr import reload_script

if TYPE_CHECKING:
    from collections.abc import Iterable

_PAGE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{title}</title>
  <script src="https://cdn.tailwindcss.com?plugins=typography"></script>
  {stylesheets}
</head>
<body class="min-h-screen">
  <main class="max-w-5xl mx-auto p-6 prose prose-lg">{body}</main>
  {reload}
</body>
</html>
"""


def stylesheet_links(hrefs: Iterable[str]) -> str:
    """Return one ``<link rel="stylesheet">`` tag per href."""
    return "\n  ".join(
        f'<link rel="stylesheet" href="{html.escape(href, quote=True)}">' for href in hrefs
    )


def render_page(
    body: str,
    *,
    title: str = "",
    stylesheets: Iterable[str] = (),
    reload_port: int | None = None,
) -> str:
    """Assemble the full HTML page around *body*.

    Args:
        body: HTML produced by the document renderer (inserted verbatim).
        title: Page title (escaped).
        stylesheets: Root-relative stylesheet URLs.
        reload_port: Port of the reload channel; None leaves the script out.

    """
    return _PAGE.format(
        title=html.escape(title),
        stylesheets=stylesheet_links(stylesheets),
        body=body,
        reload=reload_script(reload_port),
    )
