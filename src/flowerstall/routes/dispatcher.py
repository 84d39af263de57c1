"""Request dispatcher — turns every GET into a rendered page or a file.

Installed as Chirp middleware in front of the (empty) route table, so it sees
every request path.  Each request is resolved by the :class:`PathResolver`
and answered according to the result:

- ``Document``    -> 200, rendered page
- ``StaticAsset`` -> 200, file streamed by Chirp
- ``NotFound``    -> 404, names the requested path
- ``Forbidden``   -> 403, generic message only
- any exception   -> 500, carries the error message

Failures never escape the dispatcher, so one bad request cannot stop the
server.  Filesystem work and Markdown conversion run in worker threads.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

from flowerstall._errors import AssetError, RenderError
from flowerstall.content.frontmatter import split_front_matter
from flowerstall.content.resolver import Document, Forbidden, NotFound, StaticAsset
from flowerstall.page import render_page
from flowerstall.routes.assets import asset_response, check_readable

if TYPE_CHECKING:
    from pathlib import Path

    from chirp.http.request import Request
    from chirp.http.response import FileResponse, Response
    from chirp.middleware.protocol import AnyResponse, Next

    from flowerstall._types import UrlPath
    from flowerstall.config import PreviewConfig
    from flowerstall.content.renderer import DocumentRenderer
    from flowerstall.content.resolver import PathResolver
    from flowerstall.reactive.channel import ReloadChannel


_HANDLED_METHODS = frozenset({"GET", "HEAD"})


def _text(body: str, status: int) -> Response:
    from chirp.http.response import Response

    return Response(body=body, status=status, content_type="text/plain; charset=utf-8")


class RequestDispatcher:
    """Chirp middleware that serves documents and assets under the root.

    Args:
        config: Frozen preview configuration.
        resolver: Maps URL paths to ResolvedTargets.
        renderer: Converts document bodies to HTML.
        channel: Reload channel; its port (when listening) goes into pages.

    """

    def __init__(
        self,
        config: PreviewConfig,
        resolver: PathResolver,
        renderer: DocumentRenderer,
        channel: ReloadChannel | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._renderer = renderer
        self._channel = channel

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        if request.method not in _HANDLED_METHODS:
            return await next(request)
        return await self.respond(request.path)

    async def respond(self, url_path: UrlPath) -> AnyResponse:
        """Resolve *url_path* and build the response.  Never raises."""
        try:
            target = await asyncio.to_thread(self._resolver.resolve, url_path)

            if isinstance(target, Document):
                page = await asyncio.to_thread(self.render_document, target.path)
                from chirp.http.response import Response

                return Response(body=page, status=200, content_type="text/html; charset=utf-8")

            if isinstance(target, StaticAsset):
                return await self._stream(target.path)

            if isinstance(target, NotFound):
                return _text(f"File not found: {target.name}", 404)

            if isinstance(target, Forbidden):
                return _text("Forbidden", 403)

            msg = f"Unhandled resolution result: {target!r}"
            raise TypeError(msg)
        except Exception as exc:
            print(f"  Request error ({url_path}): {exc}", file=sys.stderr)
            return _text(f"Server error: {exc}", 500)

    def render_document(self, path: Path) -> str:
        """Read, strip front matter, convert, and wrap *path* in the page template.

        Raises:
            AssetError: If the file cannot be read.
            RenderError: If front matter or conversion fails.

        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read {path.name}: {exc}"
            raise AssetError(msg) from exc

        source = split_front_matter(text)
        body = self._renderer.render(source.body)
        if not isinstance(body, str):
            msg = f"Renderer returned {type(body).__name__}, expected str"
            raise RenderError(msg)

        return render_page(
            body,
            title=self._title_for(path),
            stylesheets=self._config.stylesheet_hrefs,
            reload_port=self._reload_port(),
        )

    def _title_for(self, path: Path) -> str:
        if path.stem == self._config.index_name and path.parent != self._config.root:
            return path.parent.name
        return path.stem

    def _reload_port(self) -> int | None:
        if self._channel is None or not self._config.livereload:
            return None
        return self._channel.port

    async def _stream(self, path: Path) -> FileResponse:
        await asyncio.to_thread(check_readable, path)
        return asset_response(path)
