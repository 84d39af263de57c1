"""Static assets — serve files from disk with an inferred content type.

Bodies are streamed by Chirp's file sender (:class:`chirp.http.response.FileResponse`):
64 KiB reads off the event loop, ``ETag`` / ``Last-Modified`` for conditional
GETs, and single ``Range`` requests.  A client that disconnects stops further
reads.  Responses carry ``Cache-Control: no-cache`` so an edited stylesheet is
revalidated on the reload that follows the edit.
"""

from __future__ import annotations

import mimetypes
from typing import TYPE_CHECKING

from flowerstall._errors import AssetError

if TYPE_CHECKING:
    from pathlib import Path

    from chirp.http.response import FileResponse

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Private table so registering extra types never touches the global registry.
_TYPES = mimetypes.MimeTypes()
_TYPES.add_type("text/markdown", ".md")
_TYPES.add_type("text/markdown", ".markdown")
_TYPES.add_type("text/javascript", ".mjs")
_TYPES.add_type("image/svg+xml", ".svg")
_TYPES.add_type("font/woff2", ".woff2")

_TEXT_TYPES = frozenset({"application/javascript", "application/json", "image/svg+xml"})


def content_type_for(path: Path) -> str:
    """Infer the Content-Type for *path* from its extension.

    Text types get ``charset=utf-8``.  Unknown extensions fall back to
    ``application/octet-stream``.
    """
    guessed, _encoding = _TYPES.guess_type(path.name, strict=False)
    if guessed is None:
        return DEFAULT_CONTENT_TYPE
    if guessed.startswith("text/") or guessed in _TEXT_TYPES:
        return f"{guessed}; charset=utf-8"
    return guessed


def check_readable(path: Path) -> None:
    """Open and close *path* so an unreadable file fails before any header is sent.

    Blocking; run it in a worker thread.

    Raises:
        AssetError: If the file cannot be opened for reading.

    """
    try:
        with path.open("rb"):
            pass
    except OSError as exc:
        msg = f"Cannot read {path.name}: {exc.strerror or exc}"
        raise AssetError(msg) from exc


def asset_response(path: Path) -> FileResponse:
    """Build the streamed 200 response for *path*."""
    from chirp.http.response import FileResponse

    return FileResponse(
        path=path,
        status=200,
        content_type=content_type_for(path),
    ).with_header("Cache-Control", "no-cache")
