"""Path resolver — maps request URLs to files confined to the root.

Every request goes through :meth:`PathResolver.resolve`, which returns one
of four result values:

- ``Document``: a convertible source file, rendered to HTML.
- ``StaticAsset``: a file served verbatim.
- ``NotFound``: nothing matches (safe to echo the requested name).
- ``Forbidden``: the path escapes the root or names a directory.

Resolution order in directory mode, for a path without an extension:

    1. ``/``            -> ``root/index.md``
    2. ``/about``       -> ``root/about.md``
    3. ``/about``       -> ``root/about/index.md``
    4. static asset resolution

A path with an extension is never a document, so ``/about.md`` serves the
Markdown source as-is.

Symbolic links are followed by the filesystem.  The traversal guard checks the
lexically normalized path, so a link inside the root that points elsewhere is
served.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote

if TYPE_CHECKING:
    from flowerstall._types import UrlPath
    from flowerstall.config import PreviewConfig


@dataclass(frozen=True, slots=True)
class Document:
    """A source document to render."""

    path: Path


@dataclass(frozen=True, slots=True)
class StaticAsset:
    """A file to stream as-is."""

    path: Path


@dataclass(frozen=True, slots=True)
class NotFound:
    """Nothing matched.  ``name`` is what the client asked for."""

    name: str


@dataclass(frozen=True, slots=True)
class Forbidden:
    """Outside the root, or a directory.  Carries no path on purpose."""


type ResolvedTarget = Document | StaticAsset | NotFound | Forbidden


def normalize_url_path(url_path: UrlPath) -> str:
    """Reduce a request URL to a decoded, slash-separated relative path.

    Strips query and fragment, decodes percent escapes, and turns backslashes
    into slashes.  Leading and trailing slashes are removed; ``..`` segments
    are kept so the caller can detect escapes after joining with the root.
    """
    # Split by hand: urlsplit would read a leading "//" as a network location.
    path = url_path.split("#", 1)[0].split("?", 1)[0]
    path = unquote(path).replace("\\", "/")
    return path.strip("/")


def is_within(path: Path, root: Path) -> bool:
    """True if *path* is *root* or below it, compared by whole segments."""
    return path == root or root in path.parents


class PathResolver:
    """Resolves request URL paths against a PreviewConfig.

    Args:
        config: Provides the root, the mode, and the document extension.

    """

    def __init__(self, config: PreviewConfig) -> None:
        self._config = config
        self._root = config.root

    def resolve(self, url_path: UrlPath) -> ResolvedTarget:
        """Map *url_path* to a ResolvedTarget.  Touches the filesystem."""
        relative = normalize_url_path(url_path)
        name = "/" + relative

        if "\x00" in relative:
            return Forbidden()

        candidate = self._join(relative)
        if candidate is None:
            return Forbidden()

        config = self._config
        if config.document is not None:
            if not relative:
                if config.document.is_file():
                    return Document(config.document)
                return NotFound(config.document.name)
            return self._static(candidate, name)

        if not PurePosixPath(relative).suffix:
            document = self._find_document(relative, candidate)
            if document is not None:
                return Document(document)
            if not relative:
                # Bare root with no index document: a 404, not a forbidden listing.
                return NotFound(name)

        return self._static(candidate, name)

    def _join(self, relative: str) -> Path | None:
        """Join *relative* to the root; None if the result leaves the root."""
        joined = os.path.normpath(posixpath.join(self._root.as_posix(), relative))
        path = Path(joined)
        if not is_within(path, self._root):
            return None
        return path

    def _find_document(self, relative: str, candidate: Path) -> Path | None:
        """Try the index, ``<path>.md`` and ``<path>/index.md`` in order."""
        config = self._config
        if not relative:
            options = [self._root / config.index_document]
        else:
            options = [
                candidate.with_name(candidate.name + config.document_ext),
                candidate / config.index_document,
            ]
        for option in options:
            if is_within(option, self._root) and option.is_file():
                return option
        return None

    def _static(self, candidate: Path, name: str) -> ResolvedTarget:
        if candidate.is_dir():
            return Forbidden()
        if candidate.is_file():
            return StaticAsset(candidate)
        return NotFound(name)
