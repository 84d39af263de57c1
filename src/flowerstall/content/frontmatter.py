"""Front matter — the optional YAML block at the top of a document.

A document may start with a ``---`` line, YAML key/values, and a closing
``---`` (or ``...``) line::

    ---
    title: About
    ---

    # About

The block is stripped before rendering.  The metadata is parsed so that a
malformed block fails loudly, but it is not passed on to the page template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from flowerstall._errors import RenderError

_OPEN = re.compile(r"\A\ufeff?---[ \t]*\r?\n")
_CLOSE = re.compile(r"^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """A document split into metadata and body.

    Attributes:
        body: Text after the metadata block (the whole text if there is none).
        metadata: Parsed key/values, empty when there is no block.

    """

    body: str
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


def split_front_matter(text: str) -> SourceDocument:
    """Split *text* into metadata and body.

    A leading ``---`` without a closing delimiter is treated as ordinary
    content (a thematic break), not as front matter.

    Raises:
        RenderError: If the block is present but is not a YAML mapping.

    """
    opening = _OPEN.match(text)
    if opening is None:
        return SourceDocument(body=text)

    closing = _CLOSE.search(text, opening.end())
    if closing is None:
        return SourceDocument(body=text)

    raw = text[opening.end():closing.start()]
    try:
        metadata = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as exc:
        msg = f"Invalid front matter: {exc}"
        raise RenderError(msg) from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        msg = f"Front matter must be a mapping, got {type(metadata).__name__}"
        raise RenderError(msg)

    return SourceDocument(body=text[closing.end():], metadata=metadata)
