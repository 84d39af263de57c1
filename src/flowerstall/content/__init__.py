"""Content layer — locating, parsing, rendering and watching source documents."""

from flowerstall.content.frontmatter import SourceDocument, split_front_matter
from flowerstall.content.renderer import DocumentRenderer, MarkdownRenderer
from flowerstall.content.resolver import (
    Document,
    Forbidden,
    NotFound,
    PathResolver,
    ResolvedTarget,
    StaticAsset,
)
from flowerstall.content.watcher import ChangeEvent, ChangeWatcher

__all__ = [
    "ChangeEvent",
    "ChangeWatcher",
    "Document",
    "DocumentRenderer",
    "Forbidden",
    "MarkdownRenderer",
    "NotFound",
    "PathResolver",
    "ResolvedTarget",
    "SourceDocument",
    "StaticAsset",
    "split_front_matter",
]
