"""Flowerstall error hierarchy.

All flowerstall-specific errors inherit from FlowerstallError for easy catching.
Missing files and forbidden paths are not errors: the resolver reports them
as ``NotFound`` / ``Forbidden`` values.
"""


class FlowerstallError(Exception):
    """Base error for all flowerstall operations."""


class ConfigError(FlowerstallError):
    """Invalid or conflicting startup configuration."""


class RenderError(FlowerstallError):
    """Error converting a source document (front matter or Markdown)."""


class AssetError(FlowerstallError):
    """Error reading or streaming a file from disk."""


class WatchError(FlowerstallError):
    """The change watcher could not start."""
