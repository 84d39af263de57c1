"""Flowerstall — a live preview server for Markdown documents.

Point it at a document or a directory, open the browser, and edit: pages are
rendered on request and the browser reloads when a source file changes.

Quick start::

    import flowerstall

    flowerstall.preview("notes/")          # Directory mode
    flowerstall.preview("notes/todo.md")   # Single-document mode

Or from the shell::

    flowerstall notes/ --port 3000 --css theme.css

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "PreviewConfig",
    "__version__",
    "create_app",
    "load_config",
    "preview",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import flowerstall`` fast (Chirp and Patitas load on first use).
    """
    if name == "PreviewConfig":
        from flowerstall.config import PreviewConfig

        return PreviewConfig

    if name == "load_config":
        from flowerstall.config_loader import load_config

        return load_config

    if name == "preview":
        from flowerstall.app import preview

        return preview

    if name == "create_app":
        from flowerstall.app import create_app

        return create_app

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
