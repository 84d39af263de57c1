"""Flowerstall configuration.

PreviewConfig is the central configuration object, frozen after creation.
Build it with ``flowerstall.config_loader.load_config`` to get the startup
validation (existing root, document under root, stylesheet discovery).
"""

from dataclasses import dataclass, field
from pathlib import Path

from flowerstall._types import PreviewMode


@dataclass(frozen=True, slots=True)
class PreviewConfig:
    """Configuration for a preview server.

    Attributes:
        root: Directory outside of which nothing is served.  Always resolved
              to an absolute, canonical path on construction.
        document: Target document for single-document mode.  ``None``
                  selects directory mode.
        host: Bind address for the HTTP server and the reload channel.
        port: HTTP port.
        reload_port: Port of the reload side channel.
        livereload: Enable change watching and browser reload.
        stylesheets: Absolute paths of stylesheets linked from every page,
                     in order.  All lie under ``root``.
        document_ext: Extension of convertible documents.
        index_name: Stem of the directory index document.
        watch_exts: Extensions that trigger a reload when changed.

    """

    root: Path = field(default_factory=Path.cwd)
    document: Path | None = None
    host: str = "127.0.0.1"
    port: int = 3000
    reload_port: int = 35729
    livereload: bool = True
    stylesheets: tuple[Path, ...] = ()
    document_ext: str = ".md"
    index_name: str = "index"
    watch_exts: tuple[str, ...] = (".md", ".html", ".css", ".js")

    def __post_init__(self) -> None:
        # Canonical root so the resolver's boundary check compares like with like.
        object.__setattr__(self, "root", self.root.resolve())
        if self.document is not None:
            document = self.document if self.document.is_absolute() else self.root / self.document
            # The document itself may be a symlink; only its directory is canonicalized.
            object.__setattr__(self, "document", document.parent.resolve() / document.name)

    @property
    def mode(self) -> PreviewMode:
        """``"document"`` when a target document is configured, else ``"directory"``."""
        return "directory" if self.document is None else "document"

    @property
    def index_document(self) -> str:
        """File name of the directory index document (``index.md``)."""
        return f"{self.index_name}{self.document_ext}"

    @property
    def watch_paths(self) -> tuple[Path, ...]:
        """Directories handed to the change watcher.

        Directory mode watches the whole root recursively.  Single-document
        mode watches the directory of the document and of each stylesheet,
        non-recursively.  Directories rather than files, so a file replaced by
        an atomic save stays watched.
        """
        if self.document is None:
            return (self.root,)
        return tuple(dict.fromkeys(path.parent for path in self.watch_files))

    @property
    def watch_files(self) -> tuple[Path, ...]:
        """Exact files that count as a change; empty in directory mode."""
        if self.document is None:
            return ()
        return (self.document, *self.stylesheets)

    @property
    def stylesheet_hrefs(self) -> tuple[str, ...]:
        """Root-relative URLs for the ``<link>`` tags of each stylesheet."""
        return tuple(
            "/" + sheet.relative_to(self.root).as_posix() for sheet in self.stylesheets
        )
