"""File watcher — reports source changes that should reload the browser.

Monitors the watch set and yields one batch of :class:`ChangeEvent` per
debounced burst of filesystem activity.  In directory mode the root is watched
recursively and files with a watched extension (``.md``, ``.html``, ``.css``,
``.js`` by default) are reported.  In single-document mode the directories of
the document and its stylesheets are watched, and only those files are
reported.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change, DefaultFilter

from flowerstall._errors import WatchError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from flowerstall._types import ChangeKind


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: ChangeKind


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


class ExtensionFilter(DefaultFilter):
    """watchfiles filter: the default ignore rules plus an allow-list.

    With *files* given, only those exact paths pass, whatever their
    extension.  Otherwise any path with one of *extensions* passes.
    """

    def __init__(self, extensions: Iterable[str], files: Iterable[Path] = ()) -> None:
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.files = frozenset(str(f) for f in files)
        super().__init__()

    def __call__(self, change: Change, path: str) -> bool:
        if self.files:
            allowed = os.path.normpath(path) in self.files
        else:
            allowed = Path(path).suffix.lower() in self.extensions
        return allowed and super().__call__(change, path)


class ChangeWatcher:
    """Watches a fixed set of paths and yields batches of changes.

    Uses watchfiles' ``awatch`` on the running event loop.  The watch set is
    fixed at construction; paths that do not exist when watching starts are
    skipped.

    Args:
        paths: Files or directories to watch.
        extensions: File extensions that count as a change.
        files: When given, only these exact files count as a change.
        recursive: Watch directories recursively.

    """

    def __init__(
        self,
        paths: Iterable[Path],
        extensions: Iterable[str],
        *,
        files: Iterable[Path] = (),
        recursive: bool = True,
    ) -> None:
        self._paths = tuple(paths)
        self._filter = ExtensionFilter(extensions, files)
        self._recursive = recursive
        self._stop_event = asyncio.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether ``changes()`` is currently being iterated."""
        return self._running

    @property
    def paths(self) -> tuple[Path, ...]:
        return self._paths

    def stop(self) -> None:
        """Ask a running ``changes()`` iteration to finish."""
        self._stop_event.set()

    async def changes(self) -> AsyncIterator[tuple[ChangeEvent, ...]]:
        """Yield one tuple of ChangeEvents per debounced filesystem batch.

        Raises:
            WatchError: If none of the watch paths exist.

        """
        from watchfiles import awatch

        existing = [p for p in self._paths if p.exists()]
        if not existing:
            names = ", ".join(str(p) for p in self._paths) or "(nothing)"
            msg = f"No watchable paths: {names}"
            raise WatchError(msg)

        self._stop_event.clear()
        self._running = True
        try:
            async for raw_changes in awatch(
                *existing,
                watch_filter=self._filter,
                stop_event=self._stop_event,
                debounce=300,
                step=100,
                recursive=self._recursive,
            ):
                batch = tuple(
                    ChangeEvent(path=Path(path_str), kind=_CHANGE_KIND_MAP.get(change, "modified"))
                    for change, path_str in sorted(raw_changes, key=lambda c: c[1])
                )
                if batch:
                    yield batch
        finally:
            self._running = False
