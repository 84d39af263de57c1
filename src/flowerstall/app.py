"""Flowerstall application — wires the preview server together.

``create_app`` builds a Chirp App whose only job is the request dispatcher
middleware, plus (when live reload is on) lifecycle hooks that start the
reload channel and the change watcher on the server's event loop.
``preview`` is the public entry point used by the CLI.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from flowerstall._errors import WatchError
from flowerstall.banner import print_banner, print_live, print_reload, print_warning
from flowerstall.config_loader import load_config

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from chirp import App

    from flowerstall.config import PreviewConfig
    from flowerstall.content.renderer import DocumentRenderer
    from flowerstall.content.watcher import ChangeWatcher
    from flowerstall.reactive.broadcaster import Broadcaster
    from flowerstall.reactive.channel import ReloadChannel


def create_app(
    config: PreviewConfig,
    *,
    broadcaster: Broadcaster | None = None,
    renderer: DocumentRenderer | None = None,
) -> App:
    """Create the Chirp App serving *config*.

    Args:
        config: Resolved preview configuration.
        broadcaster: Reload subscription registry (a new one by default).
        renderer: Document converter (Patitas Markdown by default).

    """
    from chirp import App, AppConfig

    from flowerstall.content.renderer import MarkdownRenderer
    from flowerstall.content.resolver import PathResolver
    from flowerstall.reactive.broadcaster import Broadcaster
    from flowerstall.reactive.channel import ReloadChannel
    from flowerstall.routes.dispatcher import RequestDispatcher

    app = App(config=AppConfig(debug=True, host=config.host, port=config.port))

    channel: ReloadChannel | None = None
    if config.livereload:
        broadcaster = broadcaster or Broadcaster()
        channel = ReloadChannel(broadcaster, config.host, config.reload_port)
        _start_live_reload(config, app, broadcaster, channel)

    dispatcher = RequestDispatcher(
        config,
        PathResolver(config),
        renderer or MarkdownRenderer(),
        channel=channel,
    )
    app.add_middleware(dispatcher)
    return app


async def consume_changes(
    watcher: ChangeWatcher,
    broadcaster: Broadcaster,
    root: Path,
) -> None:
    """Broadcast one reload message per batch of changes until the watcher stops.

    A watcher that cannot start is reported as a warning; serving continues.
    """
    from flowerstall.reactive.broadcaster import reload_message

    try:
        async for batch in watcher.changes():
            message = reload_message(batch, root)
            count = await broadcaster.broadcast(message)
            print_reload([event.path.name for event in batch], count)
    except (WatchError, OSError) as exc:
        print_warning(f"Change watching disabled ({exc})")


def _start_live_reload(
    config: PreviewConfig,
    app: App,
    broadcaster: Broadcaster,
    channel: ReloadChannel,
) -> None:
    """Start the reload channel and watcher via Chirp lifecycle hooks.

    Flow:
        on_startup  -> bind the channel; if that worked, spawn the watcher task
        file change -> one reload message per batch -> every subscription
        on_shutdown -> stop the watcher, cancel the task, close the channel

    """
    from flowerstall.content.watcher import ChangeWatcher

    watcher = ChangeWatcher(
        config.watch_paths,
        config.watch_exts,
        files=config.watch_files,
        recursive=config.document is None,
    )
    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_reload_channel() -> None:
        nonlocal _task
        if not await channel.start() or channel.port is None:
            return
        print_live(channel.port)
        _task = asyncio.create_task(consume_changes(watcher, broadcaster, config.root))

    @app.on_shutdown
    async def _stop_reload_channel() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()
        await channel.stop()


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def run(config: PreviewConfig, *, warnings: Iterable[str] = (), started: float | None = None) -> None:
    """Serve *config* until the process is interrupted.

    Args:
        config: Resolved preview configuration.
        warnings: Configuration warnings for the banner.
        started: ``time.perf_counter()`` value taken when startup began.

    """
    t0 = started if started is not None else time.perf_counter()
    app = create_app(config)
    load_ms = (time.perf_counter() - t0) * 1000

    print_banner(config, load_ms=load_ms, warnings=warnings)

    app.run(host=config.host, port=config.port)


def preview(target: str | Path | None = None, **kwargs: object) -> None:
    """Start a preview server.

    Args:
        target: A Markdown document (single-document mode) or a directory
            (directory mode).  Defaults to the current directory.
        **kwargs: Options understood by ``load_config`` (``root``, ``file``,
            ``css``, ``host``, ``port``, ``reload_port``, ``livereload``).

    Raises:
        ConfigError: If the configuration is invalid.

    """
    t0 = time.perf_counter()
    config, warnings = load_config(target, **kwargs)  # type: ignore[arg-type]
    run(config, warnings=warnings, started=t0)
