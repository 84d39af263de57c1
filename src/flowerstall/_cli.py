"""Flowerstall CLI — ``flowerstall [target] [options]``.

Entry point for the ``flowerstall`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
import time


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the flowerstall CLI."""
    parser = argparse.ArgumentParser(
        prog="flowerstall",
        description="Preview Markdown documents in the browser with live reload.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Document to preview, or a directory to serve (default: current directory)",
    )
    parser.add_argument("--file", default=None, help="Document to preview (single-document mode)")
    parser.add_argument("--root", default=None, help="Root directory; nothing outside it is served")
    parser.add_argument("--host", default=None, help="Bind address (default 127.0.0.1)")
    parser.add_argument("-p", "--port", type=int, default=None, help="HTTP port (default 3000)")
    parser.add_argument(
        "--lr-port",
        dest="reload_port",
        type=int,
        default=None,
        help="Live reload channel port (default 35729)",
    )
    parser.add_argument(
        "--no-lr",
        "--no-livereload",
        dest="livereload",
        action="store_false",
        default=None,
        help="Disable change watching and browser reload",
    )
    parser.add_argument(
        "--css",
        default=None,
        help="Comma-separated stylesheets to link (default: custom.css if present)",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from flowerstall import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    t0 = time.perf_counter()

    from flowerstall._errors import ConfigError
    from flowerstall.config_loader import load_config

    try:
        config, warnings = load_config(
            args.target,
            root=args.root,
            file=args.file,
            css=args.css,
            host=args.host,
            port=args.port,
            reload_port=args.reload_port,
            livereload=args.livereload,
        )
    except ConfigError as exc:
        print(f"flowerstall: {exc}", file=sys.stderr)
        sys.exit(1)

    from flowerstall.app import run

    try:
        run(config, warnings=warnings, started=t0)
    except OSError as exc:
        print(f"flowerstall: cannot listen on {config.host}:{config.port}: {exc}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
