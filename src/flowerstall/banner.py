"""Startup banner — mode-aware status output.

Prints a short startup banner with timing and status indicators, plus the
one-line warnings and reload notices emitted while the server runs.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from flowerstall.config import PreviewConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_MAGENTA = "\033[35m" if _COLOR else ""


_MODE_STYLES: dict[str, tuple[str, str]] = {
    "document": (_GREEN, "document"),
    "directory": (_CYAN, "directory"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: PreviewConfig,
    *,
    load_ms: float = 0.0,
    warnings: Iterable[str] = (),
) -> None:
    """Print the startup banner to stderr.

    Args:
        config: Resolved PreviewConfig.
        load_ms: Time spent on startup in milliseconds.
        warnings: Non-fatal configuration warnings to display.

    """
    from flowerstall import __version__

    badge = _mode_badge(config.mode)
    header = f"  {_MAGENTA}{_BOLD}flowerstall{_RESET} {_DIM}v{__version__}{_RESET}  {badge}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    timing = f" {_DIM}(ready in {load_ms:.0f}ms){_RESET}" if load_ms > 0 else ""
    if config.document is not None:
        lines.append(f"  {_DIM}├─{_RESET} serving {config.document.name}{timing}")
    else:
        lines.append(f"  {_DIM}├─{_RESET} serving directory{timing}")
    lines.append(f"  {_DIM}├─{_RESET} root: {_DIM}{config.root}{_RESET}")

    for href in config.stylesheet_hrefs:
        lines.append(f"  {_DIM}├─{_RESET} stylesheet: {_DIM}{href}{_RESET}")

    if config.livereload:
        lines.append(
            f"  {_DIM}└─{_RESET} {_GREEN}live reload requested{_RESET} "
            f"on port {_DIM}{config.reload_port}{_RESET}"
        )
    else:
        lines.append(f"  {_DIM}└─{_RESET} live reload disabled")

    url = f"http://{config.host}:{config.port}"
    lines.append("")
    lines.append(f"  {_clickable_url(url)}")

    if config.livereload:
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    warnings = list(warnings)
    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_warning(message: str) -> None:
    """Print a runtime warning line to stderr."""
    print(f"  {_YELLOW}!{_RESET} {message}", file=sys.stderr)


def print_live(port: int) -> None:
    """Print the confirmation once the reload channel is listening."""
    print(f"  {_GREEN}live{_RESET} {_DIM}reload channel listening on port {port}{_RESET}", file=sys.stderr)


def print_reload(paths: Iterable[str], subscriber_count: int) -> None:
    """Print a dim status line for a reload broadcast."""
    names = ", ".join(paths)
    tabs = "tab" if subscriber_count == 1 else "tabs"
    print(f"  {_DIM}↻ {names} → {subscriber_count} {tabs}{_RESET}", file=sys.stderr)
