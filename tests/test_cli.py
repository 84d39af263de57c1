"""Tests for flowerstall._cli — argument parsing and startup errors."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from flowerstall._cli import _build_parser, main


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_defaults(self) -> None:
        args = _build_parser().parse_args([])
        assert args.target is None
        assert args.file is None
        assert args.root is None
        assert args.host is None
        assert args.port is None
        assert args.reload_port is None
        assert args.livereload is None
        assert args.css is None

    def test_positional_target(self) -> None:
        args = _build_parser().parse_args(["notes/todo.md"])
        assert args.target == "notes/todo.md"

    def test_file_and_root(self) -> None:
        args = _build_parser().parse_args(["--root", "docs", "--file", "a.md"])
        assert args.root == "docs"
        assert args.file == "a.md"

    def test_ports(self) -> None:
        args = _build_parser().parse_args(["-p", "8080", "--lr-port", "35730"])
        assert args.port == 8080
        assert args.reload_port == 35730

    def test_long_port(self) -> None:
        assert _build_parser().parse_args(["--port", "9000"]).port == 9000

    @pytest.mark.parametrize("flag", ["--no-lr", "--no-livereload"])
    def test_disable_livereload(self, flag: str) -> None:
        assert _build_parser().parse_args([flag]).livereload is False

    def test_css(self) -> None:
        args = _build_parser().parse_args(["--css", "a.css,b.css"])
        assert args.css == "a.css,b.css"

    def test_non_numeric_port_rejected(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--port", "http"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "flowerstall 0.1.0" in capsys.readouterr().out


class TestMain:
    """main — configuration errors and server handoff."""

    def test_missing_root_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "Root directory not found" in capsys.readouterr().err

    def test_conflicting_args_exit_1(self, docs_root: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(docs_root / "about.md"), "--file", "about.md"])
        assert exc_info.value.code == 1

    def test_runs_with_resolved_config(self, docs_root: Path) -> None:
        with patch("flowerstall.app.run") as run:
            main([str(docs_root / "about.md"), "--port", "4000", "--no-lr"])

        config = run.call_args.args[0]
        assert config.document == docs_root.resolve() / "about.md"
        assert config.port == 4000
        assert config.livereload is False

    def test_warnings_forwarded(self, docs_root: Path) -> None:
        with patch("flowerstall.app.run") as run:
            main([str(docs_root), "--css", "missing.css"])

        assert run.call_args.kwargs["warnings"] == ["Stylesheet not found, skipped: missing.css"]

    def test_bind_failure_exits_1(
        self, docs_root: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with patch("flowerstall.app.run", side_effect=OSError("Address already in use")):
            with pytest.raises(SystemExit) as exc_info:
                main([str(docs_root)])
        assert exc_info.value.code == 1
        assert "cannot listen on 127.0.0.1:3000" in capsys.readouterr().err

    def test_interrupt_exits_quietly(self, docs_root: Path) -> None:
        with patch("flowerstall.app.run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main([str(docs_root)])
        assert exc_info.value.code == 130
