"""Tests for quire._cli — argument parsing and command dispatch."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quire._cli import _build_parser, main

from .conftest import write_doc


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_build_default_args(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["build"])
        assert args.command == "build"
        assert args.root == "."
        assert args.output is None
        assert args.base_url is None
        assert args.workers is None

    def test_build_all_flags(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([
            "build", "my-site/",
            "--output", "public",
            "--base-url", "https://example.com",
            "--workers", "4",
        ])
        assert args.root == "my-site/"
        assert args.output == "public"
        assert args.base_url == "https://example.com"
        assert args.workers == 4

    def test_check_default_args(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["check"])
        assert args.command == "check"
        assert args.no_warnings is False

    def test_check_no_warnings(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["check", "site", "--no-warnings"])
        assert args.root == "site"
        assert args.no_warnings is True

    def test_watch_default_args(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["watch"])
        assert args.command == "watch"
        assert args.check_only is False
        assert args.output is None

    def test_no_command_returns_none(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestMain:
    """main — exit status gates CI."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "quire" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out

    def test_check_passes(self, tmp_site: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_site)])
        assert exc_info.value.code == 0

    def test_check_fails(self, content_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_doc(content_root, "a.md", title=None)
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(content_root.parent)])
        assert exc_info.value.code == 1
        assert "missing_title" in capsys.readouterr().err

    def test_build_writes_output(self, tmp_site: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", str(tmp_site), "--output", "public", "--workers", "2"])
        assert exc_info.value.code == 0
        routes = json.loads((tmp_site / "public" / "routes.json").read_text())
        assert "guides/kotlin" in routes

    def test_missing_content_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "quire: not_found" in capsys.readouterr().err

    def test_bad_config(self, tmp_site: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_site / "quire.yaml").write_text("quire:\n  unknown_key: 1\n")
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_site)])
        assert exc_info.value.code == 1
        assert "unknown_key" in capsys.readouterr().err
