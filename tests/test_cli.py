"""Tests for the obsidized command-line interface."""

import logging
from pathlib import Path

import pytest

from obsidized import __version__
from obsidized.cli import compile_one, main


def _note(tmp_path: Path, text: str, name: str = "note.md") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestCompileOne:
    """The compile-one subcommand."""

    def test_writes_html(self, tmp_path: Path) -> None:
        note = _note(tmp_path, "This is a *test*!")
        out = tmp_path / "note.html"
        assert main(["compile-one", str(note), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == (
            '<p class="block">\nThis is a <span class="italic">\ntest</span>\n!\n</p>\n'
        )

    def test_default_output_name(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        note = _note(tmp_path, "A")
        assert main(["compile-one", str(note)]) == 0
        assert (tmp_path / "output.html").read_bytes() == b'<p class="block">\nA\n</p>\n'

    def test_refuses_to_overwrite(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        note = _note(tmp_path, "new")
        out = tmp_path / "out.html"
        out.write_text("old", encoding="utf-8")
        assert main(["compile-one", str(note), "-o", str(out)]) == 1
        assert out.read_text(encoding="utf-8") == "old"
        assert "already exists" in capsys.readouterr().err

    def test_overwrite_flag(self, tmp_path: Path) -> None:
        note = _note(tmp_path, "new")
        out = tmp_path / "out.html"
        out.write_text("old", encoding="utf-8")
        assert main(["compile-one", str(note), "-o", str(out), "-O"]) == 0
        assert out.read_text(encoding="utf-8") == '<p class="block">\nnew\n</p>\n'

    def test_plugins_and_repair(self, tmp_path: Path) -> None:
        note = _note(tmp_path, "# Title")
        out = tmp_path / "out.html"
        argv = ["compile-one", str(note), "-o", str(out), "--plugin", "headings", "--repair-markup"]
        assert main(argv) == 0
        assert '<h1 class="heading header-1">Title</h1>' in out.read_text(encoding="utf-8")

    def test_lenient(self, tmp_path: Path) -> None:
        note = _note(tmp_path, "costs $5")
        out = tmp_path / "out.html"
        assert main(["compile-one", str(note), "-o", str(out), "--lenient"]) == 0
        assert "costs $5" in out.read_text(encoding="utf-8")


class TestFailures:
    """Errors are reported on stderr with a non-zero exit code."""

    def test_parse_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        note = _note(tmp_path, "`broken")
        out = tmp_path / "out.html"
        assert main(["compile-one", str(note), "-o", str(out)]) == 1
        err = capsys.readouterr().err
        assert "could not parse markdown" in err
        assert f"{note}:1:1 unterminated '`' fence" in err
        assert not out.exists()

    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["compile-one", str(tmp_path / "nope.md"), "-o", str(tmp_path / "o.html")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_input_not_utf8(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        note = tmp_path / "latin1.md"
        note.write_bytes(b"caf\xe9")
        out = tmp_path / "o.html"
        assert main(["compile-one", str(note), "-o", str(out)]) == 1
        err = capsys.readouterr().err
        assert "error:" in err
        assert "not valid UTF-8" in err
        assert not out.exists()

    def test_unknown_plugin_rejected_by_argparse(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["compile-one", str(tmp_path / "n.md"), "--plugin", "tables"])
        assert exc_info.value.code == 2

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            main([])


class TestGlobalOptions:
    """Options shared by every subcommand."""

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_verbose_logs_output_path(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        note = _note(tmp_path, "A\n\nB")
        out = tmp_path / "out.html"
        with caplog.at_level(logging.INFO, logger="obsidized"):
            assert main(["--verbose", "compile-one", str(note), "-o", str(out)]) == 0
        assert "wrote" in caplog.text
        assert "2 block(s)" in caplog.text


def test_compile_one_function(tmp_path: Path) -> None:
    note = _note(tmp_path, "**x**")
    out = tmp_path / "x.html"
    compile_one(note, out)
    assert out.read_text(encoding="utf-8") == (
        '<p class="block">\n<span class="bold">\nx</span>\n\n</p>\n'
    )
