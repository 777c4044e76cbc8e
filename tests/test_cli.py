import json
import runpy
import sys
from pathlib import Path

import pytest

from mazgamet import mazgamet_cli

SOURCE = "let x = 5; add(x, 2 * 3);"


def test_run_string_renders_program(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.run_mazgamet(SOURCE, is_string=True) == 0
    assert capsys.readouterr().out.strip() == "let x = ;add(x, (2 * 3))"


def test_run_file_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "program.mz"
    path.write_text(SOURCE, encoding="utf-8")
    assert mazgamet_cli.run_mazgamet(str(path)) == 0
    assert "add(x, (2 * 3))" in capsys.readouterr().out


def test_run_tokens_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.run_mazgamet("let x\n= 5;", is_string=True, output="tokens") == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "1:1\tLET\tlet"
    assert lines[2] == "2:1\tASSIGN\t="
    assert len(lines) == 5


def test_run_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.run_mazgamet("foobar;", is_string=True, output="json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "Program"
    stmt = data["statements"][0]
    assert stmt["kind"] == "ExpressionStatement"
    assert stmt["expression"] == {"kind": "Identifier", "token": "foobar", "value": "foobar"}


def test_run_reports_parse_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.run_mazgamet("let x 5;", is_string=True) == 1
    captured = capsys.readouterr()
    assert "parser has 1 errors" in captured.err
    assert "expected next token to be =, got INT instead" in captured.err


def test_run_rejects_unknown_output() -> None:
    with pytest.raises(ValueError, match="Unsupported output"):
        mazgamet_cli.run_mazgamet("x", is_string=True, output="xml")


def test_main_with_string(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.main(["-s", "-a * b"]) == 0
    assert capsys.readouterr().out.strip() == "((-a) * b)"


def test_main_tokens_flag(capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.main(["-s", "!=", "--tokens"]) == 0
    assert capsys.readouterr().out.strip() == "1:1\tNOT_EQ\t!="


def test_main_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert mazgamet_cli.main([str(tmp_path / "missing.mz")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_main_tokens_and_json_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        mazgamet_cli.main(["-s", "x", "--tokens", "--json"])


def test_main_without_source_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    modes: list[str] = []
    monkeypatch.setattr(
        "mazgamet.mazgamet_repl.start_repl", lambda mode="tokens": modes.append(mode)
    )
    assert mazgamet_cli.main([]) == 0
    assert mazgamet_cli.main(["--repl", "--parse"]) == 0
    assert modes == ["tokens", "parse"]


def test_main_log_level_writes_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert mazgamet_cli.main(
        ["-s", "let x = 1;", "--log-level", "debug", "--log-dir", str(tmp_path)]
    ) == 0
    out = capsys.readouterr().out
    assert "Logging to file:" in out
    logs = list(tmp_path.glob("mazgamet_*.log"))
    assert len(logs) == 1
    text = logs[0].read_text(encoding="utf-8")
    assert "mazgamet.lexer" in text
    assert "Parsed statement: let x = ;" in text


def test_main_log_level_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv(mazgamet_cli.LOG_LEVEL_ENV, "info")
    assert mazgamet_cli.main(["-s", "x", "--log-dir", str(tmp_path)]) == 0
    assert "Logging to file:" in capsys.readouterr().out
    assert list(tmp_path.glob("mazgamet_*.log"))


def test_main_bad_log_level_exits() -> None:
    with pytest.raises(SystemExit):
        mazgamet_cli.main(["-s", "x", "--log-level", "loud"])


@pytest.mark.filterwarnings("ignore::RuntimeWarning")  # type: ignore[misc]
def test_module_runs_as_script(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["mazgamet", "-s", "x + 1;"])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("mazgamet.mazgamet_cli", run_name="__main__")
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "(x + 1)"
