import logging
from pathlib import Path

import pytest

from mazgamet.mazgamet_log import TRACE, init_logger, parse_level, trace
from mazgamet.mazgamet_parser import parse


@pytest.mark.parametrize(
    "name,level",
    [
        ("trace", TRACE),
        ("DEBUG", logging.DEBUG),
        ("Info", logging.INFO),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("critical", logging.CRITICAL),
        ("15", 15),
        (7, 7),
    ],
)  # type: ignore[misc]
def test_parse_level(name: str | int, level: int) -> None:
    assert parse_level(name) == level


def test_parse_level_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        parse_level("verbose")


def test_trace_level_is_registered() -> None:
    assert logging.getLevelName(TRACE) == "TRACE"


def test_trace_helper_respects_level(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("mazgamet.test")
    with caplog.at_level(logging.DEBUG, logger="mazgamet.test"):
        trace(log, "hidden %d", 1)
    assert not caplog.records
    with caplog.at_level(TRACE, logger="mazgamet.test"):
        trace(log, "shown %d", 2)
    assert [r.getMessage() for r in caplog.records] == ["shown 2"]


def test_init_logger_creates_timestamped_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = init_logger("trace", tmp_path / "logs")
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("mazgamet_") and path.suffix == ".log"
    assert f"Logging to file: {path}" in capsys.readouterr().out

    parse("let x = 1;")
    text = path.read_text(encoding="utf-8")
    assert "[TRACE] mazgamet.lexer: read_char" in text
    assert "[DEBUG] mazgamet.parser: Parsed statement" in text


def test_init_logger_replaces_previous_file_handler(tmp_path: Path) -> None:
    init_logger("debug", tmp_path / "a")
    init_logger("debug", tmp_path / "b")
    root = logging.getLogger("mazgamet")
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert Path(file_handlers[0].baseFilename).parent == tmp_path / "b"


def test_logging_does_not_change_parse_results(tmp_path: Path) -> None:
    quiet = parse("let a = fn(x) { x * 2 }; a(3) + 1;")
    init_logger("trace", tmp_path)
    loud = parse("let a = fn(x) { x * 2 }; a(3) + 1;")
    assert quiet[0].render() == loud[0].render()
    assert quiet[1] == loud[1]
