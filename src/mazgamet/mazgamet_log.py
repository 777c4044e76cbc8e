"""
Diagnostic logging for the Mazgamet toolchain.

The lexer and parser describe their internal progress through the standard
`logging` module under the `mazgamet` logger hierarchy:

    mazgamet.lexer   token recognition (DEBUG) and byte movement (TRACE)
    mazgamet.parser  statements built and errors recorded (DEBUG)

Nothing is written anywhere until `init_logger()` attaches a handler, so
scanning and parsing behave identically with logging on or off.

Functions:
    init_logger(level, directory): Send records to a timestamped log file.
    parse_level(name): Translate a level name such as "trace" into a number.
    trace(logger, msg, *args): Emit a record at the TRACE level.
"""

import logging
from datetime import datetime
from pathlib import Path

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

root_logger = logging.getLogger("mazgamet")
root_logger.addHandler(logging.NullHandler())


def trace(logger: logging.Logger, msg: str, *args: object) -> None:
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args)


def parse_level(name: str | int) -> int:
    """Converts a level name or number into a `logging` level.

    Args:
        name (str | int): One of trace/debug/info/warning/error/critical
            (any case), or a numeric level.

    Returns:
        int: The numeric logging level.

    Raises:
        ValueError: If the name is not a known level.
    """
    if isinstance(name, int):
        return name
    key = name.strip().lower()
    if key.isdigit():
        return int(key)
    if key not in _LEVELS:
        raise ValueError(
            f"Unknown log level {name!r}; expected one of {', '.join(_LEVELS)}"
        )
    return _LEVELS[key]


def init_logger(level: str | int = "debug", directory: str | Path = ".") -> Path:
    """Routes Mazgamet diagnostics to a fresh timestamped log file.

    Any handler installed by a previous call is replaced, so calling this
    twice does not duplicate records.

    Args:
        level (str | int): Minimum level to record. Defaults to "debug".
        directory (str | Path): Where to create the file. Defaults to the
            working directory.

    Returns:
        Path: The log file being written.
    """
    numeric = parse_level(level)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = Path(directory) / f"mazgamet_{timestamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)

    print(f"Logging to file: {path}")

    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric)
    return path


__all__ = ["LOG_FORMAT", "TRACE", "init_logger", "parse_level", "trace"]
