import logging
from collections.abc import Iterator

import pytest

import mazgamet.mazgamet_log  # noqa: F401  (registers TRACE and the NullHandler)


@pytest.fixture(autouse=True)  # type: ignore[misc]
def reset_mazgamet_logging() -> Iterator[None]:
    """Detach file handlers and levels that a test's init_logger() installed."""
    root = logging.getLogger("mazgamet")
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
