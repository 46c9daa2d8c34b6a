import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """The CLI installs a handler on the package logger; undo it after each test."""
    logger = logging.getLogger("graph_worksheet")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield
    for h in logger.handlers[:]:
        if h not in handlers:
            logger.removeHandler(h)
    logger.setLevel(level)
    logger.propagate = propagate
