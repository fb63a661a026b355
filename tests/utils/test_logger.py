# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

import logging
from io import StringIO

import pytest
from rich.console import Console
from rich.logging import RichHandler

from domview.core.logger import getLogger, logger
from domview.utils import setup_logging
from domview.utils.logger import LevelAwareFormatter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("domview", level, __file__, 1, message, None, None)


@pytest.mark.parametrize(
    "level,tag",
    [
        (logging.DEBUG, "debug"),
        (logging.INFO, "info"),
        (logging.WARNING, "warning"),
        (logging.ERROR, "error"),
        (logging.CRITICAL, "error"),
    ],
)
def test_formatter_wraps_message_in_level_tag(level, tag):
    record = _record(level, "hello")
    assert LevelAwareFormatter("%(message)s").format(record) == f"[{tag}]hello[/{tag}]"
    assert record.getMessage() == "hello"


def test_package_logger_name():
    assert logger.name == "domview"
    assert getLogger("domview.io").parent is logger


def test_setup_logging_installs_single_rich_handler(restore_root_logger):
    stream = StringIO()
    console = Console(file=stream, width=120)

    setup_logging(logging.INFO, console)
    handler = setup_logging(logging.INFO, console)

    root = restore_root_logger
    assert root.handlers == [handler]
    assert isinstance(handler, RichHandler)
    assert root.level == logging.INFO

    logger.info("Loaded structure 2uub")
    logger.debug("not shown")
    output = stream.getvalue()
    assert "Loaded structure 2uub" in output
    assert "not shown" not in output
