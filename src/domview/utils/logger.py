# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

"""Console logging setup for domview hosts."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


RICH_THEME = Theme(
    {
        "error": "bold red",
        "warning": "yellow",
        "info": "green",
        "debug": "blue",
    }
)

_LEVEL_TAGS = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, "info"),
)


class LevelAwareFormatter(logging.Formatter):
    """Wraps each message in the Rich theme tag matching its level."""

    def format(self, record: logging.LogRecord) -> str:
        original_message = record.getMessage()

        tag = "debug"
        for threshold, name in _LEVEL_TAGS:
            if record.levelno >= threshold:
                tag = name
                break

        # Only the formatted copy carries markup; getMessage() stays plain.
        record.message = f"[{tag}]{original_message}[/{tag}]"
        try:
            return self.formatMessage(record)
        finally:
            record.message = original_message


def setup_logging(
    level: int = logging.WARNING,
    console: Optional[Console] = None,
) -> RichHandler:
    """Configure the root logger with Rich formatting.

    Existing root handlers are removed, so calling this twice does not
    duplicate output.

    Args:
        level: Logging level for the root logger (defaults to WARNING)
        console: Optional Rich console instance to use

    Returns:
        The installed RichHandler.
    """
    if console is None:
        console = Console(theme=RICH_THEME, stderr=True)

    root = logging.getLogger()
    if root.handlers:
        root.handlers.clear()
    root.setLevel(level)

    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        omit_repeated_times=False,
        show_path=False,
        enable_link_path=True,
        markup=True,
        log_time_format="[%X]",
    )
    rich_handler.setFormatter(
        LevelAwareFormatter("%(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    root.addHandler(rich_handler)
    return rich_handler
