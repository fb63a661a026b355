# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

"""Logging utilities for domview."""

import logging
from domview import __app_name__


def getLogger(name: str = __app_name__) -> logging.Logger:
    """Get the package logger or one of its children.

    Args:
        name: Logger name (defaults to "domview")

    Returns:
        logging.Logger instance
    """
    return logging.getLogger(name)


# Create the default logger instance
logger = getLogger()
