# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for domview."""

from domview.cli.main import app

__all__ = ["app"]
