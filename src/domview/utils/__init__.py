# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

from .logger import setup_logging

__all__ = ["setup_logging"]
