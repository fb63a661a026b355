# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from .base import (
    DOMAIN_COLORS,
    CanvasStyle,
    DisplayOptions,
    LabelStyle,
    Style,
    StyleSpec,
)

__all__ = [
    "DOMAIN_COLORS",
    "CanvasStyle",
    "DisplayOptions",
    "LabelStyle",
    "Style",
    "StyleSpec",
]
