# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from .base import RenderingEngine
from .errors import EngineDisposedError, RenderingError
from .projection import Orientation, calculate_inertia_orientation
from .svg import SvgRenderingEngine

__all__ = [
    "RenderingEngine",
    "RenderingError",
    "EngineDisposedError",
    "Orientation",
    "calculate_inertia_orientation",
    "SvgRenderingEngine",
]
