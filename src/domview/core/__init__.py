# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

from .types import (
    ChainType,
    Representation,
    StructureFormat,
    ViewerState,
)

from .ranges import (
    ResidueSpan,
    ResidueRangeSet,
    format_range,
)

from .atoms import (
    AtomRecord,
    AtomSelection,
)

from .errors import (
    DomViewError,
    ResidueRangeError,
)

from .logger import logger

__all__ = [
    "DomViewError",
    "ResidueRangeError",
    "ChainType",
    "Representation",
    "StructureFormat",
    "ViewerState",
    "ResidueSpan",
    "ResidueRangeSet",
    "format_range",
    "AtomRecord",
    "AtomSelection",
    "logger",
]
