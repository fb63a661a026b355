# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from .classifier import ChainClassifier, ChainProfile, StructureInfo
from .errors import ClassificationError, EmptyStructureError, NoProteinChainFound
from .reconciler import (
    MappedSelection,
    MappingFailure,
    MappingResult,
    MappingStrategy,
    RangeReconciler,
)
from .verifier import SelectionBuilder, SelectionVerifier, polymer_selection

__all__ = [
    "ChainClassifier",
    "ChainProfile",
    "StructureInfo",
    "ClassificationError",
    "EmptyStructureError",
    "NoProteinChainFound",
    "MappedSelection",
    "MappingFailure",
    "MappingResult",
    "MappingStrategy",
    "RangeReconciler",
    "SelectionBuilder",
    "SelectionVerifier",
    "polymer_selection",
]
