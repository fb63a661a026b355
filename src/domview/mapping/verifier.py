# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import replace
from typing import Callable, Optional

from domview.core import AtomSelection, ResidueRangeError
from domview.core.logger import logger
from domview.engine import RenderingEngine, RenderingError

from .reconciler import MappedSelection, MappingFailure, MappingResult

SelectionBuilder = Callable[[MappedSelection], AtomSelection]


def polymer_selection(mapped: MappedSelection) -> AtomSelection:
    """Polymer atoms of the mapped chain and range; ligands and water excluded."""
    return replace(
        AtomSelection.for_range(mapped.chain_id, mapped.residue_range), hetero=False
    )


class SelectionVerifier:
    """Checks that a mapped selection resolves to at least one atom.

    ``selection_for`` must build the same selection that is later styled,
    so a domain only counts as verified if styling it colors something.
    """

    def __init__(
        self,
        engine: RenderingEngine,
        selection_for: Optional[SelectionBuilder] = None,
    ):
        self.engine = engine
        self.selection_for = selection_for or polymer_selection

    def verify(self, mapped: MappedSelection) -> MappingResult:
        try:
            selection = self.selection_for(mapped)
            atom_count = len(self.engine.select_atoms(selection))
        except (RenderingError, ResidueRangeError) as e:
            return MappingFailure(mapped.domain_id, f"selection {mapped} failed: {e.message}")

        logger.debug(f"Selection {mapped} matched {atom_count} atoms")
        if atom_count == 0:
            return MappingFailure(mapped.domain_id, f"selection {mapped} matched no atoms")
        return mapped
