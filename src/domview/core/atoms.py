# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .ranges import ResidueRangeSet


@dataclass(frozen=True)
class AtomRecord:
    """A single atom of a loaded structure.

    Coordinates are carried for engines that draw; the mapping layer only looks
    at chain, residue number and atom name.
    """

    chain_id: str
    residue_number: int
    atom_name: str
    residue_name: str = ""
    element: str = ""
    hetero: bool = False
    coordinates: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __str__(self) -> str:
        return f"{self.chain_id}:{self.residue_name}{self.residue_number}:{self.atom_name}"


@dataclass(frozen=True)
class AtomSelection:
    """Criteria used to address atoms in a rendering engine.

    Empty fields match everything, so ``AtomSelection()`` selects the whole
    model.
    """

    chain_id: Optional[str] = None
    residues: Optional[ResidueRangeSet] = None
    atom_names: Optional[Tuple[str, ...]] = None
    residue_names: Optional[Tuple[str, ...]] = None
    hetero: Optional[bool] = None

    @staticmethod
    def for_range(chain_id: str, residue_range: str) -> "AtomSelection":
        """Build a selection from a chain id and a residue range string."""
        return AtomSelection(
            chain_id=chain_id, residues=ResidueRangeSet.from_string(residue_range)
        )

    @staticmethod
    def for_residue(chain_id: str, residue_number: int) -> "AtomSelection":
        return AtomSelection(
            chain_id=chain_id,
            residues=ResidueRangeSet.from_bounds(residue_number, residue_number),
        )

    def matches(self, atom: AtomRecord) -> bool:
        if self.chain_id is not None and atom.chain_id != self.chain_id:
            return False
        if self.residues is not None and atom.residue_number not in self.residues:
            return False
        if self.atom_names is not None and atom.atom_name not in self.atom_names:
            return False
        if self.residue_names is not None and atom.residue_name not in self.residue_names:
            return False
        if self.hetero is not None and atom.hetero != self.hetero:
            return False
        return True

    def filter(self, atoms: Iterable[AtomRecord]) -> List[AtomRecord]:
        return [atom for atom in atoms if self.matches(atom)]

    def __str__(self) -> str:
        parts = []
        if self.chain_id is not None:
            parts.append(f"chain {self.chain_id}")
        if self.residues is not None:
            parts.append(f"resi {self.residues}")
        if self.atom_names is not None:
            parts.append(f"atoms {','.join(self.atom_names)}")
        if self.residue_names is not None:
            parts.append(f"resn {','.join(self.residue_names)}")
        if self.hetero is not None:
            parts.append("hetero" if self.hetero else "polymer")
        return " and ".join(parts) if parts else "all"
