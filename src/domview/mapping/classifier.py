# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Chain profiling and target chain selection."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from domview.core import AtomRecord, ChainType
from domview.core.logger import logger

from .errors import EmptyStructureError, NoProteinChainFound


@dataclass(frozen=True)
class ChainProfile:
    chain_id: str
    atom_count: int
    ca_count: int
    p_count: int
    residue_numbers: Tuple[int, ...]
    chain_type: ChainType

    @property
    def protein_score(self) -> float:
        return self.ca_count / max(self.atom_count, 1)

    @property
    def nucleic_acid_score(self) -> float:
        return self.p_count / max(self.atom_count, 1)

    @property
    def is_protein(self) -> bool:
        return self.chain_type == ChainType.PROTEIN


@dataclass(frozen=True)
class StructureInfo:
    """Numbering facts about the chain selected for display."""

    chain_id: str
    requested_chain: Optional[str]
    min_residue: int
    max_residue: int
    residue_numbers: Tuple[int, ...]
    chain_ids: Tuple[str, ...]
    chain_type: ChainType
    fallback_reason: Optional[str] = None
    profiles: Tuple[ChainProfile, ...] = field(default=(), compare=False, repr=False)

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class _ChainAccumulator:
    def __init__(self, chain_id: str):
        self.chain_id = chain_id
        self.atom_count = 0
        self.ca_count = 0
        self.p_count = 0
        self.polymer_residues: set = set()
        self.all_residues: set = set()

    def add(self, atom: AtomRecord) -> None:
        self.atom_count += 1
        # Calcium ions are also named CA.
        if atom.atom_name == "CA" and atom.element.capitalize() != "Ca":
            self.ca_count += 1
        elif atom.atom_name == "P":
            self.p_count += 1
        self.all_residues.add(atom.residue_number)
        if not atom.hetero:
            self.polymer_residues.add(atom.residue_number)


class ChainClassifier:
    """Profiles chains and picks the protein chain to display.

    A chain is protein when it has more than ``protein_ca_threshold`` alpha
    carbons, nucleic acid when it has more than ``nucleic_p_threshold``
    phosphates, and unknown otherwise.
    """

    def __init__(self, protein_ca_threshold: int = 10, nucleic_p_threshold: int = 5):
        self.protein_ca_threshold = protein_ca_threshold
        self.nucleic_p_threshold = nucleic_p_threshold

    def _chain_type(self, ca_count: int, p_count: int) -> ChainType:
        if ca_count > self.protein_ca_threshold:
            return ChainType.PROTEIN
        if p_count > self.nucleic_p_threshold:
            return ChainType.NUCLEIC_ACID
        return ChainType.UNKNOWN

    def profile_chains(self, atoms: Iterable[AtomRecord]) -> List[ChainProfile]:
        """Profile every chain, in order of first appearance."""
        accumulators: Dict[str, _ChainAccumulator] = {}
        for atom in atoms:
            acc = accumulators.get(atom.chain_id)
            if acc is None:
                acc = accumulators[atom.chain_id] = _ChainAccumulator(atom.chain_id)
            acc.add(atom)

        profiles = []
        for acc in accumulators.values():
            residues = acc.polymer_residues or acc.all_residues
            profiles.append(
                ChainProfile(
                    chain_id=acc.chain_id,
                    atom_count=acc.atom_count,
                    ca_count=acc.ca_count,
                    p_count=acc.p_count,
                    residue_numbers=tuple(sorted(residues)),
                    chain_type=self._chain_type(acc.ca_count, acc.p_count),
                )
            )
        return profiles

    def classify(
        self, atoms: Iterable[AtomRecord], requested_chain: Optional[str] = None
    ) -> StructureInfo:
        """Select the target chain and describe its numbering.

        A requested chain is used when it exists and is protein. Otherwise
        the protein chain with the most alpha carbons is chosen; ties go to
        the chain that appears first.

        Raises:
            EmptyStructureError: If there are no atoms.
            NoProteinChainFound: If no chain is protein.
        """
        profiles = self.profile_chains(atoms)
        if not profiles:
            raise EmptyStructureError()

        chain_ids = tuple(p.chain_id for p in profiles)
        by_id = {p.chain_id: p for p in profiles}
        for p in profiles:
            logger.debug(
                f"Chain {p.chain_id}: {p.atom_count} atoms, {p.ca_count} CA, "
                f"{p.p_count} P -> {p.chain_type.value}"
            )

        selected: Optional[ChainProfile] = None
        fallback_reason: Optional[str] = None
        if requested_chain is not None:
            requested = by_id.get(requested_chain)
            if requested is None:
                fallback_reason = (
                    f"requested chain {requested_chain} not found "
                    f"(available: {', '.join(chain_ids)})"
                )
            elif not requested.is_protein:
                fallback_reason = (
                    f"requested chain {requested_chain} is {requested.chain_type.value}, "
                    "not protein"
                )
            else:
                selected = requested
            if fallback_reason:
                logger.warning(f"{fallback_reason.capitalize()}; selecting automatically")

        if selected is None:
            proteins = [p for p in profiles if p.is_protein]
            if not proteins:
                raise NoProteinChainFound(chain_ids)
            # max() keeps the first of equal maxima.
            selected = max(proteins, key=lambda p: p.ca_count)
            logger.info(
                f"Selected chain [bold]{selected.chain_id}[/bold] "
                f"({selected.ca_count} CA atoms)"
            )

        residues = selected.residue_numbers
        return StructureInfo(
            chain_id=selected.chain_id,
            requested_chain=requested_chain,
            min_residue=residues[0],
            max_residue=residues[-1],
            residue_numbers=residues,
            chain_ids=chain_ids,
            chain_type=selected.chain_type,
            fallback_reason=fallback_reason,
            profiles=tuple(profiles),
        )
