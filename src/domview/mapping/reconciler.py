# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Maps domain annotations onto the selected chain's residue numbering."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from domview.core import ResidueRangeError, ResidueRangeSet, ResidueSpan, format_range
from domview.core.domains import DomainAnnotation
from domview.core.logger import logger

from .classifier import StructureInfo


class MappingStrategy(str, Enum):
    EXPLICIT_RANGE = "explicit-range"
    EXPLICIT_BOUNDS = "explicit-bounds"
    DIRECT = "direct"
    OFFSET = "offset"


@dataclass(frozen=True)
class MappedSelection:
    domain_id: str
    chain_id: str
    residue_range: str
    strategy: MappingStrategy

    def __str__(self) -> str:
        return f"{self.chain_id}:{self.residue_range}"


@dataclass(frozen=True)
class MappingFailure:
    domain_id: str
    reason: str


MappingResult = Union[MappedSelection, MappingFailure]


class RangeReconciler:
    """Reconciles sequence numbered domains with structure numbering.

    Rules, first match wins:

    1. an explicit structure range is used verbatim if it lies within the chain;
    2. an explicit structure start/end pair is formatted and used, same bounds;
    3. the sequence range is used unchanged if it lies within the chain;
    4. the sequence range shifted by ``min_residue - 1`` is used if that fits;
    5. otherwise the domain is not mapped.

    Results are values, never exceptions; a failure means the domain is
    skipped.
    """

    def reconcile(
        self, domain: DomainAnnotation, info: StructureInfo
    ) -> MappingResult:
        chain_id = info.chain_id
        if domain.chain_id is not None and domain.chain_id != chain_id:
            logger.debug(
                f"Domain {domain.id} names chain {domain.chain_id}; "
                f"mapping onto selected chain {chain_id}"
            )

        if domain.structure_range:
            try:
                ranges = ResidueRangeSet.from_string(domain.structure_range)
            except ResidueRangeError as e:
                return MappingFailure(domain.id, e.message)
            if not self._within_chain(ranges.start, ranges.end, info):
                return self._out_of_chain(domain, domain.structure_range, info)
            return MappedSelection(
                domain.id, chain_id, domain.structure_range, MappingStrategy.EXPLICIT_RANGE
            )

        if domain.structure_start is not None and domain.structure_end is not None:
            if domain.structure_start > domain.structure_end:
                return MappingFailure(
                    domain.id,
                    f"structure start {domain.structure_start} > end {domain.structure_end}",
                )
            if not self._within_chain(domain.structure_start, domain.structure_end, info):
                return self._out_of_chain(
                    domain, format_range(domain.structure_start, domain.structure_end), info
                )
            return MappedSelection(
                domain.id,
                chain_id,
                format_range(domain.structure_start, domain.structure_end),
                MappingStrategy.EXPLICIT_BOUNDS,
            )

        if domain.start is None or domain.end is None:
            return MappingFailure(domain.id, "no sequence range and no structure range")
        if domain.start > domain.end:
            return MappingFailure(
                domain.id, f"sequence start {domain.start} > end {domain.end}"
            )

        span = ResidueSpan(domain.start, domain.end)
        if span.within(info.min_residue, info.max_residue):
            return MappedSelection(
                domain.id, chain_id, str(span), MappingStrategy.DIRECT
            )

        offset = info.min_residue - 1
        shifted = span.shifted(offset)
        if shifted.within(info.min_residue, info.max_residue):
            logger.debug(f"Domain {domain.id}: {span} shifted by {offset} to {shifted}")
            return MappedSelection(
                domain.id, chain_id, str(shifted), MappingStrategy.OFFSET
            )

        return MappingFailure(
            domain.id,
            f"range {span} does not fit chain {chain_id} "
            f"({info.min_residue}-{info.max_residue}), "
            f"not even shifted by {offset}",
        )

    @staticmethod
    def _within_chain(start: int, end: int, info: StructureInfo) -> bool:
        return info.min_residue <= start and end <= info.max_residue

    @staticmethod
    def _out_of_chain(
        domain: DomainAnnotation, residue_range: str, info: StructureInfo
    ) -> MappingFailure:
        return MappingFailure(
            domain.id,
            f"structure range {residue_range} exceeds chain {info.chain_id} "
            f"({info.min_residue}-{info.max_residue})",
        )
