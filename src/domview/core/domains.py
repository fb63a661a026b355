# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_extra_types.color import Color


class DomainClassification(BaseModel):
    """ECOD hierarchy groups a domain was assigned to."""

    model_config = ConfigDict(frozen=True)

    a_group: Optional[str] = Field(default=None, description="Architecture")
    x_group: Optional[str] = Field(default=None, description="Possible homology")
    h_group: Optional[str] = Field(default=None, description="Homology")
    t_group: Optional[str] = Field(default=None, description="Topology")


class DomainAnnotation(BaseModel):
    """A labeled sub-range of a protein chain from an external classifier.

    ``start``/``end`` are sequence numbered. ``structure_range`` or the
    ``structure_start``/``structure_end`` pair, when present, are already in the
    structure file's own numbering.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    chain_id: Optional[str] = Field(default=None, alias="chain")
    start: Optional[int] = None
    end: Optional[int] = None
    structure_range: Optional[str] = Field(default=None, alias="pdb_range")
    structure_start: Optional[int] = Field(default=None, alias="pdb_start")
    structure_end: Optional[int] = Field(default=None, alias="pdb_end")
    color: Optional[Color] = None
    label: Optional[str] = None
    classification: Optional[DomainClassification] = None

    @property
    def display_label(self) -> str:
        return self.label or self.id

    def mapping_key(self) -> tuple:
        """Fields that decide where the domain lands in the structure."""
        return (
            self.start,
            self.end,
            self.structure_range,
            self.structure_start,
            self.structure_end,
            self.chain_id,
        )
