# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

from typing import List

import gemmi

from domview.core import AtomRecord, StructureFormat

from .errors import StructureParseError
from .structure import StructureParser


class GemmiStructureParser(StructureParser):
    def parse_atoms(
        self, payload: str, fmt: StructureFormat, identifier: str = "structure"
    ) -> List[AtomRecord]:
        """Parse the first model with gemmi, using author chain ids and numbering."""
        structure = self._parse_structure(payload, fmt, identifier)
        if len(structure) == 0:
            raise StructureParseError(identifier, "structure contains no models")

        atoms = []
        for chain in structure[0]:
            for residue in chain:
                hetero = residue.het_flag == "H"
                for atom in residue:
                    atoms.append(
                        AtomRecord(
                            chain_id=chain.name,
                            residue_number=residue.seqid.num,
                            atom_name=atom.name,
                            residue_name=residue.name,
                            element=atom.element.name,
                            hetero=hetero,
                            coordinates=(atom.pos.x, atom.pos.y, atom.pos.z),
                        )
                    )
        return atoms

    def _parse_structure(
        self, payload: str, fmt: StructureFormat, identifier: str
    ) -> gemmi.Structure:
        try:
            if fmt == StructureFormat.MMCIF:
                block = gemmi.cif.read_string(payload).sole_block()
                return gemmi.make_structure_from_block(block)
            return gemmi.read_pdb_string(payload)
        except (RuntimeError, ValueError) as e:
            raise StructureParseError(identifier, str(e)) from e
