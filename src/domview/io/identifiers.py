# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from typing import Optional
import re

_PDB_ID_PATTERN = re.compile(r"^(?P<pdb>[0-9][A-Za-z0-9]{3})(?:[_:.](?P<chain>[A-Za-z0-9]+))?$")
# ECOD domain ids: e + pdb id + chain + domain number, e.g. e2uubA1
_ECOD_ID_PATTERN = re.compile(r"^e(?P<pdb>[0-9][a-z0-9]{3})(?P<chain>[A-Za-z0-9]+?)(?P<num>\d+)$")


@dataclass(frozen=True)
class StructureId:
    pdb_id: str
    chain_id: Optional[str] = None

    @staticmethod
    def from_string(value: str) -> "StructureId":
        """Parse ``2UUB``, ``2uub_A``, ``2uub:A`` or an ECOD id like ``e2uubA1``.

        Raises:
            ValueError: If the value matches none of these forms.
        """
        value = value.strip()
        match = _PDB_ID_PATTERN.match(value)
        if match:
            return StructureId(match.group("pdb").lower(), match.group("chain"))
        match = _ECOD_ID_PATTERN.match(value)
        if match:
            return StructureId(match.group("pdb"), match.group("chain"))
        raise ValueError(
            f"Invalid structure identifier: '{value}'. Expected a 4-character PDB code, "
            "optionally followed by '_CHAIN'."
        )

    def __str__(self) -> str:
        if self.chain_id:
            return f"{self.pdb_id}_{self.chain_id}"
        return self.pdb_id


def chain_from_domain_id(domain_id: str) -> Optional[str]:
    """Extract the chain from an ECOD domain id, or None for other ids."""
    match = _ECOD_ID_PATTERN.match(domain_id)
    return match.group("chain") if match else None
