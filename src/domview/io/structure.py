# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod
from typing import List, Optional

from domview.core import AtomRecord, StructureFormat

from .errors import InvalidStructurePayloadError

CIF_MARKERS = ("data_", "_entry.id")
PDB_MARKERS = ("ATOM", "HETATM", "HEADER")


def detect_format(payload: str) -> Optional[StructureFormat]:
    """Guess the structure format of a text payload from its markers.

    Returns:
        The detected format, or None if no known marker is present.
    """
    if any(marker in payload for marker in CIF_MARKERS):
        return StructureFormat.MMCIF
    if any(marker in payload for marker in PDB_MARKERS):
        return StructureFormat.PDB
    return None


def validate_payload(
    identifier: str,
    payload: str,
    expected: Optional[StructureFormat] = None,
) -> StructureFormat:
    """Check that a fetched payload looks like a structure file.

    Args:
        identifier: Structure identifier, used in error messages
        payload: Text payload as delivered by a source
        expected: Format the source promised, if any

    Returns:
        The detected format.

    Raises:
        InvalidStructurePayloadError: If no format marker is found or the
            detected format differs from ``expected``.
    """
    if not payload or not payload.strip():
        raise InvalidStructurePayloadError(identifier, "payload is empty")

    detected = detect_format(payload)
    if detected is None:
        raise InvalidStructurePayloadError(
            identifier,
            "payload contains no mmCIF marker (data_, _entry.id) "
            "and no PDB record (ATOM, HETATM, HEADER)",
        )
    if expected is not None and detected != expected:
        raise InvalidStructurePayloadError(
            identifier, f"expected {expected.value} but payload looks like {detected.value}"
        )
    return detected


class StructureParser(ABC):
    """Abstract interface for turning structure payloads into atom records."""

    @abstractmethod
    def parse_atoms(
        self, payload: str, fmt: StructureFormat, identifier: str = "structure"
    ) -> List[AtomRecord]:
        """Parse the first model of a payload into atom records.

        Args:
            payload: Text payload (mmCIF or PDB)
            fmt: Format of the payload
            identifier: Name used in error messages

        Returns:
            Atom records in file order.
        """
        pass
