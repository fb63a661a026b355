# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures: an in-memory rendering engine and synthetic structures."""

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from domview.core import AtomRecord, AtomSelection, StructureFormat
from domview.core.domains import DomainAnnotation
from domview.engine import EngineDisposedError, RenderingEngine, RenderingError
from domview.style import LabelStyle, StyleSpec

PROTEIN_ATOMS = ("N", "CA", "C", "O", "CB")
NUCLEIC_ATOMS = ("P", "OP1", "OP2", "C1'")


def protein_atoms(
    chain_id: str, residues: Iterable[int], atom_names: Sequence[str] = PROTEIN_ATOMS
) -> List[AtomRecord]:
    atoms = []
    for i, resnum in enumerate(residues):
        for j, name in enumerate(atom_names):
            atoms.append(
                AtomRecord(
                    chain_id=chain_id,
                    residue_number=resnum,
                    atom_name=name,
                    residue_name="ALA",
                    element=name[0],
                    coordinates=(i * 3.8, math.sin(i) * 2.0, j * 0.5),
                )
            )
    return atoms


def nucleic_atoms(chain_id: str, residues: Iterable[int]) -> List[AtomRecord]:
    return [
        AtomRecord(chain_id, resnum, name, "DA", name[0], False, (i * 6.0, 5.0, 0.0))
        for i, resnum in enumerate(residues)
        for name in NUCLEIC_ATOMS
    ]


def ligand_atoms(chain_id: str, resnum: int, resname: str = "HEM") -> List[AtomRecord]:
    return [
        AtomRecord(chain_id, resnum, "FE", resname, "Fe", True, (0.0, 0.0, 1.0)),
        AtomRecord(chain_id, resnum, "NA", resname, "N", True, (1.0, 0.0, 1.0)),
    ]


class RecordingEngine(RenderingEngine):
    """Rendering engine fake that keeps styles in memory and records calls.

    ``fail_on`` names operations that raise RenderingError; ``fail_times``
    limits how often they fail (None means always).
    """

    def __init__(
        self,
        atoms: Optional[List[AtomRecord]] = None,
        fail_on: Iterable[str] = (),
        fail_times: Optional[int] = None,
    ):
        self.preset_atoms = atoms
        self.atoms: List[AtomRecord] = []
        self.styles: Dict[int, StyleSpec] = {}
        self.labels: List[Tuple[str, AtomSelection]] = []
        self.calls: List[Tuple[str, tuple]] = []
        self.fail_on = set(fail_on)
        self.fail_times = fail_times
        self.destroyed = False
        self.zoom_level = 1.0
        self.renders = 0
        self.background = None
        self.raw: Optional[str] = None

    def _record(self, name: str, *args) -> None:
        if self.destroyed:
            raise EngineDisposedError(name)
        self.calls.append((name, args))
        if name in self.fail_on and (self.fail_times is None or self.fail_times > 0):
            if self.fail_times is not None:
                self.fail_times -= 1
            raise RenderingError(f"{name} failed")

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def load_model(self, raw: str, fmt: StructureFormat) -> None:
        self._record("load_model", fmt)
        self.raw = raw
        self.atoms = list(self.preset_atoms or [])
        self.styles = {}

    def select_atoms(self, selection: AtomSelection) -> List[AtomRecord]:
        self._record("select_atoms", selection)
        return selection.filter(self.atoms)

    def set_style(self, selection: AtomSelection, style: StyleSpec) -> None:
        self._record("set_style", selection, style)
        for i, atom in enumerate(self.atoms):
            if selection.matches(atom):
                self.styles[i] = style

    def set_background(self, color) -> None:
        self._record("set_background", color)
        self.background = color

    def render(self) -> None:
        self._record("render")
        self.renders += 1

    def zoom_to(self, selection=None, duration: float = 0) -> None:
        self._record("zoom_to", selection, duration)

    def zoom(self, factor: float) -> None:
        self._record("zoom", factor)
        self.zoom_level *= factor

    def add_label(self, text: str, anchor: AtomSelection, style: Optional[LabelStyle] = None) -> None:
        self._record("add_label", text, anchor)
        self.labels.append((text, anchor))

    def remove_all_labels(self) -> None:
        self._record("remove_all_labels")
        self.labels = []

    def export_image(self) -> str:
        self._record("export_image")
        return "data:image/png;base64,AAAA"

    def destroy(self) -> None:
        self.destroyed = True

    # Inspection helpers
    def style_at(self, chain_id: str, residue_number: int, atom_name: str = "CA") -> Optional[StyleSpec]:
        for i, atom in enumerate(self.atoms):
            if (atom.chain_id, atom.residue_number, atom.atom_name) == (chain_id, residue_number, atom_name):
                return self.styles.get(i)
        return None


def build_cif(
    chains: Dict[str, Tuple[str, Sequence[int]]],
    entry_id: str = "TEST",
    ligands: Sequence[Tuple[str, int, str]] = (),
) -> str:
    """Build a minimal mmCIF payload.

    ``chains`` maps chain id to ``("protein" | "dna", residue numbers)``;
    ``ligands`` are ``(chain, residue number, residue name)`` HETATM groups.
    """
    lines = [
        f"data_{entry_id}",
        f"_entry.id {entry_id}",
        "loop_",
        "_atom_site.group_PDB",
        "_atom_site.id",
        "_atom_site.type_symbol",
        "_atom_site.label_atom_id",
        "_atom_site.label_alt_id",
        "_atom_site.label_comp_id",
        "_atom_site.label_asym_id",
        "_atom_site.label_entity_id",
        "_atom_site.label_seq_id",
        "_atom_site.pdbx_PDB_ins_code",
        "_atom_site.Cartn_x",
        "_atom_site.Cartn_y",
        "_atom_site.Cartn_z",
        "_atom_site.occupancy",
        "_atom_site.B_iso_or_equiv",
        "_atom_site.auth_seq_id",
        "_atom_site.auth_asym_id",
        "_atom_site.pdbx_PDB_model_num",
    ]
    serial = 1

    def add(group, element, name, resname, chain, entity, seq, resnum, xyz):
        nonlocal serial
        x, y, z = xyz
        lines.append(
            f"{group} {serial} {element} {name} . {resname} {chain} {entity} {seq} ? "
            f"{x:.3f} {y:.3f} {z:.3f} 1.00 20.00 {resnum} {chain} 1"
        )
        serial += 1

    for entity, (chain_id, (kind, residues)) in enumerate(chains.items(), start=1):
        offset = entity * 20.0
        for i, resnum in enumerate(residues):
            base = (i * 3.8, offset + math.sin(i) * 2.0, math.cos(i) * 2.0)
            if kind == "protein":
                for j, name in enumerate(("N", "CA", "C", "O")):
                    xyz = (base[0] + j * 0.4, base[1], base[2] + j * 0.3)
                    add("ATOM", name[0], name, "ALA", chain_id, entity, i + 1, resnum, xyz)
            else:
                for j, name in enumerate(("P", "OP1", "C1'")):
                    element = "C" if name == "C1'" else name[0]
                    xyz = (base[0] + j * 0.5, base[1], base[2])
                    add("ATOM", element, f'"{name}"' if "'" in name else name, "DA", chain_id, entity, i + 1, resnum, xyz)

    for chain_id, resnum, resname in ligands:
        element, name = ("O", "O") if resname == "HOH" else ("FE", "FE")
        add("HETATM", element, name, resname, chain_id, len(chains) + 1, ".", resnum, (0.0, 0.0, 0.0))

    return "\n".join(lines) + "\n#\n"


def domain(domain_id: str, start: Optional[int] = None, end: Optional[int] = None, **kwargs) -> DomainAnnotation:
    return DomainAnnotation(id=domain_id, start=start, end=end, **kwargs)


@pytest.fixture
def two_chain_atoms() -> List[AtomRecord]:
    """Chain A: protein numbered 20..140 (121 CA). Chain B: DNA with 40 P."""
    return protein_atoms("A", range(20, 141)) + nucleic_atoms("B", range(1, 41))


@pytest.fixture
def recording_engine(two_chain_atoms) -> RecordingEngine:
    engine = RecordingEngine(two_chain_atoms)
    engine.load_model("", StructureFormat.MMCIF)
    engine.calls.clear()
    return engine


@pytest.fixture
def engine_cls():
    return RecordingEngine


@pytest.fixture
def make_protein():
    return protein_atoms


@pytest.fixture
def make_nucleic():
    return nucleic_atoms


@pytest.fixture
def make_ligand():
    return ligand_atoms


@pytest.fixture
def make_cif():
    return build_cif


@pytest.fixture
def make_domain():
    return domain
