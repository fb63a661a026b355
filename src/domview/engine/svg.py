# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Headless rendering engine that draws an orthographic SVG snapshot."""

import base64
from dataclasses import dataclass
from itertools import groupby
from typing import Dict, List, Optional, Tuple

import numpy as np
from drawsvg import Circle, Drawing, Group, Path, Rectangle, Text
from pydantic_extra_types.color import Color

from domview.core import AtomRecord, AtomSelection, Representation, StructureFormat
from domview.core.logger import logger
from domview.io.errors import StructureParseError
from domview.io.structure import StructureParser
from domview.io.structure_gemmi_adapter import GemmiStructureParser
from domview.style import CanvasStyle, LabelStyle, StyleSpec

from .base import RenderingEngine
from .errors import EngineDisposedError, RenderingError
from .projection import Orientation, calculate_inertia_orientation

TRACE_ATOMS = ("CA", "P")

# Pixel widths of backbone traces.
_TRACE_WIDTH = {
    Representation.CARTOON: 6.0,
    Representation.BALL_AND_STICK: 2.0,
    Representation.STICK: 3.0,
    Representation.LINE: 1.5,
}
# Radii in Angstrom for representations drawn as atoms.
_ATOM_RADIUS = {
    Representation.SPHERE: 1.5,
    Representation.SPACEFILL: 1.8,
    Representation.SURFACE: 2.2,
    Representation.BALL_AND_STICK: 0.5,
}


@dataclass
class _Label:
    text: str
    position: np.ndarray
    style: LabelStyle


class SvgRenderingEngine(RenderingEngine):
    """Rendering engine backed by gemmi for parsing and drawsvg for output.

    Every atom of the first model carries one StyleSpec; ``set_style``
    replaces it. Backbone traces (CA or P atoms) are drawn as paths for
    trace representations, and every visible atom is drawn as a circle for
    sphere-like representations.
    """

    def __init__(
        self,
        canvas: Optional[CanvasStyle] = None,
        background_color: Color = Color("#FFFFFF"),
        parser: Optional[StructureParser] = None,
    ):
        self.canvas = canvas or CanvasStyle()
        self.background_color = background_color
        self.parser = parser or GemmiStructureParser()

        self._atoms: List[AtomRecord] = []
        self._styles: List[StyleSpec] = []
        self._coords_2d = np.zeros((0, 2))
        self._orientation: Optional[Orientation] = None
        self._labels: List[_Label] = []
        self._center = np.zeros(2)
        self._scale = 1.0
        self._drawing: Optional[Drawing] = None
        self._disposed = False
        self.render_count = 0

    # --- Capability set --- #

    def load_model(self, raw: str, fmt: StructureFormat) -> None:
        self._ensure_alive("load_model")
        try:
            atoms = self.parser.parse_atoms(raw, fmt)
        except StructureParseError as e:
            raise RenderingError(e.message) from e
        if not atoms:
            raise RenderingError("model contains no atoms")

        coords = np.array([atom.coordinates for atom in atoms], dtype=float)
        self._atoms = atoms
        self._styles = [StyleSpec(representation=Representation.LINE)] * len(atoms)
        self._orientation = calculate_inertia_orientation(coords)
        self._coords_2d = self._orientation.project(coords)
        self._labels = []
        self._drawing = None
        self._frame(np.arange(len(atoms)))
        logger.debug(f"Loaded model with {len(atoms)} atoms")

    def select_atoms(self, selection: AtomSelection) -> List[AtomRecord]:
        self._ensure_alive("select_atoms")
        return selection.filter(self._atoms)

    def set_style(self, selection: AtomSelection, style: StyleSpec) -> None:
        self._ensure_alive("set_style")
        for index in self._indices(selection):
            self._styles[index] = style

    def set_background(self, color: Color) -> None:
        self._ensure_alive("set_background")
        self.background_color = color

    def render(self) -> None:
        self._ensure_alive("render")
        self._drawing = self._draw()
        self.render_count += 1

    def zoom_to(
        self, selection: Optional[AtomSelection] = None, duration: float = 0
    ) -> None:
        """Frame ``selection``; ``duration`` has no effect on a still image."""
        self._ensure_alive("zoom_to")
        indices = self._indices(selection or AtomSelection())
        if len(indices) == 0:
            raise RenderingError(f"cannot zoom to empty selection ({selection})")
        self._frame(indices)

    def zoom(self, factor: float) -> None:
        self._ensure_alive("zoom")
        if factor <= 0:
            raise RenderingError(f"zoom factor must be positive, got {factor}")
        self._scale *= factor

    def add_label(
        self, text: str, anchor: AtomSelection, style: Optional[LabelStyle] = None
    ) -> None:
        self._ensure_alive("add_label")
        indices = self._indices(anchor)
        if len(indices) == 0:
            raise RenderingError(f"label anchor matched no atoms ({anchor})")
        position = self._coords_2d[indices].mean(axis=0)
        self._labels.append(_Label(text, position, style or LabelStyle()))

    def remove_all_labels(self) -> None:
        self._ensure_alive("remove_all_labels")
        self._labels = []

    def export_image(self) -> str:
        self._ensure_alive("export_image")
        if self._drawing is None:
            self.render()
        encoded = base64.b64encode(self._drawing.as_svg().encode("utf-8"))
        return "data:image/svg+xml;base64," + encoded.decode("ascii")

    def destroy(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._atoms = []
        self._styles = []
        self._labels = []
        self._drawing = None
        logger.debug("Rendering engine destroyed")

    # --- Helpers --- #

    @property
    def is_destroyed(self) -> bool:
        return self._disposed

    @property
    def scale(self) -> float:
        return self._scale

    def style_of(self, atom_index: int) -> StyleSpec:
        return self._styles[atom_index]

    def get_svg_string(self) -> str:
        self._ensure_alive("get_svg_string")
        if self._drawing is None:
            self.render()
        return self._drawing.as_svg()

    def _ensure_alive(self, operation: str) -> None:
        if self._disposed:
            raise EngineDisposedError(operation)
        if operation not in ("load_model", "set_background") and self._orientation is None:
            raise RenderingError(f"cannot call {operation}() before load_model()")

    def _indices(self, selection: AtomSelection) -> np.ndarray:
        return np.array(
            [i for i, atom in enumerate(self._atoms) if selection.matches(atom)],
            dtype=int,
        )

    def _frame(self, indices: np.ndarray) -> None:
        points = self._coords_2d[indices]
        lower, upper = points.min(axis=0), points.max(axis=0)
        extent = np.maximum(upper - lower, 1.0)
        usable = 1.0 - 2 * self.canvas.padding
        self._center = (lower + upper) / 2
        self._scale = float(
            min(
                self.canvas.width * usable / extent[0],
                self.canvas.height * usable / extent[1],
            )
        )

    def _to_canvas(self, points: np.ndarray) -> np.ndarray:
        offset = (points - self._center) * self._scale
        # SVG y grows downwards.
        return np.column_stack(
            (self.canvas.width / 2 + offset[:, 0], self.canvas.height / 2 - offset[:, 1])
        )

    def _draw(self) -> Drawing:
        drawing = Drawing(self.canvas.width, self.canvas.height)
        drawing.append(
            Rectangle(
                0,
                0,
                self.canvas.width,
                self.canvas.height,
                fill=self.background_color.as_hex(),
                class_="background",
            )
        )
        root_group = Group(id="domview-root")
        drawing.append(root_group)

        chain_ids = list(dict.fromkeys(atom.chain_id for atom in self._atoms))
        for chain_id in chain_ids:
            chain_group = Group(id=f"chain-{chain_id}", class_="chain")
            for element in self._draw_chain(chain_id):
                chain_group.append(element)
            root_group.append(chain_group)

        for i, label in enumerate(self._labels):
            root_group.append(self._draw_label(label, f"label-{i}"))
        return drawing

    def _draw_chain(self, chain_id: str) -> List:
        elements = []
        trace = [
            i
            for i, atom in enumerate(self._atoms)
            if atom.chain_id == chain_id and atom.atom_name in TRACE_ATOMS and not atom.hetero
        ]
        for segment in self._trace_segments(trace):
            path = self._draw_trace(segment)
            if path is not None:
                elements.append(path)

        for i, atom in enumerate(self._atoms):
            if atom.chain_id != chain_id:
                continue
            style = self._styles[i]
            if not style.visible:
                continue
            radius = self._atom_radius(atom, style)
            if radius is None:
                continue
            cx, cy = self._to_canvas(self._coords_2d[i : i + 1])[0]
            elements.append(
                Circle(
                    cx=cx,
                    cy=cy,
                    r=max(radius * self._scale, 0.5),
                    fill=style.color.as_hex(),
                    opacity=style.opacity,
                    class_="atom",
                )
            )
        return elements

    def _atom_radius(self, atom: AtomRecord, style: StyleSpec) -> Optional[float]:
        """Radius in Angstrom if the atom is drawn as a circle, else None."""
        if style.representation in _ATOM_RADIUS:
            return _ATOM_RADIUS[style.representation]
        if atom.hetero:
            return 0.4
        if style.representation == Representation.STICK and atom.atom_name not in TRACE_ATOMS:
            return 0.4
        return None

    def _trace_segments(self, trace: List[int]) -> List[List[int]]:
        """Split a chain trace into runs drawn with one style.

        A run breaks at residue gaps, hidden atoms, non-trace representations
        and style changes; a new run starts at the last point of the previous
        one so colored runs stay connected.
        """
        segments: List[List[int]] = []
        previous: Optional[int] = None
        visible = [
            i for i in trace
            if self._styles[i].visible and self._styles[i].representation in _TRACE_WIDTH
        ]
        for _, run in groupby(visible, key=lambda i: self._styles[i]):
            run = list(run)
            if previous is not None and self._contiguous(previous, run[0]):
                run.insert(0, previous)
            segments.extend(self._split_gaps(run))
            previous = run[-1]
        return segments

    def _split_gaps(self, run: List[int]) -> List[List[int]]:
        pieces: List[List[int]] = [[run[0]]]
        for prev, current in zip(run, run[1:]):
            if self._contiguous(prev, current):
                pieces[-1].append(current)
            else:
                pieces.append([current])
        return pieces

    def _contiguous(self, a: int, b: int) -> bool:
        return 0 < self._atoms[b].residue_number - self._atoms[a].residue_number <= 1

    def _draw_trace(self, segment: List[int]) -> Optional[Path]:
        if len(segment) < 2:
            return None
        style = self._styles[segment[-1]]
        points = self._to_canvas(self._coords_2d[segment])
        d_parts = [f"M {points[0, 0]},{points[0, 1]}"]
        for point in points[1:]:
            d_parts.append(f"L {point[0]},{point[1]}")
        return Path(
            d=" ".join(d_parts),
            stroke=style.color.as_hex(),
            stroke_width=_TRACE_WIDTH[style.representation],
            fill="none",
            stroke_linecap="round",
            stroke_linejoin="round",
            opacity=style.opacity,
            class_=f"trace {style.representation.value}",
        )

    def _draw_label(self, label: _Label, element_id: str) -> Group:
        x, y = self._to_canvas(label.position.reshape(1, 2))[0]
        style = label.style
        width = style.font_size * 0.6 * len(label.text) + 8
        height = style.font_size + 6
        group = Group(id=element_id, class_="label")
        group.append(
            Rectangle(
                x - width / 2,
                y - height / 2,
                width,
                height,
                fill=style.background_color.as_hex(),
                fill_opacity=style.background_opacity,
                stroke=style.border_color.as_hex(),
            )
        )
        group.append(
            Text(
                text=label.text,
                font_size=style.font_size,
                fill=style.font_color.as_hex(),
                x=x,
                y=y,
                text_anchor="middle",
                dominant_baseline="middle",
            )
        )
        return group

    def visible_atom_counts(self) -> Dict[Tuple[str, str], int]:
        """Count visible atoms per (chain, color) pair."""
        counts: Dict[Tuple[str, str], int] = {}
        for atom, style in zip(self._atoms, self._styles):
            if style.visible:
                key = (atom.chain_id, style.color.as_hex())
                counts[key] = counts.get(key, 0) + 1
        return counts
