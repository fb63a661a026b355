# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic_extra_types.color import Color

from domview.core import AtomRecord, AtomSelection, StructureFormat
from domview.style import LabelStyle, StyleSpec


class RenderingEngine(ABC):
    """Capability set the viewer needs from a molecular rendering engine.

    Implementations raise RenderingError (or a subclass) when a call fails
    and EngineDisposedError for any call after ``destroy()``.
    """

    @abstractmethod
    def load_model(self, raw: str, fmt: StructureFormat) -> None:
        """Replace the current model with one parsed from ``raw``."""

    @abstractmethod
    def select_atoms(self, selection: AtomSelection) -> List[AtomRecord]:
        """Return the atoms of the current model matching ``selection``."""

    @abstractmethod
    def set_style(self, selection: AtomSelection, style: StyleSpec) -> None:
        """Replace the style of every atom matching ``selection``."""

    @abstractmethod
    def set_background(self, color: Color) -> None:
        pass

    @abstractmethod
    def render(self) -> None:
        """Redraw the scene with the current styles, camera and labels."""

    @abstractmethod
    def zoom_to(
        self, selection: Optional[AtomSelection] = None, duration: float = 0
    ) -> None:
        """Frame the camera on ``selection``, or on the whole model."""

    @abstractmethod
    def zoom(self, factor: float) -> None:
        """Multiply the current magnification by ``factor``."""

    @abstractmethod
    def add_label(
        self, text: str, anchor: AtomSelection, style: Optional[LabelStyle] = None
    ) -> None:
        pass

    @abstractmethod
    def remove_all_labels(self) -> None:
        pass

    @abstractmethod
    def export_image(self) -> str:
        """Return the current view as a data URI."""

    @abstractmethod
    def destroy(self) -> None:
        """Release the model. Safe to call more than once."""
