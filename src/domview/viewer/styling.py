# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Drives a rendering engine so each domain shows as a colored region."""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Union

from pydantic_extra_types.color import Color

from domview.core import AtomSelection, Representation
from domview.core.domains import DomainAnnotation
from domview.core.logger import logger
from domview.engine import EngineDisposedError, RenderingEngine, RenderingError
from domview.mapping import (
    MappedSelection,
    MappingFailure,
    RangeReconciler,
    SelectionVerifier,
    StructureInfo,
    polymer_selection,
)
from domview.style import DOMAIN_COLORS, DisplayOptions, LabelStyle, StyleSpec

BACKBONE_ATOMS = ("N", "CA", "C", "O", "P", "OP1", "OP2", "O5'", "C5'", "C4'", "C3'", "O3'")
WATER_NAMES = ("HOH", "WAT", "DOD")
HIGHLIGHT_COLOR = Color("yellow")
LIGAND_COLOR = Color("#C8C8C8")


@dataclass(frozen=True)
class DomainOutcome:
    """What happened to one domain in a styling pass."""

    index: int
    domain_id: str
    selection: Optional[MappedSelection] = None
    color: Optional[str] = None
    reason: Optional[str] = None

    @property
    def styled(self) -> bool:
        return self.selection is not None


@dataclass
class StylingReport:
    outcomes: List[DomainOutcome] = field(default_factory=list)

    @property
    def styled(self) -> List[DomainOutcome]:
        return [o for o in self.outcomes if o.styled]

    @property
    def skipped(self) -> List[DomainOutcome]:
        return [o for o in self.outcomes if not o.styled]

    @property
    def styled_count(self) -> int:
        return len(self.styled)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class DomainStylingController:
    """Owns one rendering engine and keeps its styling in sync with domains.

    A styling pass hides everything, draws the selected chain in the neutral
    base style, colors each domain that maps and verifies, and redraws. The
    control surface operations each fall back to a full pass when the engine
    fails mid-way.
    """

    ZOOM_IN_FACTOR = 1.2
    ZOOM_OUT_FACTOR = 0.8
    ZOOM_DURATION_MS = 1000

    def __init__(
        self,
        engine: RenderingEngine,
        info: StructureInfo,
        domains: Sequence[DomainAnnotation] = (),
        options: Optional[DisplayOptions] = None,
        palette: Sequence[Union[str, Color]] = DOMAIN_COLORS,
        reconciler: Optional[RangeReconciler] = None,
        label_style: Optional[LabelStyle] = None,
    ):
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self.engine = engine
        self.info = info
        self.domains: List[DomainAnnotation] = list(domains)
        self.options = options or DisplayOptions()
        self.palette = [Color(c) if isinstance(c, str) else c for c in palette]
        self.reconciler = reconciler or RangeReconciler()
        self.verifier = SelectionVerifier(engine, self._domain_selection)
        self.label_style = label_style or LabelStyle()
        self.last_report: Optional[StylingReport] = None
        self._mapped: Dict[int, MappedSelection] = {}
        self._disposed = False

    # --- Context manager / resource ownership --- #

    def __enter__(self) -> "DomainStylingController":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def dispose(self) -> None:
        """Destroy the owned engine. Further calls raise EngineDisposedError."""
        if self._disposed:
            return
        self._disposed = True
        self._mapped = {}
        self.engine.destroy()

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # --- Styling pass --- #

    def apply(self) -> StylingReport:
        """Run a full styling pass and redraw.

        Raises:
            RenderingError: If the engine fails outside a single domain.
        """
        report = self._styling_pass()
        self.engine.render()
        return report

    def set_domains(self, domains: Sequence[DomainAnnotation]) -> StylingReport:
        self.domains = list(domains)
        return self.apply()

    def color_for(self, index: int) -> Color:
        domain = self.domains[index]
        if domain.color is not None:
            return domain.color
        return self.palette[index % len(self.palette)]

    def mapped_selection(self, index: int) -> Optional[MappedSelection]:
        return self._mapped.get(index)

    def _styling_pass(self) -> StylingReport:
        self._ensure_alive("apply")
        opts = self.options
        engine = self.engine

        engine.remove_all_labels()
        engine.set_style(AtomSelection(), StyleSpec.hidden())
        engine.set_style(self._chain_selection(), self._base_style())
        if opts.show_ligands:
            engine.set_style(
                AtomSelection(hetero=True),
                StyleSpec(representation=Representation.STICK, color=LIGAND_COLOR),
            )
        engine.set_style(
            AtomSelection(residue_names=WATER_NAMES),
            StyleSpec(representation=Representation.SPHERE, color=Color("red"), opacity=0.6)
            if opts.show_water
            else StyleSpec.hidden(),
        )

        report = StylingReport()
        self._mapped = {}
        for index, domain in enumerate(self.domains):
            outcome = self._style_domain(index, domain)
            report.outcomes.append(outcome)
            if outcome.styled:
                self._mapped[index] = outcome.selection
            else:
                logger.debug(f"Skipped domain {domain.id}: {outcome.reason}")

        logger.info(
            f"Styled {report.styled_count}/{len(self.domains)} domains on chain "
            f"{self.info.chain_id}"
            + (f" ({report.skipped_count} skipped)" if report.skipped_count else "")
        )
        self.last_report = report
        return report

    def _style_domain(self, index: int, domain: DomainAnnotation) -> DomainOutcome:
        result = self.reconciler.reconcile(domain, self.info)
        if isinstance(result, MappedSelection):
            result = self.verifier.verify(result)
        if isinstance(result, MappingFailure):
            return DomainOutcome(index, domain.id, reason=result.reason)

        color = self.color_for(index)
        selection = self._domain_selection(result)
        try:
            self.engine.set_style(
                selection,
                StyleSpec(representation=self.options.representation, color=color),
            )
            if self.options.show_labels:
                self.engine.add_label(domain.display_label, selection, self.label_style)
        except EngineDisposedError:
            raise
        except RenderingError as e:
            self._restore_base(selection)
            return DomainOutcome(index, domain.id, reason=e.message)
        return DomainOutcome(index, domain.id, selection=result, color=color.as_hex())

    def _base_style(self, opacity: Optional[float] = None) -> StyleSpec:
        opts = self.options
        return StyleSpec(
            representation=opts.representation,
            color=opts.base_color,
            opacity=opts.base_opacity if opacity is None else opacity,
        )

    def _restore_base(self, selection: AtomSelection) -> None:
        """Put a domain that failed half-way back into the base style."""
        try:
            self.engine.set_style(selection, self._base_style())
        except EngineDisposedError:
            raise
        except RenderingError as e:
            logger.warning(f"Could not reset {selection} to the base style: {e.message}")

    def _chain_selection(self) -> AtomSelection:
        selection = AtomSelection(chain_id=self.info.chain_id, hetero=False)
        if not self.options.show_side_chains:
            selection = replace(selection, atom_names=BACKBONE_ATOMS)
        return selection

    def _domain_selection(self, mapped: MappedSelection) -> AtomSelection:
        selection = polymer_selection(mapped)
        if not self.options.show_side_chains:
            selection = replace(selection, atom_names=BACKBONE_ATOMS)
        return selection

    # --- Control surface --- #

    def reset(self) -> bool:
        """Restore the overview: full styling, no highlight, whole chain framed."""
        try:
            self._styling_pass()
            self.engine.zoom_to(
                AtomSelection(chain_id=self.info.chain_id), self.ZOOM_DURATION_MS
            )
            self.engine.render()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("reset", e)
        return True

    def highlight_domain(self, index: int) -> bool:
        """Dim the chain, show one domain at full opacity and frame it.

        Returns:
            False if the domain was not styled in the last pass or the engine
            failed.
        """
        self._ensure_alive("highlight_domain")
        mapped = self._mapped.get(index)
        if mapped is None:
            logger.warning(f"Cannot highlight domain #{index}: it is not mapped")
            return False
        opts = self.options
        try:
            self.engine.set_style(
                self._chain_selection(), self._base_style(opts.dim_opacity)
            )
            selection = self._domain_selection(mapped)
            self.engine.set_style(
                selection,
                StyleSpec(representation=opts.representation, color=self.color_for(index)),
            )
            self.engine.zoom_to(selection, self.ZOOM_DURATION_MS)
            self.engine.render()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("highlight_domain", e)
        return True

    def zoom_to_domain(self, index: int) -> bool:
        self._ensure_alive("zoom_to_domain")
        mapped = self._mapped.get(index)
        if mapped is None:
            logger.warning(f"Cannot zoom to domain #{index}: it is not mapped")
            return False
        try:
            self.engine.zoom_to(self._domain_selection(mapped), self.ZOOM_DURATION_MS)
            self.engine.render()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("zoom_to_domain", e)
        return True

    def export_image(self) -> Optional[str]:
        """Return the current view as a data URI, or None if export failed."""
        self._ensure_alive("export_image")
        try:
            return self.engine.export_image()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            self._recover("export_image", e)
            return None

    def update_display_style(self, options: DisplayOptions) -> bool:
        self._ensure_alive("update_display_style")
        self.options = options
        try:
            self.engine.set_background(options.background_color)
            self.apply()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("update_display_style", e)
        return True

    def zoom_in(self) -> bool:
        return self._zoom(self.ZOOM_IN_FACTOR)

    def zoom_out(self) -> bool:
        return self._zoom(self.ZOOM_OUT_FACTOR)

    def _zoom(self, factor: float) -> bool:
        self._ensure_alive("zoom")
        try:
            self.engine.zoom(factor)
            self.engine.render()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("zoom", e)
        return True

    def highlight_residue(self, residue_number: int, label: Optional[str] = None) -> bool:
        """Color one residue of the selected chain and label it.

        The label defaults to residue name and number, e.g. ``GLY42``.
        """
        self._ensure_alive("highlight_residue")
        selection = AtomSelection.for_residue(self.info.chain_id, residue_number)
        try:
            atoms = self.engine.select_atoms(selection)
            if not atoms:
                logger.warning(
                    f"Residue {residue_number} not found in chain {self.info.chain_id}"
                )
                return False
            self.engine.remove_all_labels()
            self.engine.set_style(
                selection,
                StyleSpec(representation=Representation.STICK, color=HIGHLIGHT_COLOR),
            )
            text = label or f"{atoms[0].residue_name}{residue_number}"
            self.engine.add_label(text, selection, self.label_style)
            self.engine.render()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("highlight_residue", e)
        return True

    def clear_highlight(self) -> bool:
        """Drop residue/domain highlights by re-running the styling pass."""
        try:
            self.apply()
        except EngineDisposedError:
            raise
        except RenderingError as e:
            return self._recover("clear_highlight", e)
        return True

    # --- Internals --- #

    def _ensure_alive(self, operation: str) -> None:
        if self._disposed:
            raise EngineDisposedError(operation)

    def _recover(self, operation: str, error: RenderingError) -> bool:
        """Re-run the full styling pass after a failed operation.

        Returns False in every case, since the operation did not complete.
        """
        logger.warning(f"{operation} failed ({error.message}); restoring domain styling")
        try:
            self.apply()
        except RenderingError as e:
            logger.error(f"Could not restore domain styling: {e.message}")
        return False
