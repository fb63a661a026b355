# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Viewer lifecycle: when to reload, when to only re-style, and stale results."""

from typing import Callable, List, Optional, Sequence, Union

from pydantic_extra_types.color import Color

from domview.core import AtomSelection, DomViewError, ViewerState
from domview.core.domains import DomainAnnotation
from domview.core.logger import logger
from domview.engine import RenderingEngine, RenderingError
from domview.io import AcquisitionError, StructureAcquisitionPipeline, StructureId
from domview.mapping import ChainClassifier, ClassificationError, StructureInfo
from domview.style import DOMAIN_COLORS, DisplayOptions

from .errors import ViewerDisposedError
from .styling import DomainStylingController, StylingReport

EXTERNAL_VIEWER_URL = "https://www.rcsb.org/structure/{id}"

EngineFactory = Callable[[], RenderingEngine]
LoadedCallback = Callable[[StructureInfo], None]
ErrorCallback = Callable[[DomViewError], None]
StateCallback = Callable[[ViewerState], None]


def domains_changed(
    old: Sequence[DomainAnnotation], new: Sequence[DomainAnnotation]
) -> bool:
    """True if the lists differ in length or in where any domain maps.

    Compared per index: sequence start and end, explicit structure range or
    start/end pair, and chain id. Colors and labels are ignored.
    """
    if len(old) != len(new):
        return True
    return any(a.mapping_key() != b.mapping_key() for a, b in zip(old, new))


class StructureViewer:
    """Runs acquisition, classification and styling for one structure.

    States go ``IDLE -> LOADING -> CLASSIFYING -> STYLING -> READY``;
    acquisition, model loading and classification failures lead to
    ``ERROR``. Every load captures a generation number and drops its result
    if a newer load started while it was waiting.

    The rendering engine is created per load through ``engine_factory`` and
    owned by the styling controller; reloads destroy it.
    """

    def __init__(
        self,
        identifier: str,
        pipeline: StructureAcquisitionPipeline,
        engine_factory: EngineFactory,
        requested_chain: Optional[str] = None,
        domains: Sequence[DomainAnnotation] = (),
        display_options: Optional[DisplayOptions] = None,
        palette: Sequence[Union[str, Color]] = DOMAIN_COLORS,
        classifier: Optional[ChainClassifier] = None,
        on_loaded: Optional[LoadedCallback] = None,
        on_error: Optional[ErrorCallback] = None,
        on_state_change: Optional[StateCallback] = None,
    ):
        self.identifier = identifier
        self.requested_chain = requested_chain
        self.pipeline = pipeline
        self.engine_factory = engine_factory
        self.display_options = display_options or DisplayOptions()
        self.palette = list(palette)
        self.classifier = classifier or ChainClassifier()
        self.on_loaded = on_loaded
        self.on_error = on_error
        self.on_state_change = on_state_change

        self._domains: List[DomainAnnotation] = list(domains)
        self._applied_domains: List[DomainAnnotation] = []
        self._state = ViewerState.IDLE
        self._generation = 0
        self._controller: Optional[DomainStylingController] = None
        self._error: Optional[DomViewError] = None
        self._disposed = False

    # --- Observable state --- #

    @property
    def state(self) -> ViewerState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._state in (
            ViewerState.LOADING,
            ViewerState.CLASSIFYING,
            ViewerState.STYLING,
        )

    @property
    def is_ready(self) -> bool:
        return self._state == ViewerState.READY

    @property
    def error(self) -> Optional[str]:
        return self._error.message if self._error else None

    @property
    def domains(self) -> List[DomainAnnotation]:
        return list(self._domains)

    @property
    def structure_info(self) -> Optional[StructureInfo]:
        return self._controller.info if self._controller else None

    @property
    def report(self) -> Optional[StylingReport]:
        return self._controller.last_report if self._controller else None

    @property
    def controls(self) -> Optional[DomainStylingController]:
        """The control surface, available once the viewer is ready."""
        return self._controller if self.is_ready else None

    @property
    def external_viewer_url(self) -> str:
        return EXTERNAL_VIEWER_URL.format(id=self._structure_id().pdb_id.upper())

    # --- Lifecycle --- #

    async def load(self) -> bool:
        """Run the full pipeline for the current identifier.

        Returns:
            True if this attempt reached READY, False if it failed or was
            superseded by a newer one.
        """
        self._ensure_alive()
        self._generation += 1
        generation = self._generation
        structure_id = self._structure_id()
        requested_chain = self.requested_chain or structure_id.chain_id

        self._teardown()
        self._error = None
        self._set_state(ViewerState.LOADING)
        logger.info(f"Loading structure [bold]{structure_id.pdb_id}[/bold]")

        try:
            acquired = await self.pipeline.acquire(structure_id.pdb_id)
        except AcquisitionError as e:
            if self._is_stale(generation):
                return False
            self._fail(e)
            return False

        if self._is_stale(generation):
            logger.debug(
                f"Discarding {structure_id.pdb_id} from superseded load #{generation}"
            )
            return False

        engine: Optional[RenderingEngine] = None
        try:
            engine = self._create_engine()
            engine.load_model(acquired.payload, acquired.format)
            engine.set_background(self.display_options.background_color)
            self._set_state(ViewerState.CLASSIFYING)
            atoms = engine.select_atoms(AtomSelection())
            info = self.classifier.classify(atoms, requested_chain)
        except (RenderingError, ClassificationError) as e:
            if engine is not None:
                engine.destroy()
            self._fail(e)
            return False

        self._controller = DomainStylingController(
            engine,
            info,
            self._domains,
            options=self.display_options,
            palette=self.palette,
        )
        self._set_state(ViewerState.STYLING)
        if not self._controller.reset():
            logger.error("Initial styling did not complete")
        self._applied_domains = list(self._domains)
        self._set_state(ViewerState.READY)

        if self.on_loaded is not None:
            self.on_loaded(info)
        return True

    async def reload(self) -> bool:
        """Restart from acquisition with a fresh engine."""
        return await self.load()

    async def retry(self) -> bool:
        return await self.load()

    async def set_identifier(
        self, identifier: str, requested_chain: Optional[str] = None
    ) -> bool:
        """Switch to another structure (or chain); a full restart."""
        self._ensure_alive()
        if (
            identifier == self.identifier
            and requested_chain == self.requested_chain
            and self._state not in (ViewerState.IDLE, ViewerState.ERROR)
        ):
            return self.is_ready
        self.identifier = identifier
        self.requested_chain = requested_chain
        return await self.load()

    def set_domains(self, domains: Sequence[DomainAnnotation]) -> bool:
        """Replace the domain list, re-styling only if a domain moved.

        Never triggers acquisition. A load in progress picks the new list up
        when it reaches styling.

        Returns:
            True if a styling pass ran.
        """
        self._ensure_alive()
        new_domains = list(domains)
        changed = domains_changed(self._applied_domains, new_domains)
        self._domains = new_domains
        if not changed or not self.is_ready:
            return False

        self._set_state(ViewerState.STYLING)
        try:
            self._controller.set_domains(new_domains)
        except RenderingError as e:
            logger.error(f"Re-styling failed: {e.message}")
        self._applied_domains = list(new_domains)
        self._set_state(ViewerState.READY)
        return True

    def update_display_options(self, options: DisplayOptions) -> bool:
        self._ensure_alive()
        self.display_options = options
        if not self.is_ready:
            return False
        return self._controller.update_display_style(options)

    def dispose(self) -> None:
        """Cancel pending loads and destroy the engine."""
        if self._disposed:
            return
        self._generation += 1
        self._teardown()
        self._disposed = True
        self._set_state(ViewerState.IDLE)

    # --- Internals --- #

    def _structure_id(self) -> StructureId:
        try:
            return StructureId.from_string(self.identifier)
        except ValueError:
            return StructureId(self.identifier)

    def _create_engine(self) -> RenderingEngine:
        try:
            return self.engine_factory()
        except RenderingError:
            raise
        except Exception as e:
            raise RenderingError(f"could not create rendering engine: {e}") from e

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _teardown(self) -> None:
        if self._controller is not None:
            self._controller.dispose()
            self._controller = None
        self._applied_domains = []

    def _fail(self, error: DomViewError) -> None:
        logger.error(error.message)
        self._error = error
        self._set_state(ViewerState.ERROR)
        if self.on_error is not None:
            self.on_error(error)

    def _set_state(self, state: ViewerState) -> None:
        if state == self._state:
            return
        logger.debug(f"Viewer state {self._state.value} -> {state.value}")
        self._state = state
        if self.on_state_change is not None:
            self.on_state_change(state)

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise ViewerDisposedError()
