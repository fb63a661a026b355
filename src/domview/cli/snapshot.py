# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

import asyncio
from pathlib import Path
from typing import Optional, Annotated

from cyclopts import Parameter

from domview.core import logger
from domview.engine import SvgRenderingEngine
from domview.io import (
    ConfigParser,
    DomainFileParser,
    StructureAcquisitionPipeline,
    ViewerSettings,
)
from domview.viewer import StructureViewer

from .errors import CLIError, StructureUnavailableError, error_handler
from .utils import (
    CommonParameters,
    decode_data_uri,
    print_styling_report,
    set_logging_level,
)


def build_viewer(
    identifier: str,
    settings: ViewerSettings,
    chain: Optional[str] = None,
    domains_file: Optional[Path] = None,
    mirror: Optional[Path] = None,
) -> StructureViewer:
    """Wire settings, sources and the SVG engine into a viewer."""
    domains = DomainFileParser(domains_file).parse() if domains_file else []
    sources = settings.sources
    pipeline = StructureAcquisitionPipeline.default(
        local_url=sources.local_url,
        remote_url=sources.remote_url,
        mirror_dir=mirror or sources.local_mirror,
        timeout=sources.timeout,
    )
    return StructureViewer(
        identifier,
        pipeline,
        engine_factory=lambda: SvgRenderingEngine(
            settings.canvas, settings.display.background_color
        ),
        requested_chain=chain,
        domains=domains,
        display_options=settings.display,
        palette=settings.palette.colors,
    )


@error_handler
def snapshot_structure(
    identifier: str,
    output: Annotated[Optional[Path], Parameter(name=["-o", "--output"])] = None,
    chain: Optional[str] = None,
    domains: Optional[Path] = None,
    config: Optional[Path] = None,
    highlight: Optional[int] = None,
    residue: Optional[int] = None,
    mirror: Optional[Path] = None,
    *,
    common: CommonParameters | None = None,
) -> int:
    """
    Render a structure with its domains colored and save an SVG snapshot.

    Args:
        identifier: PDB code, optionally with a chain suffix (e.g. 2uub or 2uub_A).
        output: Path to save the SVG. If not provided, the SVG is printed to stdout.
        chain: Chain to display. Falls back to the largest protein chain if it
            is missing or not a protein.
        domains: TOML file with a [[domains]] list.
        config: TOML file with [sources], [display], [palette] and [canvas] sections.
        highlight: Zero-based index of a domain to highlight and frame.
        residue: Residue number to highlight and label.
        mirror: Local structure mirror directory tried before the remote source.

    Returns:
        int: 0 for success, 1 for errors.

    Examples:
        domview snapshot 2uub -o 2uub.svg
        domview snapshot 2uub_A --domains domains.toml --highlight 1
    """
    set_logging_level(common)

    settings = ConfigParser(config).parse() if config else ViewerSettings()
    viewer = build_viewer(identifier, settings, chain, domains, mirror)
    try:
        if not asyncio.run(viewer.load()):
            raise StructureUnavailableError(
                viewer.error or "structure could not be loaded",
                viewer.external_viewer_url,
            )

        controls = viewer.controls
        if highlight is not None and not controls.highlight_domain(highlight):
            raise CLIError(f"Domain #{highlight} could not be highlighted")
        if residue is not None and not controls.highlight_residue(residue):
            raise CLIError(f"Residue {residue} could not be highlighted")

        print_styling_report(identifier, viewer.structure_info.chain_id, viewer.report)

        data_uri = controls.export_image()
        if data_uri is None:
            raise CLIError("Image export failed")
        svg = decode_data_uri(data_uri)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(svg)
            logger.info(f"Snapshot written to {output}")
        else:
            print(svg)
    finally:
        viewer.dispose()

    return 0
