# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

import base64
import logging
from typing import Annotated
from dataclasses import dataclass

from cyclopts import Parameter, Group, validators

from domview.core import logger
from domview.utils import setup_logging
from domview.viewer import StylingReport

from .errors import CLIError

verbosity_group = Group(
    "Verbosity",
    default_parameter=Parameter(negative=""),  # Disable "--no-" flags
    validator=validators.MutuallyExclusive(),
)


@Parameter(name="*")
@dataclass
class CommonParameters:
    quiet: Annotated[
        bool,
        Parameter(group=verbosity_group, help="Suppress all output except errors."),
    ] = False
    verbose: Annotated[
        bool, Parameter(group=verbosity_group, help="Print additional information.")
    ] = False


def set_logging_level(common: CommonParameters | None = None) -> None:
    if common and common.quiet:
        level = logging.ERROR
    elif common and common.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(level)


def decode_data_uri(data_uri: str) -> str:
    """Return the text of a base64 ``data:`` URI."""
    header, _, payload = data_uri.partition(",")
    if not header.startswith("data:") or not payload:
        raise CLIError(f"Not a data URI: {data_uri[:40]}...")
    if header.endswith(";base64"):
        return base64.b64decode(payload).decode("utf-8")
    return payload


def print_styling_report(identifier: str, chain_id: str, report: StylingReport) -> None:
    logger.info(f"[bold]Styled structure {identifier}, chain {chain_id}:[/bold]")
    for outcome in report.outcomes:
        if outcome.styled:
            logger.info(f"  {outcome.domain_id}: {outcome.selection} ({outcome.color})")
        else:
            logger.info(f"  {outcome.domain_id}: [yellow]skipped[/yellow], {outcome.reason}")
    logger.info(f"  {report.styled_count} styled, {report.skipped_count} skipped")
