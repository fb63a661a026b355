# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Staged structure acquisition with primary/secondary fallback."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from domview.core import StructureFormat
from domview.core.logger import logger

from .errors import (
    AcquisitionError,
    InvalidStructurePayloadError,
    StructureSourceError,
)
from .sources import (
    DEFAULT_MIRROR_DIR,
    HttpStructureSource,
    LocalMirrorSource,
    StructureSource,
)
from .structure import validate_payload


@dataclass(frozen=True)
class AcquiredStructure:
    identifier: str
    payload: str
    format: StructureFormat
    source: str


class StructureAcquisitionPipeline:
    """Fetches a structure by trying each source in order.

    A stage fails when its source raises or returns a payload without a
    format marker; the next stage is then tried. When all stages fail an
    AcquisitionError lists every stage and its reason. There are no
    automatic retries.
    """

    def __init__(self, sources: Sequence[StructureSource]):
        if not sources:
            raise ValueError("At least one structure source is required")
        self.sources = list(sources)

    @classmethod
    def default(
        cls,
        local_url: Optional[str] = None,
        remote_url: Optional[str] = None,
        mirror_dir=DEFAULT_MIRROR_DIR,
        timeout: Optional[float] = None,
    ) -> "StructureAcquisitionPipeline":
        """Local source first (an HTTP API if ``local_url`` is set, else the
        mirror directory), RCSB second."""
        if local_url:
            primary: StructureSource = HttpStructureSource(
                local_url, name="local", timeout=timeout
            )
        else:
            primary = LocalMirrorSource(mirror_dir)
        secondary = (
            HttpStructureSource(remote_url, name="remote", timeout=timeout)
            if remote_url
            else HttpStructureSource(name="remote", timeout=timeout)
        )
        return cls([primary, secondary])

    async def acquire(self, identifier: str) -> AcquiredStructure:
        """Fetch and validate ``identifier`` from the first source that works.

        Raises:
            AcquisitionError: If every source failed.
        """
        failures: List[StructureSourceError] = []
        for stage, source in enumerate(self.sources):
            if stage > 0:
                logger.info(
                    f"Falling back to [bold]{source.name}[/bold] for {identifier}"
                )
            try:
                payload = await source.fetch(identifier)
                fmt = validate_payload(identifier, payload)
            except StructureSourceError as e:
                logger.debug(f"Stage '{source.name}' failed: {e.reason}")
                failures.append(e)
                continue
            except InvalidStructurePayloadError as e:
                logger.debug(f"Stage '{source.name}' returned bad payload: {e.details}")
                failures.append(
                    StructureSourceError(source.name, identifier, e.details)
                )
                continue

            logger.debug(f"Acquired {identifier} from {source.name} as {fmt.value}")
            return AcquiredStructure(identifier, payload, fmt, source.name)

        raise AcquisitionError(identifier, failures)
