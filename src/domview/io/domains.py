# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

"""Parser for domain annotation files in TOML format."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import toml
from pydantic import ValidationError

from domview.core import ResidueRangeError, ResidueRangeSet
from domview.core.domains import DomainAnnotation
from domview.core.logger import logger

from .errors import (
    AnnotationError,
    AnnotationFileNotFoundError,
    MalformedAnnotationError,
)
from .identifiers import chain_from_domain_id

_CLASSIFICATION_FIELDS = ("a_group", "x_group", "h_group", "t_group")
_KNOWN_FIELDS = {
    "id",
    "chain",
    "start",
    "end",
    "range",
    "pdb_range",
    "pdb_start",
    "pdb_end",
    "color",
    "label",
    *_CLASSIFICATION_FIELDS,
}


class DomainFileParser:
    """Parses a ``[[domains]]`` TOML file into DomainAnnotation models.

    Example::

        [[domains]]
        id = "e2uubA1"
        range = "1-50"
        pdb_range = "20-69"
        color = "#FF0000"
        t_group = "2004.1.1"
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise AnnotationFileNotFoundError(str(self.file_path))

    def _sequence_bounds(
        self, entry: Dict[str, Any], context: str
    ) -> Dict[str, Optional[int]]:
        """Resolve ``start``/``end`` from explicit fields or the ``range`` shorthand."""
        start, end = entry.get("start"), entry.get("end")
        range_str = entry.get("range")
        if range_str is None:
            return {"start": start, "end": end}
        if start is not None or end is not None:
            raise MalformedAnnotationError(
                context, "Use either 'range' or 'start'/'end', not both."
            )
        if not isinstance(range_str, str):
            raise MalformedAnnotationError(
                context, f"'range' must be a string, got {type(range_str).__name__}."
            )
        try:
            span = ResidueRangeSet.from_string(range_str)
        except ResidueRangeError as e:
            raise MalformedAnnotationError(context, e.message) from e
        if len(span.spans) > 1:
            raise MalformedAnnotationError(
                context,
                f"'range' must be a single 'START-END' segment, got '{range_str}'. "
                "Use 'pdb_range' for discontinuous domains.",
            )
        return {"start": span.start, "end": span.end}

    def _parse_entry(self, entry: Dict[str, Any], context: str) -> DomainAnnotation:
        unknown = sorted(set(entry) - _KNOWN_FIELDS)
        if unknown:
            logger.warning(f"{context}: ignoring unknown fields {', '.join(unknown)}")

        domain_id = entry.get("id")
        if not isinstance(domain_id, str) or not domain_id:
            raise MalformedAnnotationError(context, "Missing or invalid 'id' field.")

        pdb_range = entry.get("pdb_range")
        if pdb_range is not None:
            try:
                ResidueRangeSet.from_string(str(pdb_range))
            except ResidueRangeError as e:
                raise MalformedAnnotationError(context, e.message) from e

        data: Dict[str, Any] = {
            "id": domain_id,
            "chain": entry.get("chain") or chain_from_domain_id(domain_id),
            "pdb_range": pdb_range,
            "pdb_start": entry.get("pdb_start"),
            "pdb_end": entry.get("pdb_end"),
            "color": entry.get("color"),
            "label": entry.get("label"),
            **self._sequence_bounds(entry, context),
        }
        groups = {k: entry[k] for k in _CLASSIFICATION_FIELDS if k in entry}
        if groups:
            data["classification"] = groups

        try:
            return DomainAnnotation.model_validate(data)
        except ValidationError as e:
            error_msgs = [
                f"  - {'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise MalformedAnnotationError(
                context, "Invalid domain definition:\n" + "\n".join(error_msgs)
            ) from e

    def parse(self) -> List[DomainAnnotation]:
        """Parse the file.

        Returns:
            Domain annotations in file order.

        Raises:
            MalformedAnnotationError: If the TOML is invalid or an entry is malformed.
            AnnotationError: For other loading problems.
        """
        try:
            raw_data = toml.load(self.file_path)
        except toml.TomlDecodeError as e:
            raise MalformedAnnotationError(
                f"File: {self.file_path}", f"Invalid TOML syntax: {str(e)}"
            ) from e
        except OSError as e:
            raise AnnotationError(f"Error loading TOML file {self.file_path}: {e}") from e

        entries = raw_data.get("domains")
        if entries is None:
            raise MalformedAnnotationError(
                f"File: {self.file_path}", "Missing top-level 'domains' list."
            )
        if not isinstance(entries, list):
            raise MalformedAnnotationError(
                f"File: {self.file_path}", "'domains' key must contain a list."
            )

        domains = []
        for i, entry in enumerate(entries):
            context = f"File: {self.file_path}, Domain #{i + 1}"
            if not isinstance(entry, dict):
                raise MalformedAnnotationError(
                    context, "Domain entry must be a table (dictionary)."
                )
            domains.append(self._parse_entry(entry, context))

        logger.debug(f"Parsed {len(domains)} domains from {self.file_path}")
        return domains
