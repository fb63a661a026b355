# Copyright 2024 Rostlab.
# SPDX-License-Identifier: Apache-2.0

"""Input/output utilities for domview."""

from domview.io.acquisition import AcquiredStructure, StructureAcquisitionPipeline
from domview.io.config import (
    ConfigParser,
    PaletteSettings,
    SourceSettings,
    ViewerSettings,
)
from domview.io.domains import DomainFileParser
from domview.io.identifiers import StructureId, chain_from_domain_id
from domview.io.sources import (
    HttpStructureSource,
    LocalMirrorSource,
    StructureSource,
)
from domview.io.structure import StructureParser, detect_format, validate_payload
from domview.io.structure_gemmi_adapter import GemmiStructureParser
from domview.io.errors import (
    IOError,
    StructureSourceError,
    InvalidStructurePayloadError,
    AcquisitionError,
    StructureParseError,
    AnnotationError,
    AnnotationFileNotFoundError,
    MalformedAnnotationError,
    ConfigError,
    ConfigFileNotFoundError,
    InvalidTomlError,
    ConfigValidationError,
)

__all__ = [
    "AcquiredStructure",
    "StructureAcquisitionPipeline",
    "ConfigParser",
    "PaletteSettings",
    "SourceSettings",
    "ViewerSettings",
    "DomainFileParser",
    "StructureId",
    "chain_from_domain_id",
    "HttpStructureSource",
    "LocalMirrorSource",
    "StructureSource",
    "StructureParser",
    "GemmiStructureParser",
    "detect_format",
    "validate_payload",
    "IOError",
    "StructureSourceError",
    "InvalidStructurePayloadError",
    "AcquisitionError",
    "StructureParseError",
    "AnnotationError",
    "AnnotationFileNotFoundError",
    "MalformedAnnotationError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidTomlError",
    "ConfigValidationError",
]
