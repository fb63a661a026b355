# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from .errors import ViewerDisposedError, ViewerError
from .lifecycle import EXTERNAL_VIEWER_URL, StructureViewer, domains_changed
from .styling import DomainOutcome, DomainStylingController, StylingReport

__all__ = [
    "ViewerError",
    "ViewerDisposedError",
    "EXTERNAL_VIEWER_URL",
    "StructureViewer",
    "domains_changed",
    "DomainOutcome",
    "DomainStylingController",
    "StylingReport",
]
