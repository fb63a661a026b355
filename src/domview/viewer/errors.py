# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from domview.core import DomViewError


class ViewerError(DomViewError):
    """Base class for viewer lifecycle errors."""

    def __init__(self, message: str):
        super().__init__(message)


class ViewerDisposedError(ViewerError):
    def __init__(self):
        super().__init__("Viewer has been disposed; create a new one")
