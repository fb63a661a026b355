# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from domview.core import DomViewError


class RenderingError(DomViewError):
    """A rendering engine call failed."""

    def __init__(self, message: str):
        super().__init__(f"Rendering error: {message}")


class EngineDisposedError(RenderingError):
    """The engine was used after destroy()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"cannot call {operation}() on a destroyed engine")
