# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0


class DomViewError(Exception):
    """Base exception class for domview errors.

    Every exception raised by the package derives from this class so hosts can
    catch a single type and show ``message`` to the user.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ResidueRangeError(DomViewError, ValueError):
    """Raised when a residue range string cannot be parsed."""

    def __init__(self, value: str, reason: str):
        self.value = value
        super().__init__(f"Invalid residue range '{value}': {reason}")
