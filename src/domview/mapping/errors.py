# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from typing import Sequence

from domview.core import DomViewError


class ClassificationError(DomViewError):
    """Base class for chain classification errors."""

    def __init__(self, message: str):
        super().__init__(message)


class NoProteinChainFound(ClassificationError):
    """No chain in the structure qualifies as protein."""

    def __init__(self, available_chains: Sequence[str]):
        self.available_chains = list(available_chains)
        chains = ", ".join(self.available_chains) if self.available_chains else "none"
        super().__init__(
            f"No protein chains found in structure. Available chains: {chains}"
        )


class EmptyStructureError(ClassificationError):
    def __init__(self):
        super().__init__("Structure contains no atoms")
