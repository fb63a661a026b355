# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from typing import Iterator, List, Tuple
import re

from .errors import ResidueRangeError

# Optional "CHAIN:" prefix, signed start, optional signed end.
_SEGMENT_PATTERN = re.compile(r"^(?:([^:]+):)?(-?\d+)(?:\s*-\s*(-?\d+))?$")


@dataclass(frozen=True)
class ResidueSpan:
    """A closed interval of residue numbers, e.g. ``20-70``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ResidueRangeError(
                f"{self.start}-{self.end}", f"start {self.start} > end {self.end}"
            )

    def __contains__(self, residue_number: object) -> bool:
        if not isinstance(residue_number, int):
            return False
        return self.start <= residue_number <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def shifted(self, offset: int) -> "ResidueSpan":
        return ResidueSpan(self.start + offset, self.end + offset)

    def within(self, lower: int, upper: int) -> bool:
        """True if the whole span lies inside ``[lower, upper]``."""
        return lower <= self.start and self.end <= upper


@dataclass(frozen=True)
class ResidueRangeSet:
    """One or more residue spans, written as ``"1-10,20-30"``."""

    spans: Tuple[ResidueSpan, ...]

    @staticmethod
    def from_bounds(start: int, end: int) -> "ResidueRangeSet":
        return ResidueRangeSet((ResidueSpan(start, end),))

    @staticmethod
    def from_string(value: str) -> "ResidueRangeSet":
        """Parse a comma separated list of segments.

        Each segment is ``START-END`` or a single ``NUMBER``; negative residue
        numbers are allowed and a leading ``CHAIN:`` prefix is ignored.

        Raises:
            ResidueRangeError: If the string is empty or a segment is malformed.
        """
        if value is None or not value.strip():
            raise ResidueRangeError(str(value), "empty range")

        spans: List[ResidueSpan] = []
        for segment in value.split(","):
            segment = segment.strip()
            match = _SEGMENT_PATTERN.match(segment)
            if not match:
                raise ResidueRangeError(
                    value, f"segment '{segment}' is not 'START-END' or 'NUMBER'"
                )
            _, start_str, end_str = match.groups()
            start = int(start_str)
            end = int(end_str) if end_str is not None else start
            if start > end:
                raise ResidueRangeError(value, f"start {start} > end {end}")
            spans.append(ResidueSpan(start, end))
        return ResidueRangeSet(tuple(spans))

    def __contains__(self, residue_number: object) -> bool:
        return any(residue_number in span for span in self.spans)

    def __iter__(self) -> Iterator[ResidueSpan]:
        return iter(self.spans)

    def __str__(self) -> str:
        return ",".join(str(span) for span in self.spans)

    @property
    def start(self) -> int:
        return min(span.start for span in self.spans)

    @property
    def end(self) -> int:
        return max(span.end for span in self.spans)


def format_range(start: int, end: int) -> str:
    """Format a start/end pair as a residue range string."""
    return str(ResidueSpan(start, end))

