"""Covered-range parsing for hapcheck.

Ranges use the HSD range column notation: ``1-16569`` for a full genome,
``16024-16569;1-576`` for several fragments and ``73;263;`` for the
single positions typed by a genotyping array.
"""

import re
from typing import Iterator, List, Optional, Tuple

from hapcheck.core.variant import MTDNA_LENGTH
from hapcheck.errors import MalformedInputError

FULL_RANGE = f"1-{MTDNA_LENGTH}"

RANGE_PATTERN = re.compile(r"^(\d+)(?:-(\d+))?$")


class SampleRanges:
    """Ordered list of covered sub-ranges (inclusive, 1-based)."""

    def __init__(self, ranges: Optional[List[Tuple[int, int]]] = None) -> None:
        self._ranges: List[Tuple[int, int]] = list(ranges or [])

    @classmethod
    def parse(cls, text: str, sample_id: Optional[str] = None) -> "SampleRanges":
        """Parse a range column.

        Args:
            text: Range string, e.g. "1-16569" or "73;263;"
            sample_id: Sample identifier for error reporting

        Returns:
            Parsed SampleRanges

        Raises:
            MalformedInputError: If the string holds no valid range
        """
        cleaned = text.replace('"', "").strip()
        ranges = []
        for part in re.split(r"[;\s]+", cleaned):
            if not part:
                continue
            match = RANGE_PATTERN.match(part)
            if match is None:
                raise MalformedInputError(f"cannot parse range {part!r}", sample_id=sample_id)
            start = int(match.group(1))
            end = int(match.group(2)) if match.group(2) else start
            if end < start:
                raise MalformedInputError(
                    f"range {part!r} ends before it starts", sample_id=sample_id
                )
            ranges.append((start, end))

        if not ranges:
            raise MalformedInputError(f"no range in {text!r}", sample_id=sample_id)
        return cls(ranges)

    @property
    def starts(self) -> List[int]:
        return [start for start, _ in self._ranges]

    @property
    def ends(self) -> List[int]:
        return [end for _, end in self._ranges]

    def contains(self, position: int) -> bool:
        """True if any sub-range covers the position."""
        return self.subrange_id(position) is not None

    def subrange_id(self, position: int) -> Optional[int]:
        """Index of the first sub-range covering the position, or None."""
        for i, (start, end) in enumerate(self._ranges):
            if start <= position <= end:
                return i
        return None

    def subrange(self, index: int) -> "SampleRanges":
        """Return sub-range ``index`` as its own SampleRanges."""
        return SampleRanges([self._ranges[index]])

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[Tuple[int, int]]:
        return iter(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleRanges):
            return NotImplemented
        return self._ranges == other._ranges

    def __str__(self) -> str:
        return ";".join(
            str(start) if start == end else f"{start}-{end}" for start, end in self._ranges
        )

    def __repr__(self) -> str:
        return f"SampleRanges({str(self)!r})"
