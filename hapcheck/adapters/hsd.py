"""HSD format adapter for hapcheck.

Parses Haplogrep HSD (Haplogroup Sequence Data) files into
ClassifiedSamples. HSD files are tab-delimited with columns:
  - ID: Sample identifier
  - Range: Covered region (e.g., "1-16569" or "16024-16569;1-576")
  - Haplogroup: Expected haplogroup ("?" or "SEQ" if unknown)
  - Polymorphisms: Notation like 73G, 315.1C, 523d
"""

import logging
from pathlib import Path
from typing import Iterable, List

from hapcheck.adapters.base import InputAdapter
from hapcheck.core.sample import ClassifiedSample
from hapcheck.errors import MalformedInputError

logger = logging.getLogger(__name__)

HEADER_IDS = ("id", "sampleid", "sample_id", "sample")


def parse_hsd_lines(lines: Iterable[str], skip_invalid: bool = True) -> List[ClassifiedSample]:
    """Parse HSD lines into samples.

    Blank lines, '#' comments and a leading header line are ignored.

    Args:
        lines: HSD lines
        skip_invalid: Log and skip unparsable samples instead of raising

    Returns:
        Parsed samples in input order

    Raises:
        MalformedInputError: If a line is invalid and skip_invalid is False
    """
    samples = []
    first_line = True
    for line in lines:
        if not line.strip() or line.startswith("#"):
            continue

        if first_line:
            first_line = False
            if line.split("\t")[0].strip().lower() in HEADER_IDS:
                continue

        try:
            samples.append(ClassifiedSample.parse(line))
        except MalformedInputError as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping sample %s: %s", e.sample_id, e.message)

    return samples


class HSDAdapter(InputAdapter):
    """Adapter for Haplogrep HSD files."""

    def __init__(self, skip_invalid: bool = True) -> None:
        """Initialize HSD adapter.

        Args:
            skip_invalid: Log and skip unparsable samples instead of raising
        """
        self.skip_invalid = skip_invalid

    def can_handle(self, file_path: str) -> bool:
        """Check if file is an HSD file."""
        return file_path.endswith(".hsd")

    @property
    def format_name(self) -> str:
        """Return format name."""
        return "HSD"

    def load(self, file_path: str) -> List[ClassifiedSample]:
        """Load all samples from an HSD file.

        Raises:
            FileNotFoundError: If HSD file doesn't exist
        """
        if not Path(file_path).exists():
            raise FileNotFoundError(f"HSD file not found: {file_path}")

        with open(file_path) as f:
            return parse_hsd_lines(f, skip_invalid=self.skip_invalid)
