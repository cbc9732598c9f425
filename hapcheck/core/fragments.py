"""Split a sample across declared sub-ranges.

Two policies:
- bucketed: each fragment gets only the variants inside its sub-range
- replicate: each fragment gets every variant of the sample
"""

import logging
from enum import Enum
from typing import List

from hapcheck.core.ledger import SampleLedger
from hapcheck.core.ranges import SampleRanges

logger = logging.getLogger(__name__)


class FragmentPolicy(Enum):
    BUCKETED = "bucketed"
    REPLICATE = "replicate"


def fragment_id(sample_id: str, start: int) -> str:
    """Identifier of the fragment starting at ``start``."""
    return f"{sample_id}_Frag_{start}"


def partition_bucketed(ledger: SampleLedger, ranges: SampleRanges) -> List[SampleLedger]:
    """Assign each variant to the first sub-range containing it.

    Every sub-range yields a fragment, empty ones included. Variants
    outside all sub-ranges are dropped.

    Args:
        ledger: Source sample
        ranges: Declared sub-ranges

    Returns:
        One SampleLedger per sub-range, in sub-range order
    """
    fragments = [
        SampleLedger(
            fragment_id(ledger.sample_id, start),
            covered_range=str(ranges.subrange(i)),
            chip=ledger.chip,
        )
        for i, start in enumerate(ranges.starts)
    ]

    for variant in ledger.variants():
        index = ranges.subrange_id(variant.position)
        if index is None:
            logger.debug(
                "%s: variant at %d is outside all fragments", ledger.sample_id, variant.position
            )
            continue
        fragments[index].add_variant(variant)

    return fragments


def partition_replicate(ledger: SampleLedger, ranges: SampleRanges) -> List[SampleLedger]:
    """Give every sub-range a copy of the full variant set.

    Args:
        ledger: Source sample
        ranges: Declared sub-ranges

    Returns:
        One SampleLedger per sub-range, in sub-range order
    """
    return [
        SampleLedger.from_variants(
            fragment_id(ledger.sample_id, start),
            ledger.variants(),
            covered_range=str(ranges.subrange(i)),
            chip=ledger.chip,
        )
        for i, start in enumerate(ranges.starts)
    ]


class FragmentPartitioner:
    """Partition samples with a fixed policy and sub-range list."""

    def __init__(
        self, ranges: SampleRanges, policy: FragmentPolicy = FragmentPolicy.BUCKETED
    ) -> None:
        self.ranges = ranges
        self.policy = policy

    def partition(self, ledger: SampleLedger) -> List[SampleLedger]:
        if self.policy is FragmentPolicy.REPLICATE:
            return partition_replicate(ledger, self.ranges)
        return partition_bucketed(ledger, self.ranges)
