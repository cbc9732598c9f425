"""SampleLedger: one sample's decoded variants.

The ledger keeps variants keyed by position (last write wins) together
with running counters that are updated once per insertion and never
recomputed from the stored set.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from hapcheck.core.phylo import Polymorphism
from hapcheck.core.ranges import FULL_RANGE
from hapcheck.core.variant import Variant, VariantKind


class SampleLedger:
    """Position-ordered variant set of a sample.

    Attributes:
        sample_id: Sample identifier
        range: Declared covered range in HSD notation
        chip: True if the sample comes from a genotyping array
        variant_count: Number of add_variant() calls
        substitution_count: Number of substitutions added
        heteroplasmy_count: Number of heteroplasmies added
        coverage_sum: Sum of coverage over added variants
        heteroplasmy_level_sum: Sum of heteroplasmy levels over added heteroplasmies
    """

    def __init__(
        self, sample_id: str, covered_range: str = FULL_RANGE, chip: bool = False
    ) -> None:
        self.sample_id = sample_id
        self.range = covered_range
        self.chip = chip
        self._variants: Dict[int, Variant] = {}

        self.variant_count = 0
        self.substitution_count = 0
        self.heteroplasmy_count = 0
        self.coverage_sum = 0.0
        self.heteroplasmy_level_sum = 0.0

    @classmethod
    def from_variants(
        cls,
        sample_id: str,
        variants: Iterable[Variant],
        covered_range: str = FULL_RANGE,
        chip: bool = False,
    ) -> "SampleLedger":
        """Build a ledger by adding ``variants`` in order."""
        ledger = cls(sample_id, covered_range=covered_range, chip=chip)
        for variant in variants:
            ledger.add_variant(variant)
        return ledger

    def add_variant(self, variant: Variant) -> None:
        """Add a variant, replacing any variant at the same position.

        Counters are updated on every call, including replacements.

        Args:
            variant: The Variant to add
        """
        self._variants[variant.position] = variant

        self.variant_count += 1
        if variant.kind is VariantKind.SUBSTITUTION:
            self.substitution_count += 1
        elif variant.kind is VariantKind.HETEROPLASMY:
            self.heteroplasmy_count += 1
            self.heteroplasmy_level_sum += variant.level or 0.0

        self.coverage_sum += variant.coverage or 0

    def variants(self) -> Iterator[Variant]:
        """Yield variants in position order."""
        for position in sorted(self._variants):
            yield self._variants[position]

    def get_variant(self, position: int) -> Optional[Variant]:
        return self._variants.get(position)

    @property
    def mean_coverage(self) -> Optional[float]:
        """Mean coverage per added variant, None if nothing was added."""
        if not self.variant_count:
            return None
        return self.coverage_sum / self.variant_count

    @property
    def mean_heteroplasmy_level(self) -> Optional[float]:
        """Mean heteroplasmy level, None without heteroplasmies."""
        if not self.heteroplasmy_count:
            return None
        return self.heteroplasmy_level_sum / self.heteroplasmy_count

    def major_profile(self) -> List[Polymorphism]:
        """Polymorphisms of the major allele at every variant position."""
        return self._profile(major=True)

    def minor_profile(self) -> List[Polymorphism]:
        """Polymorphisms of the minor allele at every variant position.

        Homoplasmic variants appear in both profiles.
        """
        return self._profile(major=False)

    def _profile(self, major: bool) -> List[Polymorphism]:
        profile = []
        for variant in self.variants():
            if variant.kind is VariantKind.INSERTION:
                profile.append(Polymorphism(variant.position, f".1{variant.insertion}"))
                continue
            if variant.kind is VariantKind.HETEROPLASMY:
                base = variant.major if major else variant.minor
            else:
                base = variant.base
            # The reference allele is not a polymorphism
            if base and base != variant.ref:
                profile.append(Polymorphism(variant.position, base))
        return profile

    def __len__(self) -> int:
        return len(self._variants)

    def __repr__(self) -> str:
        return (
            f"SampleLedger(sample_id={self.sample_id!r}, "
            f"range={self.range!r}, variants={len(self)})"
        )
