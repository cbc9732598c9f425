"""Genotype call decoder for hapcheck.

Converts one per-sample genotype call from a VCF record into zero or more
typed Variant records:

1. Homozygous-variant calls become substitutions, deletions or insertions
   depending on the called and reference allele lengths
2. Heterozygous calls with an AF annotation become one heteroplasmy with
   resolved major/minor alleles
3. Everything else (reference, no-call, heterozygous without AF) yields
   nothing
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from hapcheck.core.variant import (
    DELETION_BASE,
    MTDNA_LENGTH,
    SPANNING_DELETION,
    Variant,
    VariantKind,
)
from hapcheck.errors import MalformedInputError

logger = logging.getLogger(__name__)

# Frequency at or above which the non-reference allele is the major allele
MAJOR_ALLELE_THRESHOLD = 0.5


class GenotypeType(Enum):
    """Zygosity of a genotype call."""

    NO_CALL = "no_call"
    HOM_REF = "hom_ref"
    HOM_VAR = "hom_var"
    HET = "het"


@dataclass
class GenotypeCall:
    """One sample's genotype at one VCF record.

    Attributes:
        position: 1-based start position of the record
        ref: Reference allele string
        alleles: Called allele strings in GT order (None for missing)
        depth: DP value, if present
        af: AF value: a comma-separated string, a single number or a sequence of floats
    """

    position: int
    ref: str
    alleles: List[Optional[str]] = field(default_factory=list)
    depth: Optional[int] = None
    af: Optional[Union[str, float, Sequence[float]]] = None

    @property
    def ploidy(self) -> int:
        """Number of called alleles."""
        return len(self.alleles)

    @property
    def genotype_type(self) -> GenotypeType:
        """Classify the call.

        All alleles identical and non-reference is HOM_VAR, differing
        alleles are HET.
        """
        if not self.alleles or any(a is None for a in self.alleles):
            return GenotypeType.NO_CALL
        if len(set(self.alleles)) > 1:
            return GenotypeType.HET
        if self.alleles[0] == self.ref:
            return GenotypeType.HOM_REF
        return GenotypeType.HOM_VAR


def parse_frequencies(
    af: Union[str, float, Sequence[float]],
    sample_id: Optional[str] = None,
) -> Tuple[float, float]:
    """Parse an AF annotation into (first, second) frequencies.

    The second frequency defaults to ``1 - first`` when only one value
    is present.

    Args:
        af: Comma-separated string ("0.3" or "0.3,0.7"), a number or a sequence of floats
        sample_id: Sample identifier for error reporting

    Returns:
        Tuple of (first_frequency, second_frequency)

    Raises:
        MalformedInputError: If the frequency list cannot be parsed
    """
    try:
        if isinstance(af, str):
            values = af.split(",")
        elif isinstance(af, (int, float)):
            # Number=1 numeric AF comes back as a bare value
            values = [af]
        else:
            values = list(af)
    except TypeError as e:
        raise MalformedInputError(
            f"cannot parse AF frequency list {af!r}: {e}", sample_id=sample_id
        ) from e
    if not values:
        raise MalformedInputError("empty AF frequency list", sample_id=sample_id)

    try:
        first = float(values[0])
        second = float(values[1]) if len(values) > 1 else 1 - first
    except (TypeError, ValueError) as e:
        raise MalformedInputError(
            f"cannot parse AF frequency list {af!r}: {e}", sample_id=sample_id
        ) from e

    return first, second


def decode_call(call: GenotypeCall, sample_id: Optional[str] = None) -> List[Variant]:
    """Decode one genotype call into Variant records.

    Args:
        call: The genotype call
        sample_id: Sample identifier for error reporting

    Returns:
        List of Variants in emission order (possibly empty)

    Raises:
        MalformedInputError: If the AF annotation cannot be parsed
    """
    if call.position > MTDNA_LENGTH:
        logger.warning(
            "Position %d outside the range 1-%d. "
            "Please double check the VCF includes variants mapped to rCRS only.",
            call.position,
            MTDNA_LENGTH,
        )

    genotype = call.genotype_type
    if genotype is GenotypeType.HOM_VAR:
        return _decode_homozygous(call)
    if genotype is GenotypeType.HET:
        return _decode_heterozygous(call, sample_id)
    return []


def _decode_homozygous(call: GenotypeCall) -> List[Variant]:
    """Decode a homozygous-variant call."""
    # Multi-ploidy calls collapse to their first allele
    called = call.alleles[0] or ""
    reference = call.ref
    start = call.position
    coverage = int(call.depth) if call.depth is not None else None
    variants: List[Variant] = []

    if len(called) == len(reference):
        if len(called) == 1:
            if called == SPANNING_DELETION:
                kind, base = VariantKind.DELETION, DELETION_BASE
            else:
                kind, base = VariantKind.SUBSTITUTION, called
            variants.append(
                Variant(position=start, ref=reference[0], kind=kind, base=base, coverage=coverage)
            )
        else:
            # Complex genotypes (REF ACA, GT ACT): one substitution per differing base
            for i, (ref_base, alt_base) in enumerate(zip(reference, called)):
                if ref_base != alt_base:
                    variants.append(
                        Variant(
                            position=start + i,
                            ref=reference[0],
                            kind=VariantKind.SUBSTITUTION,
                            base=alt_base,
                            coverage=coverage,
                        )
                    )

    elif len(reference) > len(called):
        for i in range(len(reference) - len(called)):
            variants.append(
                Variant(
                    position=start + len(called) + i,
                    ref=reference[0],
                    kind=VariantKind.DELETION,
                    base=DELETION_BASE,
                    coverage=coverage,
                )
            )

    else:
        if len(reference) == 1:
            inserted = called[1:]
        else:
            # Inserted bases are taken from the left: CT -> CCCT inserts CC
            inserted = called[: len(called) - len(reference)]
        variants.append(
            Variant(
                position=start,
                ref=reference[0],
                kind=VariantKind.INSERTION,
                insertion=inserted,
                coverage=coverage,
            )
        )

    return variants


def _decode_heterozygous(call: GenotypeCall, sample_id: Optional[str]) -> List[Variant]:
    """Decode a heterozygous call into one heteroplasmy."""
    if call.af is None:
        logger.debug(
            "Skipping heterozygous call at %d without AF annotation", call.position
        )
        return []

    first_level, second_level = parse_frequencies(call.af, sample_id)

    allele1 = _allele_base(call.alleles[0])
    allele2 = _allele_base(call.alleles[1])
    ref_base = call.ref[0]

    # Normalise GT order: 1/0 is treated like 0/1
    if allele2 == ref_base and allele1 != ref_base:
        allele1, allele2 = allele2, allele1

    if allele1 == ref_base:
        # AF holds the non-reference level, which can be on either side of 0.5
        called = allele2
        if first_level >= MAJOR_ALLELE_THRESHOLD:
            major, major_level = allele2, first_level
            minor, minor_level = allele1, second_level
        else:
            major, major_level = allele1, second_level
            minor, minor_level = allele2, first_level
    else:
        # GT 1/2: no reference allele
        called = allele1
        major, major_level = allele1, first_level
        minor, minor_level = allele2, second_level

    return [
        Variant(
            position=call.position,
            ref=ref_base,
            kind=VariantKind.HETEROPLASMY,
            base=called,
            coverage=int(call.depth) if call.depth is not None else None,
            level=first_level,
            major=major,
            major_level=major_level,
            minor=minor,
            minor_level=minor_level,
        )
    ]


def _allele_base(allele: Optional[str]) -> str:
    """Return the first base of an allele, mapping '*' to the deletion base."""
    base = (allele or "")[:1]
    if base == SPANNING_DELETION:
        return DELETION_BASE
    return base
