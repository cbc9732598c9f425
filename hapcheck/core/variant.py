"""Variant records for hapcheck.

A Variant is one typed difference from the rCRS reference at a single
mtDNA position, as decoded from a genotype call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# mtDNA genome length (rCRS)
MTDNA_LENGTH = 16569

# Base recorded for deleted positions
DELETION_BASE = "d"

# VCF allele for a deletion spanning this position
SPANNING_DELETION = "*"


class VariantKind(Enum):
    """Kind of a decoded variant."""

    SUBSTITUTION = "substitution"
    HETEROPLASMY = "heteroplasmy"
    DELETION = "deletion"
    INSERTION = "insertion"


@dataclass
class Variant:
    """A decoded mtDNA variant.

    Attributes:
        position: 1-based position in mtDNA
        ref: rCRS reference base
        kind: Variant kind
        base: Called base (DELETION_BASE for deletions, None for insertions)
        insertion: Inserted bases (insertions only)
        coverage: Read depth from the DP field, if present
        level: Non-reference allele frequency as reported (heteroplasmies)
        major: Major allele (heteroplasmies)
        major_level: Frequency of the major allele
        minor: Minor allele (heteroplasmies)
        minor_level: Frequency of the minor allele
    """

    position: int
    ref: str
    kind: VariantKind
    base: Optional[str] = None
    insertion: Optional[str] = None
    coverage: Optional[int] = None
    level: Optional[float] = None
    major: Optional[str] = None
    major_level: Optional[float] = None
    minor: Optional[str] = None
    minor_level: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate the kind invariant."""
        if self.kind is VariantKind.INSERTION:
            if self.base is not None:
                raise ValueError("Insertions do not carry a called base")
            if not self.insertion:
                raise ValueError("Insertions must carry the inserted bases")
        elif self.base is None:
            raise ValueError(f"{self.kind.value} at {self.position} needs a called base")

    @property
    def is_heteroplasmy(self) -> bool:
        """True for heteroplasmic calls."""
        return self.kind is VariantKind.HETEROPLASMY

    @property
    def notation(self) -> str:
        """Return HSD notation like '73G', '523d' or '315.1C'."""
        if self.kind is VariantKind.INSERTION:
            return f"{self.position}.1{self.insertion}"
        return f"{self.position}{self.base}"

    def __str__(self) -> str:
        return self.notation
