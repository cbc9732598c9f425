"""Phylogenetic search contracts for hapcheck.

The phylotree itself and its search/ranking algorithm live outside this
package. This module defines the values they exchange with it: haplogroup
names, polymorphisms, result paths and ranked results, plus the
equal-distance clustering derived from a ranked list.
"""

import re
from dataclasses import dataclass, field
from itertools import groupby
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, Sequence

# Substitution: optional ref base, position, alt base or IUPAC heteroplasmy code
SUBST_PATTERN = re.compile(r"^([ACGT])?(\d+)([ACGTRYMKSWN])$", re.IGNORECASE)

# Insertion: position.index, bases (e.g., "315.1C" or "309.1CC")
INSERT_PATTERN = re.compile(r"^(\d+)\.(\d+)([ACGTN]+)$", re.IGNORECASE)

# Deletion: position(s) + d/del/DEL (e.g., "523d", "523DEL", "8281-8289d")
DELETE_PATTERN = re.compile(r"^(\d+)(?:-(\d+))?[dD](?:EL)?$", re.IGNORECASE)

# IUPAC codes for two-allele mixtures
HETEROPLASMY_CODES = frozenset("RYMKSW")


@dataclass(frozen=True)
class Haplogroup:
    """A named clade in the phylotree. Compared by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Polymorphism:
    """A polymorphism compared by (position, base).

    For insertions ``base`` holds the ``.1C`` suffix so that ``str()``
    always yields HSD notation.

    Attributes:
        position: 1-based mtDNA position
        base: Derived base, 'd' for deletions, '.<n><bases>' for insertions
        is_heteroplasmy: True for mixed calls; not part of identity
    """

    position: int
    base: str
    is_heteroplasmy: bool = field(default=False, compare=False)

    @classmethod
    def parse(cls, text: str) -> "Polymorphism":
        """Parse one polymorphism like '73G', '16093Y', '315.1C' or '523d'.

        Range deletions yield their first position; use
        parse_polymorphisms() to expand them.

        Raises:
            ValueError: If the notation cannot be parsed
        """
        return parse_polymorphisms(text)[0]

    def __str__(self) -> str:
        return f"{self.position}{self.base}"


def parse_polymorphisms(text: str) -> List[Polymorphism]:
    """Parse a polymorphism notation, expanding range deletions.

    Args:
        text: Polymorphism string (e.g., "73G", "8281-8289d")

    Returns:
        List of Polymorphisms (one entry except for range deletions)

    Raises:
        ValueError: If the notation cannot be parsed
    """
    text = text.strip()

    match = SUBST_PATTERN.match(text)
    if match:
        base = match.group(3).upper()
        return [
            Polymorphism(
                int(match.group(2)), base, is_heteroplasmy=base in HETEROPLASMY_CODES
            )
        ]

    match = INSERT_PATTERN.match(text)
    if match:
        return [
            Polymorphism(int(match.group(1)), f".{match.group(2)}{match.group(3).upper()}")
        ]

    match = DELETE_PATTERN.match(text)
    if match:
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        return [Polymorphism(pos, "d") for pos in range(start, end + 1)]

    raise ValueError(f"Cannot parse polymorphism: {text}")


@dataclass
class SearchResultTreeNode:
    """One step on the path from the phylotree root to a result."""

    haplogroup: Haplogroup
    expected_polys: List[Polymorphism] = field(default_factory=list)
    found_polys: List[Polymorphism] = field(default_factory=list)
    not_in_range_polys: List[Polymorphism] = field(default_factory=list)


@dataclass
class DetailedResult:
    """Per-candidate detail produced by the search."""

    phylo_tree_path: List[SearchResultTreeNode] = field(default_factory=list)
    corrected_backmutations: FrozenSet[Polymorphism] = frozenset()


@dataclass
class RankedResult:
    """A ranked classification candidate.

    Attributes:
        haplogroup: Candidate haplogroup
        distance: Ranking distance from the sample (ties form a cluster)
        detailed_result: Path and back-mutation detail
    """

    haplogroup: Haplogroup
    distance: float
    detailed_result: DetailedResult = field(default_factory=DetailedResult)


class SearchService(Protocol):
    """External phylotree search.

    The tree behind it is shared and must be treated as read-only.
    """

    def search(self, sample: Any, ranking: Any) -> Sequence[RankedResult]:
        """Return candidates for ``sample`` ordered best first."""
        ...


class ClusteredResults:
    """Ranked results grouped by runs of identical distance.

    Built from a ranked list and never mutated; rebuild it whenever the
    ranked list changes.
    """

    def __init__(self, results: Sequence[RankedResult]) -> None:
        self._clusters: List[List[RankedResult]] = [
            list(group) for _, group in groupby(results, key=lambda r: r.distance)
        ]
        self._by_name: Dict[str, List[RankedResult]] = {
            result.haplogroup.name: cluster
            for cluster in self._clusters
            for result in cluster
        }

    @property
    def clusters(self) -> List[List[RankedResult]]:
        return [list(cluster) for cluster in self._clusters]

    def get_cluster(self, haplogroup: Haplogroup) -> Optional[List[RankedResult]]:
        """Return the cluster containing ``haplogroup``, or None."""
        cluster = self._by_name.get(haplogroup.name)
        return list(cluster) if cluster is not None else None

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert to a JSON-ready list, best cluster first."""
        return [
            {
                "distance": cluster[0].distance,
                "haplogroups": [r.haplogroup.name for r in cluster],
            }
            for cluster in self._clusters
        ]

    def __len__(self) -> int:
        return len(self._clusters)
