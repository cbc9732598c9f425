"""Classified sample: one sample's polymorphisms and classification results.

Holds the expected haplogroup (from the input) and the ranked candidates
of the most recent search, together with their equal-distance clusters.
The ranked list and the clusters are always replaced together.
"""

import copy
import logging
from typing import Any, Iterable, List, Optional

from hapcheck.core.ledger import SampleLedger
from hapcheck.core.phylo import (
    ClusteredResults,
    Haplogroup,
    Polymorphism,
    RankedResult,
    SearchService,
    parse_polymorphisms,
)
from hapcheck.core.ranges import SampleRanges
from hapcheck.core.tree import PathTreeMerger, TreeNode
from hapcheck.errors import InvalidColumnCountError, MalformedInputError

logger = logging.getLogger(__name__)

# Haplogroup column values meaning "not known"
UNKNOWN_HAPLOGROUP_MARKERS = ("?", "SEQ")


class ClassifiedSample:
    """A sample with its expected and detected haplogroups.

    Attributes:
        sample_id: Sample identifier (spaces replaced by '_')
        polymorphisms: Sample polymorphisms
        ranges: Covered ranges
        expected_haplogroup: Haplogroup given in the input (empty name if unknown)
        quality_level: Highest quality rule level reached
        reset: True if results were reset by the caller
    """

    def __init__(
        self,
        sample_id: str,
        polymorphisms: Iterable[Polymorphism],
        ranges: SampleRanges,
        expected_haplogroup: Optional[Haplogroup] = None,
    ) -> None:
        self.sample_id = sample_id.replace(" ", "_")
        self.polymorphisms: List[Polymorphism] = list(polymorphisms)
        self.ranges = ranges
        self.expected_haplogroup = expected_haplogroup or Haplogroup("")
        self.quality_level = 0
        self.reset = False

        self._results: List[RankedResult] = []
        self._clusters = ClusteredResults(self._results)
        self._detected: Optional[Haplogroup] = None

    @classmethod
    def parse(cls, line: str) -> "ClassifiedSample":
        """Parse one HSD line.

        Columns are tab-separated: ID, range, expected haplogroup, then
        polymorphisms (space- or tab-separated).

        Args:
            line: HSD line

        Returns:
            Parsed ClassifiedSample

        Raises:
            MalformedInputError: If the line cannot be parsed
        """
        columns = line.rstrip("\r\n").split("\t")
        sample_id = columns[0].strip() if columns else None
        if len(columns) < 3:
            raise InvalidColumnCountError(len(columns), sample_id=sample_id)

        ranges = SampleRanges.parse(columns[1], sample_id=sample_id)

        expected = columns[2].strip()
        if expected in UNKNOWN_HAPLOGROUP_MARKERS:
            expected = ""

        polymorphisms: List[Polymorphism] = []
        for column in columns[3:]:
            for token in column.split():
                try:
                    polymorphisms.extend(parse_polymorphisms(token))
                except ValueError as e:
                    raise MalformedInputError(str(e), sample_id=sample_id) from e

        return cls(sample_id, polymorphisms, ranges, Haplogroup(expected))

    @classmethod
    def from_ledger(cls, ledger: SampleLedger, profile: str = "major") -> "ClassifiedSample":
        """Build a sample from the major or minor profile of a ledger.

        Args:
            ledger: Decoded sample
            profile: 'major' or 'minor'

        Returns:
            ClassifiedSample named ``<id>_maj`` or ``<id>_min``
        """
        if profile == "major":
            polymorphisms, suffix = ledger.major_profile(), "maj"
        elif profile == "minor":
            polymorphisms, suffix = ledger.minor_profile(), "min"
        else:
            raise ValueError(f"Unknown profile: {profile}")

        return cls(
            f"{ledger.sample_id}_{suffix}",
            polymorphisms,
            SampleRanges.parse(ledger.range, sample_id=ledger.sample_id),
        )

    @property
    def results(self) -> List[RankedResult]:
        """Ranked results of the last search, best first."""
        return list(self._results)

    @property
    def clustered_results(self) -> ClusteredResults:
        return self._clusters

    @property
    def top_result(self) -> Optional[RankedResult]:
        return self._results[0] if self._results else None

    @property
    def detected_haplogroup(self) -> Optional[Haplogroup]:
        """Haplogroup of the top result, None before any search."""
        if self._detected is None:
            top = self.top_result
            if top is not None:
                self._detected = top.haplogroup
        return self._detected

    def get_result(self, haplogroup: Haplogroup) -> Optional[RankedResult]:
        """Return the ranked result for ``haplogroup``, or None."""
        for result in self._results:
            if result.haplogroup == haplogroup:
                return result
        return None

    def update_results(self, service: SearchService, ranking: Any) -> None:
        """Run the search and replace all results.

        The ranking strategy is copied so repeated runs never share its state.

        Args:
            service: Phylotree search
            ranking: Ranking strategy passed through to the search
        """
        results = list(service.search(self, copy.copy(ranking)))
        self._set_results(results)

    def clear_results(self) -> None:
        """Drop all search results."""
        self._set_results([])

    def _set_results(self, results: List[RankedResult]) -> None:
        self._results = results
        self._clusters = ClusteredResults(results)
        self._detected = None

    def select_subtree(self, names: Iterable[str]) -> Optional[TreeNode]:
        """Merge the paths of the selected results into one tree.

        A name belonging to a cluster of equal-distance results selects the
        whole cluster.

        Args:
            names: Haplogroup names to include

        Returns:
            Root of the merged tree, or None if nothing was selected
        """
        selected: List[RankedResult] = []
        seen = set()
        for name in names:
            haplogroup = Haplogroup(name)
            # Every result sits in a cluster; untied results form a cluster of one
            cluster = self._clusters.get_cluster(haplogroup)
            if cluster is None:
                logger.warning("%s: no result for haplogroup %s", self.sample_id, name)
                continue
            for result in cluster:
                if result.haplogroup.name not in seen:
                    seen.add(result.haplogroup.name)
                    selected.append(result)

        paths = [result.detailed_result.phylo_tree_path for result in selected]
        return PathTreeMerger().merge(paths, self.top_result)

    def __lt__(self, other: "ClassifiedSample") -> bool:
        return self.sample_id < other.sample_id

    def __str__(self) -> str:
        polys = " ".join(str(p) for p in self.polymorphisms)
        return f"{self.sample_id}\t{self.ranges}\t{self.expected_haplogroup}\t{polys}"

    def __repr__(self) -> str:
        return (
            f"ClassifiedSample(sample_id={self.sample_id!r}, "
            f"polymorphisms={len(self.polymorphisms)}, "
            f"detected={self.detected_haplogroup})"
        )
