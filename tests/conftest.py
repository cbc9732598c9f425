"""Pytest configuration and fixtures for hapcheck tests."""

from pathlib import Path
from typing import Callable, List

import pytest

from hapcheck.core.phylo import (
    DetailedResult,
    Haplogroup,
    Polymorphism,
    RankedResult,
    SearchResultTreeNode,
)

VCF_HEADER = """##fileformat=VCFv4.2
##contig=<ID=chrM,length=16569>
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read depth">
##FORMAT=<ID=AF,Number=A,Type=Float,Description="Allele frequency">
"""


@pytest.fixture
def write_vcf(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes an uncompressed mtDNA VCF.

    The helper takes sample names, tab-separated record lines
    (CHROM..FORMAT plus one column per sample) and an optional header.
    """

    def _write(samples: List[str], records: List[str], header: str = VCF_HEADER) -> Path:
        vcf_path = tmp_path / "test.vcf"
        columns = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO", "FORMAT"]
        lines = [header.rstrip("\n"), "\t".join(columns + samples)] + records
        vcf_path.write_text("\n".join(lines) + "\n")
        return vcf_path

    return _write


def _make_step(
    name: str, expected: str = "", found: str = "", not_in_range: str = ""
) -> SearchResultTreeNode:
    """Build a path step from space-separated polymorphism strings."""

    def polys(text: str) -> List[Polymorphism]:
        return [Polymorphism.parse(p) for p in text.split()]

    return SearchResultTreeNode(
        haplogroup=Haplogroup(name),
        expected_polys=polys(expected),
        found_polys=polys(found),
        not_in_range_polys=polys(not_in_range),
    )


def _make_result(
    path_names: List[str], distance: float = 0.0, corrected: str = ""
) -> RankedResult:
    """Build a ranked result whose path visits ``path_names``."""
    return RankedResult(
        haplogroup=Haplogroup(path_names[-1]),
        distance=distance,
        detailed_result=DetailedResult(
            phylo_tree_path=[_make_step(name) for name in path_names],
            corrected_backmutations=frozenset(Polymorphism.parse(p) for p in corrected.split()),
        ),
    )


class StaticSearch:
    """Search stand-in returning a fixed result list."""

    def __init__(self, results: List[RankedResult]) -> None:
        self.results = results
        self.calls = 0
        self.rankings: List[object] = []

    def search(self, sample: object, ranking: object) -> List[RankedResult]:
        self.calls += 1
        self.rankings.append(ranking)
        return list(self.results)


@pytest.fixture
def make_step() -> Callable[..., SearchResultTreeNode]:
    """Return the path step builder."""
    return _make_step


@pytest.fixture
def make_result() -> Callable[..., RankedResult]:
    """Return the ranked result builder."""
    return _make_result


@pytest.fixture
def static_search() -> Callable[[List[RankedResult]], StaticSearch]:
    """Return a factory for fixed-result searches."""
    return StaticSearch
