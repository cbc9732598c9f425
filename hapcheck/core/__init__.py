"""Core data structures and algorithms for hapcheck."""

from hapcheck.core.decoder import GenotypeCall, GenotypeType, decode_call
from hapcheck.core.fragments import (
    FragmentPartitioner,
    FragmentPolicy,
    partition_bucketed,
    partition_replicate,
)
from hapcheck.core.ledger import SampleLedger
from hapcheck.core.phylo import (
    ClusteredResults,
    DetailedResult,
    Haplogroup,
    Polymorphism,
    RankedResult,
    SearchResultTreeNode,
    SearchService,
)
from hapcheck.core.ranges import SampleRanges
from hapcheck.core.sample import ClassifiedSample
from hapcheck.core.tree import PathTreeMerger, TreeNode
from hapcheck.core.variant import Variant, VariantKind

__all__ = [
    "ClassifiedSample",
    "ClusteredResults",
    "DetailedResult",
    "FragmentPartitioner",
    "FragmentPolicy",
    "GenotypeCall",
    "GenotypeType",
    "Haplogroup",
    "PathTreeMerger",
    "Polymorphism",
    "RankedResult",
    "SampleLedger",
    "SampleRanges",
    "SearchResultTreeNode",
    "SearchService",
    "TreeNode",
    "Variant",
    "VariantKind",
    "decode_call",
    "partition_bucketed",
    "partition_replicate",
]
