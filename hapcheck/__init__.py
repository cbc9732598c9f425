"""hapcheck - mtDNA variant decoding and haplogroup result trees."""

__version__ = "0.1.0"
__author__ = "hapcheck Contributors"

from hapcheck.core.decoder import GenotypeCall, decode_call
from hapcheck.core.ledger import SampleLedger
from hapcheck.core.sample import ClassifiedSample
from hapcheck.core.tree import PathTreeMerger, TreeNode
from hapcheck.core.variant import Variant, VariantKind
from hapcheck.errors import HapcheckError, MalformedInputError

__all__ = [
    "ClassifiedSample",
    "GenotypeCall",
    "HapcheckError",
    "MalformedInputError",
    "PathTreeMerger",
    "SampleLedger",
    "TreeNode",
    "Variant",
    "VariantKind",
    "decode_call",
    "__version__",
]
