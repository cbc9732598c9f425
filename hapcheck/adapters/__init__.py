"""Input format adapters for hapcheck."""

from hapcheck.adapters.base import InputAdapter
from hapcheck.adapters.hsd import HSDAdapter, parse_hsd_lines
from hapcheck.adapters.vcf import VCFImporter

__all__ = [
    "InputAdapter",
    "HSDAdapter",
    "VCFImporter",
    "parse_hsd_lines",
]
