"""VCF importer for hapcheck.

Decodes every sample of an mtDNA VCF into a SampleLedger.
Uses pysam's VariantFile and reads records in file order, so no index
is needed.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Set, Tuple

import pysam

from hapcheck.adapters.base import InputAdapter
from hapcheck.core.decoder import GenotypeCall, decode_call
from hapcheck.core.ledger import SampleLedger
from hapcheck.core.ranges import FULL_RANGE
from hapcheck.errors import MalformedInputError

logger = logging.getLogger(__name__)


class VCFImporter(InputAdapter):
    """Importer for VCF variant call files.

    Builds one SampleLedger per VCF sample:
    1. Each record is turned into one GenotypeCall per sample (GT, DP, AF)
    2. Each call is decoded into Variants and added to that sample's ledger
    3. A sample whose calls cannot be decoded is dropped; others continue

    For genotyping-array input (``chip=True``) the covered range is the
    list of record positions instead of the whole genome.
    """

    def __init__(self, chip: bool = False) -> None:
        """Initialize VCF importer.

        Args:
            chip: Input comes from a genotyping array
        """
        self.chip = chip

    def can_handle(self, file_path: str) -> bool:
        """Check if file is a VCF."""
        return file_path.endswith((".vcf", ".vcf.gz", ".bcf"))

    @property
    def format_name(self) -> str:
        """Return format name."""
        return "VCF"

    def list_samples(self, file_path: str) -> List[str]:
        """List all samples in the VCF file.

        Args:
            file_path: Path to VCF file

        Returns:
            List of sample IDs
        """
        self._check_exists(file_path)
        with pysam.VariantFile(file_path) as vcf:
            return list(vcf.header.samples)

    def iter_calls(self, file_path: str) -> Iterator[Tuple[str, GenotypeCall]]:
        """Yield (sample_id, GenotypeCall) for every record and sample.

        Records are read one at a time in file order.

        Args:
            file_path: Path to VCF file
        """
        self._check_exists(file_path)
        with pysam.VariantFile(file_path) as vcf:
            samples = list(vcf.header.samples)
            has_af = "AF" in vcf.header.formats
            for record in vcf:
                for sample_id in samples:
                    sample_data = record.samples[sample_id]
                    af = sample_data.get("AF") if has_af else None
                    # Missing AF ('.') comes back as a tuple of None
                    if isinstance(af, tuple) and all(v is None for v in af):
                        af = None
                    yield sample_id, GenotypeCall(
                        position=record.pos,
                        ref=record.ref,
                        alleles=list(sample_data.alleles),
                        depth=sample_data.get("DP"),
                        af=af,
                    )

    def load(self, file_path: str) -> Dict[str, SampleLedger]:
        """Decode all samples of a VCF.

        Args:
            file_path: Path to VCF file

        Returns:
            Dictionary mapping sample ID to SampleLedger, in header order.
            Samples that failed to decode are left out.

        Raises:
            FileNotFoundError: If the VCF file doesn't exist
        """
        sample_range = self._chip_range(file_path) if self.chip else FULL_RANGE

        ledgers: Dict[str, SampleLedger] = {
            sample_id: SampleLedger(sample_id, covered_range=sample_range, chip=self.chip)
            for sample_id in self.list_samples(file_path)
        }
        failed: Set[str] = set()

        for sample_id, call in self.iter_calls(file_path):
            if sample_id in failed:
                continue
            try:
                variants = decode_call(call, sample_id)
            except MalformedInputError as e:
                logger.warning("Dropping sample %s: %s", sample_id, e)
                failed.add(sample_id)
                del ledgers[sample_id]
                continue
            for variant in variants:
                ledgers[sample_id].add_variant(variant)

        return ledgers

    def _chip_range(self, file_path: str) -> str:
        """Covered range of array data: every record position."""
        self._check_exists(file_path)
        with pysam.VariantFile(file_path) as vcf:
            return "".join(f"{record.pos};" for record in vcf)

    @staticmethod
    def _check_exists(file_path: str) -> None:
        if not Path(file_path).exists():
            raise FileNotFoundError(f"VCF file not found: {file_path}")
