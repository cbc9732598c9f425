"""Command-line interface for hapcheck.

Decodes mtDNA VCF files and prints the typed variants or per-sample
summaries as TSV.
"""

import logging
import sys
from typing import Dict, List, Optional

import click

from hapcheck import __version__
from hapcheck.adapters.vcf import VCFImporter
from hapcheck.core.ledger import SampleLedger
from hapcheck.core.variant import Variant

VARIANT_COLUMNS = [
    "sample_id",
    "position",
    "ref",
    "base",
    "type",
    "insertion",
    "coverage",
    "level",
    "major",
    "major_level",
    "minor",
    "minor_level",
]

SUMMARY_COLUMNS = [
    "sample_id",
    "range",
    "variants",
    "substitutions",
    "heteroplasmies",
    "mean_coverage",
    "mean_heteroplasmy_level",
]


def _fmt(value: object) -> str:
    """Format a TSV cell, empty for missing values."""
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


def _variant_row(sample_id: str, variant: Variant) -> str:
    return "\t".join(
        _fmt(v)
        for v in [
            sample_id,
            variant.position,
            variant.ref,
            variant.base,
            variant.kind.value,
            variant.insertion,
            variant.coverage,
            variant.level,
            variant.major,
            variant.major_level,
            variant.minor,
            variant.minor_level,
        ]
    )


def _summary_row(ledger: SampleLedger) -> str:
    return "\t".join(
        _fmt(v)
        for v in [
            ledger.sample_id,
            ledger.range,
            ledger.variant_count,
            ledger.substitution_count,
            ledger.heteroplasmy_count,
            ledger.mean_coverage,
            ledger.mean_heteroplasmy_level,
        ]
    )


def _load_ledgers(
    vcf_file: str, chip: bool, sample_id: Optional[str]
) -> List[SampleLedger]:
    """Load ledgers, exiting with an error for unknown samples."""
    ledgers: Dict[str, SampleLedger] = VCFImporter(chip=chip).load(vcf_file)
    if sample_id is None:
        return list(ledgers.values())
    if sample_id not in ledgers:
        click.echo(f"Error: Sample '{sample_id}' not found or could not be decoded", err=True)
        sys.exit(1)
    return [ledgers[sample_id]]


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug messages")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
def main(verbose: bool, quiet: bool) -> None:
    """hapcheck - mtDNA variant decoding for contamination checks.

    Decode per-sample genotype calls from mtDNA VCF files into
    substitutions, deletions, insertions and heteroplasmies.
    """
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("vcf_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--chip", is_flag=True, help="Input comes from a genotyping array")
@click.option("--sample-id", help="Only print this sample")
def variants(vcf_file: str, chip: bool, sample_id: Optional[str]) -> None:
    """Print decoded variants as TSV.

    Examples:

        hapcheck variants sample.vcf.gz

        hapcheck variants population.vcf --sample-id NA12878
    """
    click.echo("\t".join(VARIANT_COLUMNS))
    for ledger in _load_ledgers(vcf_file, chip, sample_id):
        for variant in ledger.variants():
            click.echo(_variant_row(ledger.sample_id, variant))


@main.command()
@click.argument("vcf_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--chip", is_flag=True, help="Input comes from a genotyping array")
@click.option("--sample-id", help="Only print this sample")
def summary(vcf_file: str, chip: bool, sample_id: Optional[str]) -> None:
    """Print per-sample variant counts as TSV."""
    click.echo("\t".join(SUMMARY_COLUMNS))
    for ledger in _load_ledgers(vcf_file, chip, sample_id):
        click.echo(_summary_row(ledger))


if __name__ == "__main__":
    main()
