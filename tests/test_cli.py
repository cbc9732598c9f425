"""Tests for the hapcheck command-line interface."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from hapcheck.cli import SUMMARY_COLUMNS, VARIANT_COLUMNS, main

RECORDS = [
    "chrM\t73\t.\tA\tG\t.\tPASS\t.\tGT:DP\t1:50\t1:30",
    "chrM\t16093\t.\tT\tC\t.\tPASS\t.\tGT:DP:AF\t0/1:100:0.3\t0:90:.",
]


class TestCli:
    """Tests for the variants and summary commands."""

    @pytest.fixture
    def runner(self):
        """Create CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def vcf_path(self, write_vcf) -> str:
        return str(write_vcf(["S1", "S2"], RECORDS))

    def test_version(self, runner) -> None:
        """--version prints the package version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_variants(self, runner, vcf_path: str) -> None:
        """variants prints a header and one row per decoded variant."""
        result = runner.invoke(main, ["variants", vcf_path])
        assert result.exit_code == 0, result.output

        lines = result.output.strip().split("\n")
        assert lines[0].split("\t") == VARIANT_COLUMNS
        rows = [line.split("\t") for line in lines[1:]]
        assert [(r[0], r[1], r[4]) for r in rows] == [
            ("S1", "73", "substitution"),
            ("S1", "16093", "heteroplasmy"),
            ("S2", "73", "substitution"),
        ]
        assert rows[0][6] == "50"
        assert rows[1][7] == "0.3000"

    def test_variants_single_sample(self, runner, vcf_path: str) -> None:
        """--sample-id restricts output to one sample."""
        result = runner.invoke(main, ["variants", vcf_path, "--sample-id", "S2"])
        assert result.exit_code == 0, result.output
        rows = result.output.strip().split("\n")[1:]
        assert len(rows) == 1
        assert rows[0].startswith("S2\t73\t")

    def test_summary(self, runner, vcf_path: str) -> None:
        """summary prints per-sample counts and means."""
        result = runner.invoke(main, ["summary", vcf_path])
        assert result.exit_code == 0, result.output

        lines = result.output.strip().split("\n")
        assert lines[0].split("\t") == SUMMARY_COLUMNS
        s1 = lines[1].split("\t")
        assert s1 == ["S1", "1-16569", "2", "1", "1", "75.0000", "0.3000"]
        s2 = lines[2].split("\t")
        assert s2[:5] == ["S2", "1-16569", "1", "1", "0"]
        assert s2[6] == ""

    def test_summary_chip(self, runner, vcf_path: str) -> None:
        """--chip reports the record positions as the range."""
        result = runner.invoke(main, ["summary", vcf_path, "--chip"])
        assert result.exit_code == 0, result.output
        assert result.output.split("\n")[1].split("\t")[1] == "73;16093;"

    def test_unknown_sample(self, runner, vcf_path: str) -> None:
        """An unknown sample exits with an error."""
        result = runner.invoke(main, ["summary", vcf_path, "--sample-id", "NOPE"])
        assert result.exit_code == 1
        assert "NOPE" in result.output

    def test_missing_file(self, runner, tmp_path: Path) -> None:
        """A missing VCF is rejected before loading."""
        result = runner.invoke(main, ["variants", str(tmp_path / "missing.vcf")])
        assert result.exit_code != 0
