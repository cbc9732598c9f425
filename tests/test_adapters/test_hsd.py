"""Tests for hapcheck.adapters.hsd module."""

from pathlib import Path

import pytest

from hapcheck.adapters.hsd import HSDAdapter, parse_hsd_lines
from hapcheck.errors import MalformedInputError

HSD_LINES = [
    "SampleId\tRange\tHaplogroup\tPolymorphisms",
    "S1\t1-16569\tH2a2\t263G 315.1C",
    "",
    "# comment",
    "S2\t16024-16569;1-576\t?\t16519C",
]


class TestParseHsdLines:
    """Tests for parse_hsd_lines()."""

    def test_parse(self) -> None:
        """Header, blank and comment lines are skipped."""
        samples = parse_hsd_lines(HSD_LINES)
        assert [s.sample_id for s in samples] == ["S1", "S2"]
        assert samples[1].ranges.starts == [16024, 1]
        assert samples[1].expected_haplogroup.name == ""

    def test_invalid_line_skipped(self) -> None:
        """Invalid samples are skipped by default."""
        samples = parse_hsd_lines(["S1\t1-16569", "S2\t1-16569\tH\t73G"])
        assert [s.sample_id for s in samples] == ["S2"]

    def test_invalid_line_raises(self) -> None:
        """Invalid samples raise when skip_invalid is False."""
        with pytest.raises(MalformedInputError):
            parse_hsd_lines(["S1\tbad\tH\t73G"], skip_invalid=False)


class TestHSDAdapter:
    """Tests for HSDAdapter class."""

    def test_can_handle_hsd(self) -> None:
        """Test can_handle returns True for .hsd files."""
        adapter = HSDAdapter()
        assert adapter.can_handle("samples.hsd") is True
        assert adapter.can_handle("samples.vcf") is False

    def test_format_name(self) -> None:
        """Test format_name returns 'HSD'."""
        assert HSDAdapter().format_name == "HSD"

    def test_load(self, tmp_path: Path) -> None:
        """Samples load from a file."""
        hsd_path = tmp_path / "samples.hsd"
        hsd_path.write_text("\n".join(HSD_LINES) + "\n")
        samples = HSDAdapter().load(str(hsd_path))
        assert len(samples) == 2
        assert [str(p) for p in samples[0].polymorphisms] == ["263G", "315.1C"]

    def test_load_missing(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            HSDAdapter().load(str(tmp_path / "missing.hsd"))
