# SPDX-License-Identifier: MIT
"""Tests for the TSV record source."""

import gzip

import pytest

from somatic_pipeline.errors import IOFailure, RunCancelled
from somatic_pipeline.parsers import TsvRecordSource


class TestTsvRecordSource:
    """Test reading header-defined TSV records."""

    def test_reads_records_with_line_numbers(self, tmp_path):
        """Records are keyed by header columns and carry their line number."""
        path = tmp_path / "in.tsv"
        path.write_text("a\tb\n1\t2\n3\t4\n", encoding="utf-8")

        with TsvRecordSource(path) as source:
            assert source.columns == ["a", "b"]
            records = list(source.records())

        assert records == [(2, {"a": "1", "b": "2"}), (3, {"a": "3", "b": "4"})]

    def test_header_only(self, tmp_path):
        """A header without data yields no records."""
        path = tmp_path / "in.tsv"
        path.write_text("a\tb\n", encoding="utf-8")
        with TsvRecordSource(path) as source:
            assert source.columns == ["a", "b"]
            assert list(source.records()) == []

    def test_short_row_gives_none(self, tmp_path):
        """Missing trailing cells come back as None."""
        path = tmp_path / "in.tsv"
        path.write_text("a\tb\tc\n1\t2\n", encoding="utf-8")
        with TsvRecordSource(path) as source:
            (_, record), = source.records()
        assert record == {"a": "1", "b": "2", "c": None}

    def test_quotes_are_literal(self, tmp_path):
        """Quote characters are kept as data."""
        path = tmp_path / "in.tsv"
        path.write_text('a\tb\n"x\ty"\n', encoding="utf-8")
        with TsvRecordSource(path) as source:
            (_, record), = source.records()
        assert record == {"a": '"x', "b": 'y"'}

    def test_gzip_input(self, tmp_path):
        """Files ending in .gz are decompressed transparently."""
        path = tmp_path / "in.tsv.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("a\tb\n1\t2\n")
        with TsvRecordSource(path) as source:
            assert [record for _, record in source.records()] == [{"a": "1", "b": "2"}]

    def test_missing_file(self, tmp_path):
        """Unreadable input is an IOFailure."""
        with pytest.raises(IOFailure):
            with TsvRecordSource(tmp_path / "nope.tsv"):
                pass

    def test_should_stop_checked_before_each_read(self, tmp_path):
        """A stop request ends the scan before the next record is read."""
        path = tmp_path / "in.tsv"
        path.write_text("a\n1\n2\n3\n", encoding="utf-8")
        seen = []
        with TsvRecordSource(path) as source:
            with pytest.raises(RunCancelled):
                for _, record in source.records(should_stop=lambda: len(seen) >= 2):
                    seen.append(record["a"])
        assert seen == ["1", "2"]

    def test_records_requires_open(self, tmp_path):
        """Reading a closed source fails."""
        source = TsvRecordSource(tmp_path / "in.tsv")
        with pytest.raises(IOFailure):
            list(source.records())
