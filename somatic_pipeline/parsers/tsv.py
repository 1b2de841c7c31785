"""
Tab-delimited record source.

Reads a header-defined TSV (optionally gzip-compressed) one record at a time.
Values are never quoted in ICGC exports, so quote handling is disabled.
"""

import csv
import gzip
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import IO

from loguru import logger

from somatic_pipeline.errors import IOFailure, RunCancelled

RawRecord = dict[str, str | None]


class TsvRecordSource:
    """
    Sequential reader of TSV records.

    Usage:
        with TsvRecordSource(path) as source:
            for line_number, record in source.records():
                ...
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._handle: IO[str] | None = None
        self._reader: csv.DictReader | None = None

    def __enter__(self) -> "TsvRecordSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self) -> None:
        try:
            if self.path.suffix == ".gz":
                self._handle = gzip.open(self.path, "rt", encoding="utf-8", newline="")
            else:
                self._handle = open(self.path, encoding="utf-8", newline="")
            self._reader = csv.DictReader(self._handle, delimiter="\t", quoting=csv.QUOTE_NONE)
            # Force the header to be read now so a bad file fails on open
            columns = self._reader.fieldnames or []
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            self.close()
            raise IOFailure(f"Cannot read header: {e}", self.path) from e

        logger.debug(f"Opened {self.path} with {len(columns)} columns")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._reader = None

    @property
    def columns(self) -> list[str]:
        """Column names from the header row (empty for an empty file)."""
        if self._reader is None:
            raise IOFailure("Record source is not open", self.path)
        return list(self._reader.fieldnames or [])

    def records(self, should_stop: Callable[[], bool] | None = None) -> Iterator[tuple[int, RawRecord]]:
        """
        Yield (line_number, record) pairs in file order.

        Args:
            should_stop: Checked before each read; when it returns True the
                         scan stops with RunCancelled.

        Raises:
            IOFailure: on any read or decode error
            RunCancelled: when should_stop asks for it
        """
        if self._reader is None:
            raise IOFailure("Record source is not open", self.path)

        while True:
            if should_stop is not None and should_stop():
                raise RunCancelled(f"Scan of {self.path} cancelled at line {self._reader.line_num}")
            try:
                row = next(self._reader)
            except StopIteration:
                return
            except (OSError, csv.Error, UnicodeDecodeError, EOFError) as e:
                raise IOFailure(f"Read failed near line {self._reader.line_num}: {e}", self.path) from e
            yield self._reader.line_num, row
