"""
Append-only TSV staging files.

A destination is registered once with its ordered column names (creating the
file and header if needed); batches are then appended to it. Each batch is
rendered completely in memory before anything touches the file.
"""

import os
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from somatic_pipeline.errors import ConfigurationError, IOFailure
from somatic_pipeline.staging.maf_model import FieldMapping, MutationRecord


def _clean(value) -> str:
    """Render a value for a single TSV cell."""
    if value is None:
        return ""
    return str(value).replace("\t", " ").replace("\r", " ").replace("\n", " ")


def atomic_write_text(dest_path: Path, content: str) -> Path:
    """
    Write text to a file atomically.

    Args:
        dest_path: Final destination path
        content: Text to write

    Returns:
        Path to written file
    """
    dest_path = Path(dest_path)
    dest_path.parent.mkdir(parents=True, exist_ok=True)

    temp_path = dest_path.with_suffix(dest_path.suffix + ".tmp")

    try:
        temp_path.write_text(content, encoding="utf-8")
        os.replace(temp_path, dest_path)
        return dest_path
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


class TsvStagingFileHandler:
    """
    Staging writer for a single TSV destination.

    Only one handler should append to a given file at a time.
    """

    def __init__(self):
        self.path: Path | None = None
        self.columns: list[str] = []

    def register_destination(self, path: Path, columns: Sequence[str]) -> Path:
        """
        Set the staging file and make sure it exists with the right header.

        Args:
            path: Staging file path; parent directories are created
            columns: Ordered output column names

        Returns:
            The staging file path

        Raises:
            ConfigurationError: if the file cannot be created, or already
                                exists with a different header
        """
        path = Path(path)
        columns = list(columns)
        if not columns:
            raise ConfigurationError("A staging file needs at least one column")

        header = "\t".join(columns)
        try:
            if path.exists() and path.stat().st_size > 0:
                with open(path, encoding="utf-8") as f:
                    existing = f.readline().rstrip("\r\n")
                if existing != header:
                    raise ConfigurationError(f"Staging file {path} exists with a different header")
                logger.info(f"Appending to existing staging file {path}")
            else:
                atomic_write_text(path, header + "\n")
                logger.info(f"Created staging file {path} with {len(columns)} columns")
        except OSError as e:
            raise ConfigurationError(f"Cannot initialise staging file {path}: {e}") from e

        self.path = path
        self.columns = columns
        return path

    def render_batch(self, records: Sequence[MutationRecord], field_mapping: FieldMapping) -> str:
        """Render a batch as TSV lines (no header)."""
        if list(field_mapping.keys()) != self.columns:
            raise ConfigurationError("Field mapping does not match the registered staging columns")

        lines = []
        for record in records:
            row = record.as_row(field_mapping)
            lines.append("\t".join(_clean(row[column]) for column in self.columns))
        return "".join(line + "\n" for line in lines)

    def write_batch(self, records: Sequence[MutationRecord], field_mapping: FieldMapping) -> int:
        """
        Append a batch of records to the staging file.

        Returns:
            Number of records written

        Raises:
            ConfigurationError: if no destination is registered or the mapping
                                does not cover exactly the registered columns
            IOFailure: if the append fails
        """
        if self.path is None:
            raise ConfigurationError("No staging destination registered")

        content = self.render_batch(records, field_mapping)
        if not content:
            logger.info(f"Empty batch, nothing appended to {self.path}")
            return 0

        try:
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise IOFailure(f"Append to staging file failed: {e}", self.path) from e

        logger.info(f"Appended {len(records):,} records to {self.path}")
        return len(records)
