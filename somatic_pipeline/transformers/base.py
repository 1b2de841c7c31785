"""
Base transformer class for staging input files.

All file-specific transformers should inherit from BaseTransformer and
implement transform(). A transformer instance is a unit of work: calling it
runs the whole scan-and-stage cycle for one input file and returns the input
path, so it can be submitted directly to an executor.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from somatic_pipeline.config import STAGING_FILE_NAME
from somatic_pipeline.errors import ConfigurationError, RunCancelled
from somatic_pipeline.parsers import TsvRecordSource
from somatic_pipeline.staging import (
    MutationRecord,
    TsvStagingFileHandler,
    get_transformation_model,
    resolve_column_names,
)
from somatic_pipeline.utils.paths import is_valid_input_file_path


@dataclass
class TransformResult:
    """Result of a transformation run."""
    input_path: Path
    success: bool
    staging_file: Path | None = None
    records_read: int = 0
    records_admitted: int = 0
    records_rejected: int = 0
    records_readmitted: int = 0
    records_malformed: int = 0
    records_written: int = 0
    errors: list[str] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        """Calculate duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None


class BaseTransformer(ABC):
    """
    Abstract base class for input file transformers.

    Subclasses must implement:
    - transform(): Turn an open record source into the batch of records to stage
    """

    # Staging file written inside the staging directory
    staging_file_name: str = STAGING_FILE_NAME

    def __init__(self, file_handler: TsvStagingFileHandler, staging_dir: Path):
        """
        Initialize the transformer and its staging file.

        Args:
            file_handler: Staging writer owned by this transformer
            staging_dir: Directory for the staging file (created if missing)

        Raises:
            ConfigurationError: if the staging directory or file cannot be set up
        """
        if staging_dir is None:
            raise ConfigurationError("A path to a staging file directory is required")

        self.file_handler = file_handler
        self.staging_dir = Path(staging_dir)
        self.input_path: Path | None = None
        self.field_mapping = get_transformation_model()
        self.result: TransformResult | None = None
        self._cancel_event = threading.Event()

        try:
            self.staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create staging directory {self.staging_dir}: {e}") from e

        self.staging_file = self.file_handler.register_destination(
            self.staging_dir / self.staging_file_name,
            resolve_column_names(),
        )

    def set_input_path(self, path: Path) -> None:
        """
        Set the file to transform.

        Raises:
            ConfigurationError: if the path is not a readable file
        """
        if not is_valid_input_file_path(path):
            raise ConfigurationError(f"Input file is missing or unreadable: {path}")
        self.input_path = Path(path).resolve()
        logger.info(f"Input path = {self.input_path}")

    def cancel(self) -> None:
        """
        Ask the current (or next) run to stop before it reads its next record.

        The request is cleared when that run ends, so the transformer can be
        executed again afterwards.
        """
        self._cancel_event.set()

    def cancel_requested(self) -> bool:
        return self._cancel_event.is_set()

    @abstractmethod
    def transform(self, source: TsvRecordSource, result: TransformResult) -> list[MutationRecord]:
        """
        Scan the source and build the batch to stage.

        Args:
            source: Open record source
            result: Result object to update with record counts

        Returns:
            Admitted records, normalized, in input order
        """
        pass

    def execute(self) -> Path:
        """
        Run the scan and write the batch to the staging file.

        Nothing is written unless the whole input was scanned successfully.

        Returns:
            Path of the staging file
        """
        if self.input_path is None:
            raise ConfigurationError("No input path set; call set_input_path() first")

        result = TransformResult(
            input_path=self.input_path,
            success=False,
            staging_file=self.staging_file,
            started_at=datetime.now(timezone.utc),
        )
        self.result = result

        try:
            logger.info(f"Transforming {self.input_path}...")
            with TsvRecordSource(self.input_path) as source:
                batch = self.transform(source, result)
            result.records_admitted = len(batch)

            if self.cancel_requested():
                raise RunCancelled(f"Transformation of {self.input_path} cancelled before staging")

            result.records_written = self.file_handler.write_batch(batch, self.field_mapping)
            result.success = True
            logger.info("transformation complete")

        except RunCancelled as e:
            logger.warning(str(e))
            result.errors.append(str(e))
            raise

        except Exception as e:
            logger.error(f"Transformation failed: {e}")
            result.errors.append(str(e))
            raise

        finally:
            # A cancel request ends with the run it stopped
            self._cancel_event.clear()
            result.completed_at = datetime.now(timezone.utc)
            logger.info(
                f"{self.input_path.name}: {result.records_read} read, "
                f"{result.records_admitted} admitted, "
                f"{result.records_rejected} duplicates, "
                f"{result.records_malformed} malformed, "
                f"{result.duration_seconds:.1f}s"
            )

        return self.staging_file

    def __call__(self) -> Path:
        """Unit of work: transform the input file and return its path."""
        logger.info("Transformer invoked")
        self.execute()
        return self.input_path
