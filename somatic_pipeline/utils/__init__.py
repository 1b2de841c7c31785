"""Utility modules for the staging pipeline."""

from somatic_pipeline.utils.logging import setup_logging
from somatic_pipeline.utils.paths import is_valid_input_file_path, staging_subdir_name

__all__ = [
    # Logging
    "setup_logging",
    # Paths
    "is_valid_input_file_path",
    "staging_subdir_name",
]
