"""
Staging persistence.

Writers that append normalized records to staging files, and the MAF model
describing those files.
"""

from .maf_model import FieldMapping, MutationRecord, get_transformation_model, resolve_column_names
from .tsv import TsvStagingFileHandler, atomic_write_text

__all__ = [
    'FieldMapping',
    'MutationRecord',
    'get_transformation_model',
    'resolve_column_names',
    'TsvStagingFileHandler',
    'atomic_write_text',
]
