"""
Record sources for the transformers.

Each source reads a specific input format and yields raw records keyed by
header column name.
"""

from .tsv import RawRecord, TsvRecordSource

__all__ = [
    'RawRecord',
    'TsvRecordSource',
]
