"""
Deduplication components.

A Bloom filter answers "possibly seen", a small exact window of recent
fingerprints confirms it, and DedupState combines both into one admission
decision per record.
"""

from .fingerprint import Fingerprint, fingerprint_record
from .membership import MembershipFilter
from .recency import RecencyBuffer
from .state import DedupState, DedupStats

__all__ = [
    'Fingerprint',
    'fingerprint_record',
    'MembershipFilter',
    'RecencyBuffer',
    'DedupState',
    'DedupStats',
]
