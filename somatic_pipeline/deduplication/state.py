"""
Per-run deduplication state.

Owns one MembershipFilter and one RecencyBuffer for the lifetime of a single
transformer run. Nothing here is shared between runs or thread-safe.
"""

from dataclasses import dataclass

from somatic_pipeline.deduplication.fingerprint import Fingerprint
from somatic_pipeline.deduplication.membership import MembershipFilter
from somatic_pipeline.deduplication.recency import RecencyBuffer


@dataclass
class DedupStats:
    """Counters for admission decisions."""
    admitted: int = 0
    rejected: int = 0
    # Filter said "maybe seen" but the fingerprint was outside the recency window
    readmitted: int = 0


class DedupState:
    """
    Admission decisions for a stream of fingerprints.

    A fingerprint is admitted unless the filter reports it as possibly seen
    AND the recency buffer confirms it. A filter hit that the buffer cannot
    confirm is re-admitted: it is either a false positive or a true duplicate
    older than the window, and the two cannot be told apart.
    """

    def __init__(self, filter_capacity: int, filter_error_rate: float, recency_window: int):
        self.filter = MembershipFilter(filter_capacity, filter_error_rate)
        self.recent = RecencyBuffer(recency_window)
        self.stats = DedupStats()

    def admit(self, fingerprint: Fingerprint) -> bool:
        """
        Decide admission and, if admitted, record the fingerprint.

        State is only mutated for admitted fingerprints.
        """
        maybe_seen = self.filter.might_contain(fingerprint)
        if maybe_seen and self.recent.contains(fingerprint):
            self.stats.rejected += 1
            return False

        if maybe_seen:
            self.stats.readmitted += 1
        self.filter.add(fingerprint)
        self.recent.add(fingerprint)
        self.stats.admitted += 1
        return True
