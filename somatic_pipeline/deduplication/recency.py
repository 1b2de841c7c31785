"""Fixed-capacity window over the most recently admitted fingerprints."""

from collections import Counter, deque
from typing import Deque

from somatic_pipeline.deduplication.fingerprint import Fingerprint


class RecencyBuffer:
    """
    FIFO of the last ``capacity`` fingerprints with exact membership.

    Used to confirm or refute a membership filter hit. Anything that has
    scrolled out of the window is unknown to the buffer.
    """

    def __init__(self, capacity: int = 200):
        if capacity <= 0:
            raise ValueError(f"Recency buffer capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: Deque[Fingerprint] = deque(maxlen=capacity)
        self._counts: Counter = Counter()

    def contains(self, fingerprint: Fingerprint) -> bool:
        return self._counts[fingerprint] > 0

    def __contains__(self, fingerprint: Fingerprint) -> bool:
        return self.contains(fingerprint)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, fingerprint: Fingerprint) -> None:
        """Append a fingerprint, evicting the oldest one when full."""
        if len(self._entries) == self.capacity:
            evicted = self._entries[0]
            self._counts[evicted] -= 1
            if self._counts[evicted] == 0:
                del self._counts[evicted]
        self._entries.append(fingerprint)
        self._counts[fingerprint] += 1
