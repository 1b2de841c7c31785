"""
Probabilistic membership filter over record fingerprints.

Wraps pybloom_live's BloomFilter, which sizes itself from the expected
capacity N and false-positive probability p:

    num_slices     = ceil(log2(1 / p))
    bits_per_slice = ceil(N * |ln p| / (num_slices * ln(2)^2))

Hashes are salted hashlib digests, so the same fingerprints set the same bits
in every process.
"""

from loguru import logger
from pybloom_live import BloomFilter

from somatic_pipeline.deduplication.fingerprint import Fingerprint
from somatic_pipeline.errors import ConfigurationError


class MembershipFilter:
    """
    Answers "possibly seen before" for fingerprints.

    No false negatives: once added, a fingerprint is always reported as
    possibly present. There is no removal.
    """

    def __init__(self, capacity: int, error_rate: float):
        if capacity <= 0:
            raise ConfigurationError(f"Filter capacity must be positive, got {capacity}")
        if not 0 < error_rate < 1:
            raise ConfigurationError(f"Filter error rate must be in (0, 1), got {error_rate}")

        self.capacity = capacity
        self.error_rate = error_rate
        self._bloom = BloomFilter(capacity=capacity, error_rate=error_rate)
        self._saturated = False

        logger.debug(
            f"Membership filter sized for {capacity:,} entries at p={error_rate}: "
            f"{self._bloom.num_bits:,} bits, {self._bloom.num_slices} hashes"
        )

    @property
    def num_bits(self) -> int:
        return self._bloom.num_bits

    @property
    def num_hashes(self) -> int:
        return self._bloom.num_slices

    @property
    def saturated(self) -> bool:
        """True once more distinct fingerprints were added than the filter was sized for."""
        return self._saturated

    def might_contain(self, fingerprint: Fingerprint) -> bool:
        return fingerprint.key in self._bloom

    def __contains__(self, fingerprint: Fingerprint) -> bool:
        return self.might_contain(fingerprint)

    def __len__(self) -> int:
        """Approximate number of distinct fingerprints added."""
        return len(self._bloom)

    def add(self, fingerprint: Fingerprint) -> None:
        key = fingerprint.key
        try:
            self._bloom.add(key)
        except IndexError:
            # pybloom_live refuses adds past capacity; keep setting bits so the
            # no-false-negative guarantee holds while the error rate climbs.
            if not self._saturated:
                logger.warning(
                    f"Membership filter exceeded its capacity of {self.capacity:,}; "
                    f"false-positive rate will rise above {self.error_rate}"
                )
                self._saturated = True
            self._set_bits(key)

    def _set_bits(self, key: str) -> None:
        offset = 0
        for index in self._bloom.make_hashes(key):
            self._bloom.bitarray[offset + index] = True
            offset += self._bloom.bits_per_slice
