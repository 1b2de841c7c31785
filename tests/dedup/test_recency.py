# SPDX-License-Identifier: MIT
"""Tests for the recency buffer."""

import pytest

from somatic_pipeline.deduplication import Fingerprint, RecencyBuffer


def _fp(i: int) -> Fingerprint:
    return Fingerprint(("DO1", "1", str(i)))


class TestRecencyBuffer:
    """Test the fixed-size recent window."""

    def test_contains_until_k_later_additions(self):
        """An entry stays visible until K further fingerprints are added after it."""
        buffer = RecencyBuffer(capacity=5)
        buffer.add(_fp(0))
        for i in range(1, 5):
            buffer.add(_fp(i))
            assert buffer.contains(_fp(0))
        buffer.add(_fp(5))
        assert not buffer.contains(_fp(0))
        assert _fp(5) in buffer

    def test_size_never_exceeds_capacity(self):
        """Length is capped at the capacity."""
        buffer = RecencyBuffer(capacity=3)
        for i in range(10):
            buffer.add(_fp(i))
            assert len(buffer) <= 3
        assert len(buffer) == 3
        assert [buffer.contains(_fp(i)) for i in range(10)] == [False] * 7 + [True] * 3

    def test_exact_membership(self):
        """Fingerprints never added are never reported."""
        buffer = RecencyBuffer(capacity=200)
        for i in range(100):
            buffer.add(_fp(i))
        assert not any(buffer.contains(_fp(i)) for i in range(100, 300))

    def test_repeated_entry_survives_partial_eviction(self):
        """A fingerprint added twice stays until its newest copy is evicted."""
        buffer = RecencyBuffer(capacity=3)
        buffer.add(_fp(1))
        buffer.add(_fp(1))
        buffer.add(_fp(2))
        buffer.add(_fp(3))  # evicts the first copy
        assert buffer.contains(_fp(1))
        buffer.add(_fp(4))  # evicts the second copy
        assert not buffer.contains(_fp(1))

    def test_invalid_capacity(self):
        """Capacity must be positive."""
        with pytest.raises(ValueError):
            RecencyBuffer(capacity=0)
