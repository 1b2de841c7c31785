"""
Somatic staging pipeline.

Streams ICGC simple somatic mutation files, drops repeated variant calls with
a Bloom filter backed by an exact recency window, and stages the survivors as
MAF records.
"""

__version__ = "0.1.0"
