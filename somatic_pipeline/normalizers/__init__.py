"""
Data normalization utilities.

These modules handle converting source-specific vocabularies into MAF
conventions.
"""

from .variants import (
    normalize_ncbi_build,
    normalize_strand,
    normalize_variant_classification,
    normalize_variant_type,
)

__all__ = [
    'normalize_variant_type',
    'normalize_variant_classification',
    'normalize_strand',
    'normalize_ncbi_build',
]
