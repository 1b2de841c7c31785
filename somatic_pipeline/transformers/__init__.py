"""
Transformers turn input files into staged, deduplicated records.
"""

from .base import BaseTransformer, TransformResult
from .runner import RunOutcome, TransformerPool
from .simple_somatic import SimpleSomaticTransformer, build_mutation_record

__all__ = [
    'BaseTransformer',
    'TransformResult',
    'SimpleSomaticTransformer',
    'build_mutation_record',
    'TransformerPool',
    'RunOutcome',
]
