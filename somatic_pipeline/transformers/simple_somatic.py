"""
ICGC simple somatic mutation transformer.

ICGC "simple_somatic_mutation.open" exports carry one row per variant call
and affected transcript, so the same call appears many times with only the
consequence columns changing. This transformer keeps the first row of every
call and stages it as a MAF record.

Data source: https://dcc.icgc.org/releases
Format: tab-delimited, header row, optionally gzip-compressed
"""

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from loguru import logger

from somatic_pipeline.config import IDENTITY_FIELDS, settings
from somatic_pipeline.deduplication import DedupState, fingerprint_record
from somatic_pipeline.errors import MalformedRecord
from somatic_pipeline.normalizers import (
    normalize_ncbi_build,
    normalize_strand,
    normalize_variant_classification,
    normalize_variant_type,
)
from somatic_pipeline.parsers import TsvRecordSource
from somatic_pipeline.staging import MutationRecord, TsvStagingFileHandler
from somatic_pipeline.transformers.base import BaseTransformer, TransformResult

_POSITION_RE = re.compile(r"\d+")


def _value(record: Mapping[str, Optional[str]], column: str) -> str:
    value = record.get(column)
    return value.strip() if value else ""


def _ref_count(total: str, alt: str) -> str:
    try:
        return str(int(total) - int(alt))
    except ValueError:
        return ""


def build_mutation_record(record: Mapping[str, Optional[str]]) -> MutationRecord:
    """
    Convert a raw ICGC simple somatic row into a MutationRecord.

    Args:
        record: Raw row keyed by ICGC column name

    Returns:
        MutationRecord with every MAF column populated (possibly empty)
    """
    tumor_allele = _value(record, "mutated_to_allele")
    variant_type = normalize_variant_type(_value(record, "mutation_type"), tumor_allele)
    aa_mutation = _value(record, "aa_mutation")
    position = _POSITION_RE.search(aa_mutation)

    return MutationRecord(
        hugo_symbol=_value(record, "gene_affected"),
        center=_value(record, "project_code"),
        ncbi_build=normalize_ncbi_build(_value(record, "assembly_version")),
        chromosome=_value(record, "chromosome"),
        start_position=_value(record, "chromosome_start"),
        end_position=_value(record, "chromosome_end"),
        strand=normalize_strand(_value(record, "chromosome_strand")),
        variant_classification=normalize_variant_classification(
            _value(record, "consequence_type"), variant_type
        ),
        variant_type=variant_type,
        reference_allele=_value(record, "reference_genome_allele"),
        tumor_seq_allele1=_value(record, "mutated_from_allele"),
        tumor_seq_allele2=tumor_allele,
        tumor_sample_barcode=_value(record, "icgc_sample_id"),
        matched_norm_sample_barcode=_value(record, "matched_icgc_sample_id"),
        verification_status=_value(record, "verification_status"),
        validation_status=_value(record, "biological_validation_status"),
        sequence_source=_value(record, "sequencing_strategy"),
        validation_method=_value(record, "verification_platform"),
        score=_value(record, "quality_score"),
        sequencer=_value(record, "platform"),
        t_ref_count=_ref_count(
            _value(record, "total_read_count"), _value(record, "mutant_allele_read_count")
        ),
        t_alt_count=_value(record, "mutant_allele_read_count"),
        hgvsp_short=f"p.{aa_mutation}" if aa_mutation else "",
        transcript_id=_value(record, "transcript_affected"),
        protein_position=position.group(0) if position else "",
        donor_id=_value(record, "icgc_donor_id"),
        mutation_id=_value(record, "icgc_mutation_id"),
    )


class SimpleSomaticTransformer(BaseTransformer):
    """
    Deduplicates and stages an ICGC simple somatic mutation file.

    Each run builds fresh dedup state: a Bloom filter sized for
    ``filter_capacity`` calls at ``filter_error_rate``, plus an exact window
    over the last ``recency_window`` admitted calls. A call whose filter hit
    cannot be confirmed by the window is staged again; with a window of 200
    this only happens for duplicates more than 200 distinct calls apart.
    """

    def __init__(
        self,
        file_handler: TsvStagingFileHandler,
        staging_dir: Path,
        filter_capacity: int | None = None,
        filter_error_rate: float | None = None,
        recency_window: int | None = None,
        on_malformed: str | None = None,
    ):
        super().__init__(file_handler, staging_dir)
        self.filter_capacity = filter_capacity or settings.pipeline.filter_capacity
        self.filter_error_rate = filter_error_rate or settings.pipeline.filter_error_rate
        self.recency_window = recency_window or settings.pipeline.recency_window
        self.on_malformed = on_malformed or settings.pipeline.on_malformed

    def transform(self, source: TsvRecordSource, result: TransformResult) -> list[MutationRecord]:
        columns = source.columns
        if not columns:
            logger.warning(f"{source.path} has no header row; nothing to stage")
            return []

        missing = [name for name in IDENTITY_FIELDS if name not in columns]
        if missing:
            raise MalformedRecord(missing, line_number=1)

        state = DedupState(self.filter_capacity, self.filter_error_rate, self.recency_window)
        batch: list[MutationRecord] = []

        for line_number, record in source.records(should_stop=self.cancel_requested):
            result.records_read += 1

            try:
                fingerprint = fingerprint_record(record, line_number=line_number)
            except MalformedRecord as e:
                if self.on_malformed == "abort":
                    raise
                result.records_malformed += 1
                logger.warning(f"Skipping record: {e}")
                continue

            if not state.admit(fingerprint):
                logger.trace(f"Duplicate call {fingerprint} at line {line_number}")
                continue

            batch.append(build_mutation_record(record))

        result.records_rejected = state.stats.rejected
        result.records_readmitted = state.stats.readmitted
        if result.records_malformed:
            logger.warning(f"Skipped {result.records_malformed} malformed records in {source.path}")
        if state.filter.saturated:
            logger.warning(
                f"Dedup filter for {source.path} ran past its capacity of {self.filter_capacity:,}"
            )

        return batch
