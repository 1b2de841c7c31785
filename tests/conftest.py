# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for the somatic staging tests."""

import os
from pathlib import Path
from typing import Callable

import pytest

# Set test environment variables before importing the package
os.environ.setdefault("DISABLE_LOGGING", "1")

ICGC_COLUMNS = [
    "icgc_mutation_id",
    "icgc_donor_id",
    "project_code",
    "icgc_specimen_id",
    "icgc_sample_id",
    "matched_icgc_sample_id",
    "submitted_sample_id",
    "chromosome",
    "chromosome_start",
    "chromosome_end",
    "chromosome_strand",
    "assembly_version",
    "mutation_type",
    "reference_genome_allele",
    "mutated_from_allele",
    "mutated_to_allele",
    "quality_score",
    "total_read_count",
    "mutant_allele_read_count",
    "verification_status",
    "verification_platform",
    "biological_validation_status",
    "consequence_type",
    "aa_mutation",
    "gene_affected",
    "transcript_affected",
    "platform",
    "sequencing_strategy",
]


@pytest.fixture
def sample_icgc_row() -> dict:
    """One ICGC simple somatic mutation row (KRAS G12D)."""
    return {
        "icgc_mutation_id": "MU1001",
        "icgc_donor_id": "DO1001",
        "project_code": "EOPC-DE",
        "icgc_specimen_id": "SP1001",
        "icgc_sample_id": "SA1001",
        "matched_icgc_sample_id": "SA1002",
        "submitted_sample_id": "tumour-1",
        "chromosome": "12",
        "chromosome_start": "25398284",
        "chromosome_end": "25398284",
        "chromosome_strand": "1",
        "assembly_version": "GRCh37",
        "mutation_type": "single base substitution",
        "reference_genome_allele": "C",
        "mutated_from_allele": "C",
        "mutated_to_allele": "T",
        "quality_score": "",
        "total_read_count": "60",
        "mutant_allele_read_count": "21",
        "verification_status": "not tested",
        "verification_platform": "",
        "biological_validation_status": "",
        "consequence_type": "missense_variant",
        "aa_mutation": "G12D",
        "gene_affected": "ENSG00000133703",
        "transcript_affected": "ENST00000256078",
        "platform": "Illumina HiSeq",
        "sequencing_strategy": "WGS",
    }


@pytest.fixture
def make_row(sample_icgc_row: dict) -> Callable[..., dict]:
    """Build a row from the sample, overriding selected columns."""

    def _make_row(**overrides) -> dict:
        return {**sample_icgc_row, **overrides}

    return _make_row


@pytest.fixture
def write_tsv(tmp_path: Path) -> Callable[..., Path]:
    """Write rows to a TSV file with the ICGC header."""

    def _write_tsv(rows: list[dict], name: str = "simple_somatic_mutation.open.EOPC-DE.tsv",
                   columns: list[str] | None = None) -> Path:
        columns = columns or ICGC_COLUMNS
        path = tmp_path / "input" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["\t".join(columns)]
        for row in rows:
            lines.append("\t".join(row.get(column, "") for column in columns))
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write_tsv


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    """Staging directory that does not exist yet."""
    return tmp_path / "staging" / "EOPC-DE"


@pytest.fixture
def icgc_columns() -> list[str]:
    """Header of an ICGC simple somatic mutation export (subset)."""
    return list(ICGC_COLUMNS)
