# SPDX-License-Identifier: MIT
"""Tests for MAF vocabulary normalization."""

import pytest

from somatic_pipeline.normalizers import (
    normalize_ncbi_build,
    normalize_strand,
    normalize_variant_classification,
    normalize_variant_type,
)


class TestVariantType:
    """Test mutation_type -> Variant_Type."""

    @pytest.mark.parametrize("mutation_type,allele,expected", [
        ("single base substitution", "T", "SNP"),
        ("insertion of <=200bp", "AT", "INS"),
        ("deletion of <=200bp", "-", "DEL"),
        ("multiple base substitution (>=2bp and <=200bp)", "AT", "DNP"),
        ("multiple base substitution (>=2bp and <=200bp)", "ATG", "TNP"),
        ("multiple base substitution (>=2bp and <=200bp)", "ATGC", "ONP"),
        ("Single Base Substitution", "T", "SNP"),
        ("", "T", ""),
        (None, None, ""),
    ])
    def test_mapping(self, mutation_type, allele, expected):
        assert normalize_variant_type(mutation_type, allele) == expected


class TestVariantClassification:
    """Test consequence_type -> Variant_Classification."""

    @pytest.mark.parametrize("consequence,expected", [
        ("missense_variant", "Missense_Mutation"),
        ("synonymous_variant", "Silent"),
        ("stop_gained", "Nonsense_Mutation"),
        ("5_prime_UTR_variant", "5'UTR"),
        ("3_prime_UTR_variant", "3'UTR"),
        ("intergenic_region", "IGR"),
        ("splice_donor_variant", "Splice_Site"),
    ])
    def test_mapping(self, consequence, expected):
        assert normalize_variant_classification(consequence) == expected

    def test_frameshift_uses_variant_type(self):
        """Frameshifts split on insertion vs deletion."""
        assert normalize_variant_classification("frameshift_variant", "INS") == "Frame_Shift_Ins"
        assert normalize_variant_classification("frameshift_variant", "DEL") == "Frame_Shift_Del"

    def test_unknown_term(self):
        """Unmapped or missing terms fall back to Targeted_Region."""
        assert normalize_variant_classification("mystery_variant") == "Targeted_Region"
        assert normalize_variant_classification("") == "Targeted_Region"


class TestCoordinates:
    """Test strand and assembly notation."""

    def test_strand(self):
        assert normalize_strand("1") == "+"
        assert normalize_strand("-1") == "-"
        assert normalize_strand("") == ""
        assert normalize_strand(None) == ""

    def test_ncbi_build(self):
        assert normalize_ncbi_build("GRCh37") == "37"
        assert normalize_ncbi_build("GRCh38") == "38"
        assert normalize_ncbi_build("hg19") == "hg19"
        assert normalize_ncbi_build(None) == ""
