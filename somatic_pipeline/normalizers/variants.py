"""
Variant annotation normalization.

Maps ICGC vocabulary (Sequence Ontology consequence terms, mutation types,
strand and assembly notation) onto MAF conventions.
"""

from typing import Optional


# Mapping from Sequence Ontology consequence terms to MAF Variant_Classification
VARIANT_CLASSIFICATION_MAPPING = {
    # Coding
    "missense_variant": "Missense_Mutation",
    "synonymous_variant": "Silent",
    "stop_retained_variant": "Silent",
    "stop_gained": "Nonsense_Mutation",
    "stop_lost": "Nonstop_Mutation",
    "start_lost": "Translation_Start_Site",
    "initiator_codon_variant": "Translation_Start_Site",

    # Indels (frameshift is resolved by variant type)
    "inframe_deletion": "In_Frame_Del",
    "disruptive_inframe_deletion": "In_Frame_Del",
    "inframe_insertion": "In_Frame_Ins",
    "disruptive_inframe_insertion": "In_Frame_Ins",

    # Splicing
    "splice_acceptor_variant": "Splice_Site",
    "splice_donor_variant": "Splice_Site",
    "splice_region_variant": "Splice_Site",

    # UTRs and flanks
    "5_prime_utr_variant": "5'UTR",
    "5_prime_utr_premature_start_codon_gain_variant": "5'UTR",
    "3_prime_utr_variant": "3'UTR",
    "upstream_gene_variant": "5'Flank",
    "downstream_gene_variant": "3'Flank",

    # Non-coding
    "intron_variant": "Intron",
    "intragenic_variant": "Intron",
    "intergenic_region": "IGR",
    "exon_variant": "RNA",
    "non_coding_exon_variant": "RNA",
    "nc_transcript_variant": "RNA",
}

DEFAULT_VARIANT_CLASSIFICATION = "Targeted_Region"

# ICGC mutation_type values
SINGLE_BASE_SUBSTITUTION = "single base substitution"
MULTIPLE_BASE_SUBSTITUTION = "multiple base substitution (>=2bp and <=200bp)"
INSERTION = "insertion of <=200bp"
DELETION = "deletion of <=200bp"

# Number of substituted bases -> MAF Variant_Type
_SUBSTITUTION_TYPES = {1: "SNP", 2: "DNP", 3: "TNP"}


def normalize_variant_type(mutation_type: Optional[str], tumor_allele: Optional[str] = None) -> str:
    """
    Map an ICGC mutation_type to a MAF Variant_Type.

    Multiple base substitutions are split into DNP/TNP/ONP by the length of
    the tumour allele.
    """
    if not mutation_type:
        return ""

    mutation_type = mutation_type.strip().lower()
    if mutation_type == SINGLE_BASE_SUBSTITUTION:
        return "SNP"
    if mutation_type == INSERTION:
        return "INS"
    if mutation_type == DELETION:
        return "DEL"
    if mutation_type == MULTIPLE_BASE_SUBSTITUTION:
        length = len((tumor_allele or "").strip())
        return _SUBSTITUTION_TYPES.get(length, "ONP")
    return ""


def normalize_variant_classification(consequence_type: Optional[str], variant_type: str = "") -> str:
    """
    Map an SO consequence term to a MAF Variant_Classification.

    Args:
        consequence_type: Raw consequence term (e.g., "missense_variant")
        variant_type: MAF Variant_Type, needed to split frameshifts

    Returns:
        MAF Variant_Classification
    """
    if not consequence_type:
        return DEFAULT_VARIANT_CLASSIFICATION

    term = consequence_type.strip().lower()
    if term == "frameshift_variant":
        return "Frame_Shift_Ins" if variant_type == "INS" else "Frame_Shift_Del"

    return VARIANT_CLASSIFICATION_MAPPING.get(term, DEFAULT_VARIANT_CLASSIFICATION)


def normalize_strand(strand: Optional[str]) -> str:
    """ICGC strand ("1" / "-1") to MAF notation ("+" / "-")."""
    strand = (strand or "").strip()
    if strand == "1":
        return "+"
    if strand == "-1":
        return "-"
    return ""


def normalize_ncbi_build(assembly_version: Optional[str]) -> str:
    """'GRCh37' -> '37'. Anything else is passed through stripped."""
    assembly_version = (assembly_version or "").strip()
    if assembly_version.lower().startswith("grch"):
        return assembly_version[4:]
    return assembly_version
