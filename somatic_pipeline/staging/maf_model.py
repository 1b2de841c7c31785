"""
MAF ("data_mutations_extended") staging model.

MutationRecord is the normalized shape every admitted input record is
converted to. The transformation model maps each output column, in file
order, to the function that renders it from a MutationRecord.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from operator import attrgetter

FieldMapping = Mapping[str, Callable[["MutationRecord"], str]]


@dataclass(frozen=True)
class MutationRecord:
    """One somatic variant call in MAF terms. All values are strings."""

    hugo_symbol: str = ""
    entrez_gene_id: str = "0"
    center: str = ""
    ncbi_build: str = ""
    chromosome: str = ""
    start_position: str = ""
    end_position: str = ""
    strand: str = ""
    variant_classification: str = ""
    variant_type: str = ""
    reference_allele: str = ""
    tumor_seq_allele1: str = ""
    tumor_seq_allele2: str = ""
    dbsnp_rs: str = ""
    tumor_sample_barcode: str = ""
    matched_norm_sample_barcode: str = ""
    match_norm_seq_allele1: str = ""
    match_norm_seq_allele2: str = ""
    verification_status: str = ""
    validation_status: str = ""
    mutation_status: str = "Somatic"
    sequence_source: str = ""
    validation_method: str = ""
    score: str = ""
    sequencer: str = ""
    t_ref_count: str = ""
    t_alt_count: str = ""
    n_ref_count: str = ""
    n_alt_count: str = ""
    hgvsp_short: str = ""
    transcript_id: str = ""
    protein_position: str = ""
    donor_id: str = ""
    mutation_id: str = ""

    def as_row(self, field_mapping: FieldMapping | None = None) -> dict[str, str]:
        """Render the record as {column: value} in output column order."""
        field_mapping = field_mapping or get_transformation_model()
        return {column: render(self) for column, render in field_mapping.items()}


# Output column -> MutationRecord attribute, in file order
_COLUMN_ATTRIBUTES = (
    ("Hugo_Symbol", "hugo_symbol"),
    ("Entrez_Gene_Id", "entrez_gene_id"),
    ("Center", "center"),
    ("NCBI_Build", "ncbi_build"),
    ("Chromosome", "chromosome"),
    ("Start_Position", "start_position"),
    ("End_Position", "end_position"),
    ("Strand", "strand"),
    ("Variant_Classification", "variant_classification"),
    ("Variant_Type", "variant_type"),
    ("Reference_Allele", "reference_allele"),
    ("Tumor_Seq_Allele1", "tumor_seq_allele1"),
    ("Tumor_Seq_Allele2", "tumor_seq_allele2"),
    ("dbSNP_RS", "dbsnp_rs"),
    ("Tumor_Sample_Barcode", "tumor_sample_barcode"),
    ("Matched_Norm_Sample_Barcode", "matched_norm_sample_barcode"),
    ("Match_Norm_Seq_Allele1", "match_norm_seq_allele1"),
    ("Match_Norm_Seq_Allele2", "match_norm_seq_allele2"),
    ("Verification_Status", "verification_status"),
    ("Validation_Status", "validation_status"),
    ("Mutation_Status", "mutation_status"),
    ("Sequence_Source", "sequence_source"),
    ("Validation_Method", "validation_method"),
    ("Score", "score"),
    ("Sequencer", "sequencer"),
    ("t_ref_count", "t_ref_count"),
    ("t_alt_count", "t_alt_count"),
    ("n_ref_count", "n_ref_count"),
    ("n_alt_count", "n_alt_count"),
    ("HGVSp_Short", "hgvsp_short"),
    ("Transcript_ID", "transcript_id"),
    ("Protein_position", "protein_position"),
    ("Donor_ID", "donor_id"),
    ("Mutation_ID", "mutation_id"),
)


def resolve_column_names() -> list[str]:
    """Ordered output column names of the staging file."""
    return [column for column, _ in _COLUMN_ATTRIBUTES]


def get_transformation_model() -> dict[str, Callable[[MutationRecord], str]]:
    """Ordered mapping of output column -> renderer."""
    return {column: attrgetter(attribute) for column, attribute in _COLUMN_ATTRIBUTES}
