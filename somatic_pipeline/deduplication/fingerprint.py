"""
Record fingerprints.

A fingerprint is the identity of a variant call: who (donor, sample), where
(chromosome, start, end) and what (reference and tumour alleles). ICGC exports
repeat a call once per affected gene/transcript, so every other column is
ignored when deciding whether two rows describe the same call.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from somatic_pipeline.config import IDENTITY_FIELDS
from somatic_pipeline.errors import MalformedRecord

# Unit separator; cannot occur in a tab-delimited field value
KEY_SEPARATOR = "\x1f"


@dataclass(frozen=True, order=True)
class Fingerprint:
    """Identity field values of one record, in IDENTITY_FIELDS order."""

    values: tuple[str, ...]

    @property
    def key(self) -> str:
        """Deterministic string form, used as the membership filter key."""
        return KEY_SEPARATOR.join(self.values)

    def __str__(self) -> str:
        return ":".join(self.values)


def fingerprint_record(
    record: Mapping[str, str | None],
    fields: Sequence[str] = IDENTITY_FIELDS,
    line_number: int | None = None,
) -> Fingerprint:
    """
    Derive the fingerprint of a raw record.

    Args:
        record: Raw record (column name -> value)
        fields: Identity columns, in key order
        line_number: Source line, only used in the error message

    Returns:
        Fingerprint of the record

    Raises:
        MalformedRecord: if any identity field is missing or blank
    """
    values = []
    missing = []
    for name in fields:
        value = record.get(name)
        value = value.strip() if value is not None else ""
        if not value:
            missing.append(name)
        values.append(value)

    if missing:
        raise MalformedRecord(missing, line_number=line_number)

    return Fingerprint(tuple(values))
