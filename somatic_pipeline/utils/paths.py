"""Filesystem checks shared by the transformers and the CLI."""

import os
from pathlib import Path


def is_valid_input_file_path(path: Path | str | None) -> bool:
    """Return True if path names an existing, readable regular file."""
    if path is None:
        return False
    path = Path(path)
    return path.is_file() and os.access(path, os.R_OK)


def staging_subdir_name(input_path: Path) -> str:
    """
    Name of the per-input staging directory.

    Strips compression and data suffixes, e.g.
    ``simple_somatic_mutation.open.EOPC-DE.tsv.gz`` -> ``simple_somatic_mutation.open.EOPC-DE``.
    """
    name = Path(input_path).name
    for suffix in (".gz", ".tsv", ".txt"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    return name or "staging"
