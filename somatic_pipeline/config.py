"""
Configuration management for the somatic staging pipeline.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):
    """Dedup-transform pipeline settings."""

    model_config = SettingsConfigDict(
        env_prefix="SOMATIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directories
    staging_dir: Path = Field(default=Path("./data/staging"))

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Deduplication sizing
    filter_capacity: int = Field(default=5_000_000, gt=0)
    filter_error_rate: float = Field(default=0.03, gt=0, lt=1)
    recency_window: int = Field(default=200, gt=0)

    # What to do with a record missing identity fields
    on_malformed: Literal["skip", "abort"] = "skip"

    # Worker pool
    max_workers: int = Field(default=3, gt=0)
    run_timeout: float = Field(default=90.0, gt=0)  # seconds

    @field_validator("staging_dir", "log_file", mode="before")
    @classmethod
    def ensure_path(cls, v):
        """Convert strings to Path; directories are created by the transformer."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()


# =============================================================================
# Record identity
# =============================================================================

# Columns of an ICGC simple somatic mutation export that identify a variant call.
# Consequence rows (gene/transcript affected, consequence type) and sequencing
# metadata repeat per call and are deliberately left out.
IDENTITY_FIELDS = (
    "icgc_donor_id",
    "icgc_sample_id",
    "chromosome",
    "chromosome_start",
    "chromosome_end",
    "reference_genome_allele",
    "mutated_from_allele",
    "mutated_to_allele",
)

# Name of the staging file written into each staging directory
STAGING_FILE_NAME = "data_mutations_extended.txt"
