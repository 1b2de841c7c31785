# SPDX-License-Identifier: MIT
"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from somatic_pipeline.config import IDENTITY_FIELDS, PipelineSettings, get_settings


class TestPipelineSettings:
    """Test pipeline settings."""

    def test_defaults(self, monkeypatch):
        """Defaults mirror a 5M-record filter at 3% and a 200-record window."""
        for name in ("SOMATIC_FILTER_CAPACITY", "SOMATIC_RECENCY_WINDOW", "SOMATIC_ON_MALFORMED"):
            monkeypatch.delenv(name, raising=False)
        pipeline = PipelineSettings()
        assert pipeline.filter_capacity == 5_000_000
        assert pipeline.filter_error_rate == 0.03
        assert pipeline.recency_window == 200
        assert pipeline.on_malformed == "skip"
        assert pipeline.max_workers == 3

    def test_environment_override(self, monkeypatch):
        """Settings are configurable via SOMATIC_ environment variables."""
        monkeypatch.setenv("SOMATIC_RECENCY_WINDOW", "50")
        monkeypatch.setenv("SOMATIC_STAGING_DIR", "/tmp/staging")
        monkeypatch.setenv("SOMATIC_ON_MALFORMED", "abort")
        pipeline = PipelineSettings()
        assert pipeline.recency_window == 50
        assert pipeline.staging_dir == Path("/tmp/staging")
        assert pipeline.on_malformed == "abort"

    @pytest.mark.parametrize("name,value", [
        ("SOMATIC_FILTER_ERROR_RATE", "1.5"),
        ("SOMATIC_FILTER_CAPACITY", "0"),
        ("SOMATIC_ON_MALFORMED", "ignore"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            PipelineSettings()

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_identity_fields(self):
        """Identity covers donor, sample, position and alleles."""
        assert "icgc_donor_id" in IDENTITY_FIELDS
        assert "chromosome_start" in IDENTITY_FIELDS
        assert "consequence_type" not in IDENTITY_FIELDS
