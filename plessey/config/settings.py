"""
Decoder settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from plessey.barcode.patterns import (
    AVG_CODE_ERROR,
    MAX_CORRECTION_FACTOR,
    MIN_CODE_LENGTH,
    NORMALIZED_AVG_CODE_ERROR,
    NORMALIZED_SINGLE_CODE_ERROR,
    SINGLE_CODE_ERROR,
)


class DecoderSettings(BaseSettings):
    """Decoder configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLESSEY_",
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Matching
    normalize_bar_space_width: bool = Field(
        False, description="Correct the width difference between bars and spaces"
    )
    single_code_error: float | None = Field(
        None, gt=0, description="Per-element error ceiling (default depends on normalization)"
    )
    avg_code_error: float | None = Field(
        None, gt=0, description="Accepted average error ceiling (default depends on normalization)"
    )
    max_correction_factor: float = Field(
        MAX_CORRECTION_FACTOR, gt=1, description="Bound for the width correction and its inverse"
    )

    # Acceptance
    min_code_length: int = Field(
        MIN_CODE_LENGTH, ge=1, description="Minimum number of decoded symbols"
    )

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def effective_single_code_error(self) -> float:
        """Per-element error ceiling for the configured normalization mode."""
        if self.single_code_error is not None:
            return self.single_code_error
        if self.normalize_bar_space_width:
            return NORMALIZED_SINGLE_CODE_ERROR
        return SINGLE_CODE_ERROR

    @property
    def effective_avg_code_error(self) -> float:
        """Accepted error ceiling for the configured normalization mode."""
        if self.avg_code_error is not None:
            return self.avg_code_error
        if self.normalize_bar_space_width:
            return NORMALIZED_AVG_CODE_ERROR
        return AVG_CODE_ERROR


@lru_cache
def get_settings() -> DecoderSettings:
    """Get cached decoder settings."""
    return DecoderSettings()
