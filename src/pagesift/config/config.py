"""
Configuration management for pagesift using Pydantic.

Settings are plain values handed to the extractor and the similarity engine at
construction time. Nothing here is cached at module level.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

SIMILARITY_ALGORITHMS = ("cosine", "jaccard", "levenshtein", "fingerprint")
FINGERPRINT_ALGORITHMS = ("simhash", "minhash", "shingle")

DEFAULT_STOP_WORDS = [
    "the",
    "is",
    "at",
    "which",
    "on",
    "and",
    "or",
    "but",
    "in",
    "with",
    "to",
    "for",
    "of",
    "as",
    "by",
]

# --- Nested Configuration Models ---


class ExtractionSettings(BaseModel):
    """Configuration for heuristic HTML extraction."""

    max_title_length: int = Field(default=200, description="Longest title candidate accepted, in characters.")
    unknown_title: str = Field(default="Unknown Title", description="Title used when no candidate qualifies.")
    min_content_length: int = Field(
        default=50, description="Normalized text shorter than this triggers the next fallback attempt."
    )
    min_viable_length: int = Field(default=10, description="Final text shorter than this becomes the placeholder.")
    placeholder_content: str = Field(
        default="Content extraction failed: no readable text was found in this document.",
        description="Content reported when every extraction strategy fails.",
    )
    max_highlights: int = Field(default=20, description="Maximum number of highlights per result.")
    max_list_items: int = Field(
        default=10, description="List items are harvested only when the region holds at most this many."
    )
    max_region_candidates: int = Field(
        default=200, description="Upper bound on elements examined per content-region selector."
    )
    max_highlight_candidates: int = Field(
        default=200, description="Upper bound on elements examined per highlight pass."
    )

    @field_validator("max_title_length", "max_highlights", "max_region_candidates", "max_highlight_candidates")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @field_validator("min_content_length", "min_viable_length", "max_list_items")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator("unknown_title", "placeholder_content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("sentinel text must not be blank")
        return v


class SimilaritySettings(BaseModel):
    """Configuration for similarity scoring and duplicate clustering."""

    default_algorithm: str = Field(default="cosine", description="Algorithm used when none is given.")
    default_threshold: float = Field(default=0.8, description="Duplicate threshold used when none is given.")
    precision: int = Field(default=4, description="Decimal places scores are rounded to.")
    keyword_limit: int = Field(default=10, description="Keywords kept per text by the fingerprint proxy.")
    keyword_min_length: int = Field(default=3, description="Shortest token eligible as a keyword.")
    stop_words: List[str] = Field(default_factory=lambda: list(DEFAULT_STOP_WORDS))

    @field_validator("default_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SIMILARITY_ALGORITHMS:
            raise ValueError(f"default_algorithm must be one of {list(SIMILARITY_ALGORITHMS)}")
        return v

    @field_validator("default_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Ensure threshold is in valid range."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("default_threshold must be between 0.0 and 1.0")
        return v

    @field_validator("keyword_limit", "keyword_min_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v

    @field_validator("precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        if v < 0:
            raise ValueError("precision must not be negative")
        return v


class FingerprintSettings(BaseModel):
    """Configuration for content fingerprints."""

    default_algorithm: str = Field(default="simhash", description="Algorithm used when none is given.")
    minhash_num_perm: int = Field(default=128, description="Number of MinHash permutations (bands).")
    minhash_seed: int = Field(default=1, description="Seed for the MinHash permutations.")
    minhash_digest_width: int = Field(default=32, description="Hex characters kept from the MinHash signature.")
    shingle_size: int = Field(default=3, description="Character n-gram width for shingle fingerprints.")

    @field_validator("default_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in FINGERPRINT_ALGORITHMS:
            raise ValueError(f"default_algorithm must be one of {list(FINGERPRINT_ALGORITHMS)}")
        return v

    @field_validator("minhash_num_perm", "minhash_digest_width", "shingle_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be a positive integer")
        return v


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: Optional[str] = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console output as JSON.")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "pagesift"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    similarity: SimilaritySettings = Field(default_factory=SimilaritySettings)
    fingerprint: FingerprintSettings = Field(default_factory=FingerprintSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="PAGESIFT_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)
