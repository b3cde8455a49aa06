"""Configuration models for pagesift."""

from .config import (
    FINGERPRINT_ALGORITHMS,
    SIMILARITY_ALGORITHMS,
    Config,
    ExtractionSettings,
    FingerprintSettings,
    LoggingConfig,
    SimilaritySettings,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "SimilaritySettings",
    "FingerprintSettings",
    "LoggingConfig",
    "SIMILARITY_ALGORITHMS",
    "FINGERPRINT_ALGORITHMS",
]
