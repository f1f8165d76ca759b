"""
Configuration module for content-tuner.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from content_tuner.config.settings import (
    Settings,
    ExtractionSettings,
    CorpusSettings,
    TunerSettings,
    LoggingSettings,
    BASELINE_COEFFICIENTS,
    DEFAULT_CORPUS_CASES,
)
from content_tuner.config.loader import (
    load_config,
    get_settings,
    reset_settings,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "ExtractionSettings",
    "CorpusSettings",
    "TunerSettings",
    "LoggingSettings",
    "BASELINE_COEFFICIENTS",
    "DEFAULT_CORPUS_CASES",
    "load_config",
    "get_settings",
    "reset_settings",
    "get_default_config_path",
]
