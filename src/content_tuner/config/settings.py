"""
Pydantic settings models for content-tuner.

All configuration is defined here with defaults matching the
best-performing coefficients found so far.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# Scores best against the default corpus. Order matches Coefficients.
BASELINE_COEFFICIENTS: tuple[float, ...] = (1.5, 4.5, 2.0, 6.5, 2.0, 0.5, 0.0)

# Cases of the readability test corpus used by default. "002" is left out:
# it has so many candidate tags that clustering takes far too long.
DEFAULT_CORPUS_CASES: tuple[str, ...] = (
    "basic-tags-cleaning",
    "001",
    "daringfireball-1",
    "buzzfeed-1",
    "clean-links",
    "ehow-1",
    "embedded-videos",
    "heise",
    "herald-sun-1",
)


class ExtractionSettings(BaseModel):
    """Content extraction pipeline configuration."""

    coefficients: list[float] = Field(
        default_factory=lambda: list(BASELINE_COEFFICIENTS),
        description=(
            "Coefficient vector: link density, paragraph tag, length, "
            "different depth, different tag, same tag, stride"
        ),
    )

    @field_validator("coefficients")
    @classmethod
    def check_length(cls, v: list[float]) -> list[float]:
        """Require exactly one value per pipeline coefficient."""
        if len(v) != len(BASELINE_COEFFICIENTS):
            raise ValueError(
                f"expected {len(BASELINE_COEFFICIENTS)} coefficients, got {len(v)}")
        return v


class CorpusSettings(BaseModel):
    """Test corpus location."""

    root: Path = Field(
        default=Path("data/readability_test_data"),
        description="Directory holding one sub-directory per test case",
    )
    cases: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORPUS_CASES),
        min_length=1,
        description="Case directory names to load, in order",
    )

    @field_validator("root", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        return Path(v) if isinstance(v, str) else v


class TunerSettings(BaseModel):
    """Simulated annealing configuration for coefficient tuning."""

    step: float = Field(
        default=0.5,
        gt=0.0,
        description="Amount a single coefficient moves per transition",
    )
    initial_temperature: float = Field(
        default=5000.0,
        gt=0.0,
        description="Starting annealing temperature",
    )
    cooling_steps: int = Field(
        default=5000,
        ge=1,
        description="Number of temperature reductions",
    )
    cooling_fraction: float = Field(
        default=0.95,
        gt=0.0,
        lt=1.0,
        description="Factor the temperature is multiplied by each cooling step",
    )
    steps_per_temp: int = Field(
        default=1000,
        ge=1,
        description="Maximum transitions tried at each temperature",
    )
    boltzmann_constant: float = Field(
        default=1.3806485279e-23,
        gt=0.0,
        description="Scales the temperature in the acceptance probability",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed. None seeds from system entropy.",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format string",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log timestamps",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to log file. None means console only.",
    )
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum log file size before rotation",
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep",
    )
    log_to_console: bool = Field(
        default=True,
        description="Whether to output logs to console",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseModel):
    """
    Root configuration model containing all subsystem settings.

    Settings are loaded from YAML with environment variable overrides.
    """

    extraction: ExtractionSettings = Field(
        default_factory=ExtractionSettings,
        description="Extraction pipeline settings",
    )
    corpus: CorpusSettings = Field(
        default_factory=CorpusSettings,
        description="Test corpus settings",
    )
    tuner: TunerSettings = Field(
        default_factory=TunerSettings,
        description="Coefficient tuner settings",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }
