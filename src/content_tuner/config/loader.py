"""
Settings loading: built-in defaults, then a YAML file, then the environment.

Environment variables are named CONTENT_TUNER__{SECTION}__{KEY}, e.g.

    CONTENT_TUNER__TUNER__COOLING_STEPS=100
    CONTENT_TUNER__CORPUS__ROOT=/data/readability
    CONTENT_TUNER__EXTRACTION__COEFFICIENTS=1.5,4.5,2,6.5,2,0.5,0

List fields are written comma-separated; other values containing commas
also become lists.
"""

import os
from pathlib import Path
from typing import Any, get_args, get_origin

import yaml
from pydantic import ValidationError

from content_tuner.config.settings import Settings
from content_tuner.core.exceptions import ConfigurationError

_settings_instance: Settings | None = None

_NULL_WORDS = frozenset({"", "none", "null"})
_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})

# Searched in order when no config file is named explicitly
CONFIG_SEARCH_PATHS = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
    Path.home() / ".content_tuner" / "config.yaml",
)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay override onto a copy of base."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def _parse_scalar(token: str) -> Any:
    """Turn one environment token into None, a bool, a number or a string."""
    lowered = token.lower()
    if lowered in _NULL_WORDS:
        return None
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False

    # "1" and "0" are numbers, never booleans
    for cast in (int, float):
        try:
            return cast(token)
        except ValueError:
            continue
    return token


def _field_annotation(path: list[str]) -> Any:
    """Return the type annotation of the Settings field at path, if there is one."""
    annotation: Any = Settings
    for name in path:
        fields = getattr(annotation, "model_fields", None)
        if not fields or name not in fields:
            return None
        annotation = fields[name].annotation
    return annotation


def _parse_env_value(value: str, annotation: Any = None) -> Any:
    """
    Parse an environment value, guided by the annotation of its target field.

    List fields are always split on commas, so a single case name still
    becomes a one-item list. Items of list[str] and plain str or Path
    fields are kept verbatim: case "001" must not become the number 1.
    """
    if get_origin(annotation) is list:
        parts = [part.strip() for part in value.split(",") if part.strip()]
        if get_args(annotation) == (str,):
            return parts
        return [_parse_scalar(part) for part in parts]
    if annotation in (str, Path):
        return value.strip()
    if "," not in value:
        return _parse_scalar(value.strip())
    return [_parse_scalar(part.strip()) for part in value.split(",") if part.strip()]


def _env_overrides(prefix: str) -> dict[str, Any]:
    """Collect {PREFIX}__SECTION__KEY variables into nested dictionaries."""
    marker = f"{prefix}__"
    overrides: dict[str, Any] = {}

    for name, raw in os.environ.items():
        if not name.startswith(marker):
            continue
        *sections, key = name[len(marker):].lower().split("__")
        if not sections:
            continue

        target = overrides
        for section in sections:
            target = target.setdefault(section, {})
        target[key] = _parse_env_value(raw, _field_annotation([*sections, key]))

    return overrides


def _read_yaml(path: Path) -> dict[str, Any]:
    """
    Read a YAML mapping from disk. An empty file is an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file isn't valid YAML or isn't a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Configuration file is not valid YAML",
            details={"path": str(path), "error": str(e)},
        ) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping",
            details={"path": str(path), "type": type(content).__name__},
        )
    return content


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = "CONTENT_TUNER",
) -> Settings:
    """
    Build validated Settings.

    Environment variables win over the YAML file, which wins over the
    defaults in settings.py.

    Args:
        config_path: YAML file to read; defaults only if None
        env_prefix: Prefix of the environment variables to apply

    Raises:
        FileNotFoundError: If config_path is given but doesn't exist
        ConfigurationError: If the file can't be read or a value is invalid
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data = _read_yaml(Path(config_path))
    data = _merge(data, _env_overrides(env_prefix))

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": e.error_count(), "first": e.errors()[0]["msg"]},
        ) from e


def get_settings(
    config_path: Path | str | None = None,
    reload: bool = False,
) -> Settings:
    """Return the cached Settings, loading them on first use or on reload."""
    global _settings_instance

    if _settings_instance is None or reload:
        _settings_instance = load_config(config_path)
    return _settings_instance


def reset_settings() -> None:
    global _settings_instance
    _settings_instance = None


def get_default_config_path() -> Path | None:
    """Return the first existing file in CONFIG_SEARCH_PATHS, if any."""
    for path in CONFIG_SEARCH_PATHS:
        if path.exists():
            return path
    return None
