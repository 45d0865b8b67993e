"""Configuration model for a consolidation run.

ConvertConfig

`fonts_dir` (`Path`)
: Directory receiving one font file per font group. A `temp` scratch
  directory is created inside it during the build and removed afterwards.

`group_fonts` (`bool`)
: Merge compatible fonts into shared groups. When `False`, every source font
  produces its own output font.

`keep_font_names` (`bool`)
: Name groups after a slug of their source font name instead of their index.

`extraction_workers` (`int`)
: Number of threads used to validate source documents. Character codes are
  always assigned sequentially.

`build_workers` (`int`)
: Number of threads used to build font files.
"""

from __future__ import annotations

from pathlib import Path
import tomllib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from fontpool.exceptions import ConfigError


CONFIG_SECTION = "fontpool"


class ConvertConfig(BaseModel):
    """Read-only settings shared by every step of a run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    fonts_dir: Path = Path("fonts")
    group_fonts: bool = True
    keep_font_names: bool = False
    extraction_workers: int = Field(default=1, ge=1)
    build_workers: int = Field(default=1, ge=1)


def _read_config_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}': {exc}") from exc
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid configuration file '{path}': {exc}") from exc
    raise ConfigError(f"Unsupported configuration format '{path.suffix}' for '{path}'.")


def load_config(path: Path, **overrides: Any) -> ConvertConfig:
    """Load a configuration file, applying *overrides* that are not ``None``."""
    payload = _read_config_file(Path(path)) or {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping.")
    section = payload.get(CONFIG_SECTION, payload)
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{CONFIG_SECTION}' in '{path}' must be a mapping.")
    return make_config(section, **overrides)


def make_config(values: dict[str, Any] | None = None, **overrides: Any) -> ConvertConfig:
    """Validate *values* merged with the non-``None`` *overrides*."""
    data = dict(values or {})
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ConvertConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = ["CONFIG_SECTION", "ConvertConfig", "load_config", "make_config"]
