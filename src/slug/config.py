"""
Pydantic configuration schemas for slug destination sets.

Design principle: every field is optional. An empty document builds the
console defaults; a destination needs nothing but its threshold.

Usage:
    config = SetConfig.from_yaml("logging.yaml")
    log = build_set(config)

Example:
    gate: info
    color: false
    destinations:
      - threshold: warning
        output: stderr
      - threshold: error
        output: logs/errors.log
        templates:
          error: {format: "%t ERROR %s", prefix: ""}
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from slug.core import DestinationSet, new_default_set
from slug.destinations import DEFAULT_TIME_FORMAT, Destination
from slug.errors import ConfigurationError
from slug.levels import NO_LEVEL, TIERS, level_name, resolve_level

CONSOLE_OUTPUTS = ("stdout", "stderr")


def _level(value: int | str) -> int:
    try:
        return resolve_level(value)
    except (TypeError, ValueError) as e:
        raise ValueError(str(e)) from e


# ═══════════════════════════════════════════════════════════════════
#  Schemas
# ═══════════════════════════════════════════════════════════════════

class TemplateConfig(BaseModel):
    format: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None


class DestinationConfig(BaseModel):
    threshold: int | str = NO_LEVEL
    output: str = "stdout"                     # stdout, stderr or a file path
    color: Optional[bool] = None               # falls back to SetConfig.color
    time_format: Optional[str] = None
    templates: Optional[dict[str, TemplateConfig]] = None

    @field_validator("threshold")
    @classmethod
    def validate_threshold(cls, v: int | str) -> int:
        return _level(v)

    @field_validator("templates")
    @classmethod
    def validate_template_levels(cls, v):
        if v:
            for name in v:
                if _level(name) not in TIERS:
                    raise ValueError(
                        f"No template tier '{name}'. "
                        f"Valid tiers: {', '.join(level_name(t).lower() for t in TIERS)}"
                    )
        return v

    @property
    def is_file(self) -> bool:
        return self.output not in CONSOLE_OUTPUTS


class SetConfig(BaseModel):
    gate: int | str = NO_LEVEL
    color: bool = True
    time_format: str = DEFAULT_TIME_FORMAT
    destinations: Optional[list[DestinationConfig]] = None

    @field_validator("gate")
    @classmethod
    def validate_gate(cls, v: int | str) -> int:
        return _level(v)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SetConfig":
        """Load and validate from a YAML file."""
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"cannot read config {path}: {e}", path=str(path)) from e
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "SetConfig":
        """Load and validate from a YAML string."""
        try:
            data = yaml.safe_load(yaml_string) or {}
            return cls.model_validate(data)
        except (yaml.YAMLError, ValidationError) as e:
            raise ConfigurationError(f"invalid slug config: {e}") from e


# ═══════════════════════════════════════════════════════════════════
#  Builders
# ═══════════════════════════════════════════════════════════════════

def build_destination(cfg: DestinationConfig, defaults: SetConfig | None = None) -> Destination:
    """
    Build one destination. File outputs are opened for append here, so an
    unwritable path raises ConfigurationError at setup time.
    """
    defaults = defaults or SetConfig()
    color = cfg.color if cfg.color is not None else defaults.color
    if cfg.is_file:
        color = cfg.color if cfg.color is not None else False

    dest = Destination(
        threshold=cfg.threshold,
        output="stdout",
        color=color,
        time_format=cfg.time_format or defaults.time_format,
    )
    try:
        for level, tmpl in (cfg.templates or {}).items():
            dest.set_template(level, format=tmpl.format, prefix=tmpl.prefix, suffix=tmpl.suffix)
    except ValueError as e:
        raise ConfigurationError(f"invalid template: {e}") from e

    if cfg.is_file:
        dest.set_output_file(cfg.output)
    else:
        dest.set_output(cfg.output)
    return dest


def build_set(config: SetConfig | dict | None = None) -> DestinationSet:
    """Build a DestinationSet. No destinations configured → console defaults."""
    if config is None:
        config = SetConfig()
    elif isinstance(config, dict):
        try:
            config = SetConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(f"invalid slug config: {e}") from e

    if not config.destinations:
        log_set = new_default_set(color=config.color)
        for dest in log_set:
            dest.time_format = config.time_format
    else:
        log_set = DestinationSet()
        try:
            for cfg in config.destinations:
                log_set.add(build_destination(cfg, config))
        except ConfigurationError:
            log_set.close()
            raise

    log_set.gate = config.gate
    return log_set


def load_set(path: str | Path) -> DestinationSet:
    """Read a YAML config file and build its set."""
    return build_set(SetConfig.from_yaml(path))
