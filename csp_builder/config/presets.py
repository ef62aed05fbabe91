"""Named starting policies loaded from YAML."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from csp_builder.config.loader import get_settings
from csp_builder.directives import Directive
from csp_builder.errors import InvalidPresetError, UnknownPresetError
from csp_builder.policy import Policy

logger = structlog.get_logger()

# Cache loaded presets, keyed by file path
_presets: dict[str, dict[str, PresetDefinition]] = {}


class PresetDefinition(BaseModel):
    """One preset entry from the presets file."""

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    directives: dict[str, list[str] | str | bool] = Field(default_factory=dict)

    @field_validator("directives")
    @classmethod
    def _check_directives(cls, value: dict[str, list[str] | str | bool]) -> dict[str, list[str] | str | bool]:
        for name, values in value.items():
            directive = Directive.lookup(name)
            if not directive.takes_values:
                if not isinstance(values, bool):
                    raise ValueError(f"{directive} is a meta directive and takes true/false")
            elif isinstance(values, bool):
                raise ValueError(f"{directive} needs a list of values")
            elif not values:
                raise ValueError(f"{directive} needs at least one value")
        return value

    def build(self) -> Policy:
        return Policy.from_mapping(self.directives)


class PresetFile(BaseModel):
    presets: dict[str, PresetDefinition] = Field(default_factory=dict)


def _resolve_path(path: str | Path | None) -> Path:
    if path is None:
        path = get_settings().presets_file
    return Path(path)


def load_presets(path: str | Path | None = None) -> dict[str, PresetDefinition]:
    """Load presets from YAML, caching after first load.

    A missing file yields no presets. Malformed content raises
    ``InvalidPresetError``.
    """
    resolved = _resolve_path(path)
    key = str(resolved)
    if key in _presets:
        return _presets[key]
    if not resolved.exists():
        logger.error("presets_file_not_found", path=key)
        _presets[key] = {}
        return _presets[key]
    try:
        with open(resolved) as f:
            raw = yaml.safe_load(f) or {}
        presets = PresetFile.model_validate(raw).presets
    except (yaml.YAMLError, ValidationError) as exc:
        logger.error("presets_file_invalid", path=key)
        raise InvalidPresetError(f"invalid presets file {key}: {exc}") from exc
    _presets[key] = presets
    return _presets[key]


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    _presets.clear()


def preset_names(path: str | Path | None = None) -> list[str]:
    return list(load_presets(path))


def build_preset(name: str | None = None, path: str | Path | None = None) -> Policy:
    """Return a fresh, uncompiled policy seeded from a preset.

    Falls back to the configured default preset when no name is given.
    """
    if name is None:
        name = get_settings().default_preset
    presets = load_presets(path)
    if name not in presets:
        raise UnknownPresetError(f"unknown preset {name!r}, expected one of {sorted(presets)}")
    policy = presets[name].build()
    logger.debug("preset_built", preset=name, directives=len(policy.directives))
    return policy
