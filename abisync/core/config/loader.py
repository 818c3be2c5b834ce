"""
Configuration loader — reads abisync.yml into a BuildFile model.

The file mirrors what a host build would provide:

    properties:              # command-line style properties
      target-platform: android-arm,android-arm64
      split-per-abi: false
      support-armeabi: 1
    ext:                     # project extension values
      supportArmeabi: 2
    lib_subdir: 0/lib
    variants:
      - name: release
        task_output: build/intermediates/transforms/stripDebugSymbol/release

Relative ``task_output`` paths are resolved against the file's directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from abisync.core.errors import ConfigError
from abisync.core.models.build import DEFAULT_LIB_SUBDIR, VariantRef

logger = logging.getLogger(__name__)

# Default config filename
BUILD_CONFIG_FILE = "abisync.yml"


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class VariantDecl(BaseModel):
    """A variant declared in the configuration file."""

    name: str
    task_output: str | None = None


class BuildFile(BaseModel):
    """Raw contents of abisync.yml, validated but not yet resolved."""

    properties: dict[str, str] = Field(default_factory=dict)
    ext: dict[str, Any] = Field(default_factory=dict)
    lib_subdir: str = DEFAULT_LIB_SUBDIR
    variants: list[VariantDecl] = Field(default_factory=list)

    # Set by the loader, not read from YAML
    base_dir: Path = Field(default_factory=Path.cwd, exclude=True)

    @field_validator("properties", mode="before")
    @classmethod
    def _coerce_properties(cls, value: Any) -> Any:
        # Host properties are always strings
        if isinstance(value, dict):
            return {str(k): _stringify(v) for k, v in value.items() if v is not None}
        return value

    def variant_refs(self) -> list[VariantRef]:
        """Declared variants with their task outputs resolved to paths."""
        refs = []
        for decl in self.variants:
            output = None
            if decl.task_output:
                output = Path(decl.task_output)
                if not output.is_absolute():
                    output = self.base_dir / output
            refs.append(VariantRef(name=decl.name, task_output=output))
        return refs


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest abisync.yml in ``start_dir`` (default: cwd) or its parents."""
    start = (start_dir or Path.cwd()).resolve()
    return next(
        (d / BUILD_CONFIG_FILE for d in (start, *start.parents) if (d / BUILD_CONFIG_FILE).is_file()),
        None,
    )


def load_build_file(path: Path) -> BuildFile:
    """Load and validate a build configuration file.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        build_file = BuildFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid build configuration in {path}: {e}") from e

    build_file.base_dir = path.parent.resolve()
    logger.info("Loaded %s with %d declared variants", path.name, len(build_file.variants))
    return build_file


def parse_properties(pairs: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Parse ``key=value`` command-line properties.

    Raises:
        ConfigError: If a pair has no ``=`` or an empty key.
    """
    properties: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Invalid property '{pair}', expected key=value")
        properties[key.strip()] = value
    return properties
