"""
Config check use case — validate abisync.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from abisync.core.config.loader import BuildFile, find_config_file, load_build_file
from abisync.core.config.settings import settings_from_file
from abisync.core.errors import AbiSyncError
from abisync.core.models.build import BuildSettings


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    build_file: BuildFile | None = None
    settings: BuildSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.to_dict() if self.settings else None,
            "variant_count": len(self.build_file.variants) if self.build_file else 0,
        }


def check_config(
    config_path: Path | None = None,
    properties: Mapping[str, str] | None = None,
) -> ConfigCheckResult:
    """Validate build configuration and report issues.

    Args:
        config_path: Optional explicit path to abisync.yml.
        properties: Command-line property overrides.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No abisync.yml found.")
        return result
    result.config_path = config_path

    try:
        build_file = load_build_file(config_path)
        result.build_file = build_file
        result.settings = settings_from_file(build_file, properties)
    except AbiSyncError as e:
        result.errors.append(str(e))
        return result

    if not build_file.variants:
        result.warnings.append("No variants declared. Use --build-dir to discover them.")

    names = [v.name for v in build_file.variants]
    dupes = {n for n in names if names.count(n) > 1}
    if dupes:
        result.errors.append(f"Duplicate variant names: {', '.join(sorted(dupes))}")

    for ref in build_file.variant_refs():
        if ref.task_output is None:
            result.warnings.append(f"Variant '{ref.name}' declares no task_output.")
        elif not ref.task_output.exists():
            result.warnings.append(
                f"Variant '{ref.name}' task output does not exist: {ref.task_output}"
            )

    if result.settings.split_per_abi and "supportArmeabi" in build_file.ext:
        result.warnings.append("split-per-abi is enabled, ext.supportArmeabi is ignored.")

    result.valid = len(result.errors) == 0
    return result
