"""
Resolve use case — load configuration and resolve BuildSettings.

Shared by every command: config lookup, -P overrides, and the single
resolution step that fixes ABIs and strategy for the whole run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from abisync.core.config.loader import BuildFile, find_config_file, load_build_file
from abisync.core.config.settings import settings_from_file
from abisync.core.errors import AbiSyncError
from abisync.core.models.build import BuildSettings
from abisync.core.services.platforms import abi_filters

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Resolved settings, or the error that prevented resolving them."""

    settings: BuildSettings | None = None
    build_file: BuildFile | None = None
    config_path: Path | None = None
    build_type: str = "release"
    error: str | None = None

    @property
    def abi_filter(self) -> frozenset[str] | None:
        if self.settings is None:
            return None
        return abi_filters(self.settings.abis, self.build_type, self.settings.split_per_abi)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.settings is not None
        abi_filter = self.abi_filter
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "settings": self.settings.to_dict(),
            "build_type": self.build_type,
            "abi_filter": sorted(abi_filter) if abi_filter is not None else None,
        }


def load_optional(config_path: Path | None) -> tuple[Path | None, BuildFile | None]:
    """Load the config file if one is given or can be found.

    A missing abisync.yml is fine: everything can come from -P flags.
    """
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        logger.debug("No config file, using command-line properties only")
        return None, None
    return config_path, load_build_file(config_path)


def resolve_build(
    config_path: Path | None = None,
    properties: Mapping[str, str] | None = None,
    build_type: str = "release",
) -> ResolveResult:
    """Resolve build settings from the config file and overrides."""
    result = ResolveResult(build_type=build_type)
    try:
        result.config_path, result.build_file = load_optional(config_path)
        result.settings = settings_from_file(result.build_file, properties)
    except AbiSyncError as e:
        result.error = str(e)
    return result
