"""
Settings resolution — merge every flag source into BuildSettings once.

Precedence for properties: command line (-P) over abisync.yml.
The result is frozen; nothing re-reads flags during reconciliation.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from abisync.core.config.loader import BuildFile
from abisync.core.models.build import DEFAULT_LIB_SUBDIR, BuildSettings
from abisync.core.services.platforms import resolve_abis, with_legacy_abi
from abisync.core.services.strategy import (
    SUPPORT_ARMEABI_EXTENSION,
    SUPPORT_ARMEABI_PROPERTY,
    parse_bool,
    select_strategy,
)

logger = logging.getLogger(__name__)

TARGET_PLATFORM_PROPERTY = "target-platform"
SPLIT_PER_ABI_PROPERTY = "split-per-abi"


def resolve_settings(
    properties: Mapping[str, str] | None = None,
    extension: Mapping[str, Any] | None = None,
    lib_subdir: str = DEFAULT_LIB_SUBDIR,
) -> BuildSettings:
    """Resolve host properties and extension values into BuildSettings.

    Platforms are validated before the strategy is parsed, so an invalid
    platform is always the error reported first.
    """
    properties = properties or {}
    extension = extension or {}

    abis = resolve_abis(properties.get(TARGET_PLATFORM_PROPERTY))
    split = parse_bool(properties.get(SPLIT_PER_ABI_PROPERTY))
    strategy = select_strategy(
        split,
        properties.get(SUPPORT_ARMEABI_PROPERTY),
        extension.get(SUPPORT_ARMEABI_EXTENSION),
    )

    settings = BuildSettings(
        abis=with_legacy_abi(abis, strategy),
        strategy=strategy,
        split_per_abi=split,
        lib_subdir=lib_subdir,
    )
    logger.info(
        "Resolved ABIs [%s], armeabi strategy %s",
        ", ".join(sorted(settings.abis)), strategy.label,
    )
    return settings


def settings_from_file(
    build_file: BuildFile | None,
    overrides: Mapping[str, str] | None = None,
) -> BuildSettings:
    """Resolve settings from a loaded file plus command-line overrides."""
    properties: dict[str, str] = {}
    extension: dict[str, Any] = {}
    lib_subdir = DEFAULT_LIB_SUBDIR
    if build_file is not None:
        properties.update(build_file.properties)
        extension.update(build_file.ext)
        lib_subdir = build_file.lib_subdir
    properties.update(overrides or {})
    return resolve_settings(properties, extension, lib_subdir)
