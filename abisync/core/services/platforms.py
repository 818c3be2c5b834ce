"""
Platform resolver — target platforms to ABI directory names.

Pure functions over the constant PLATFORM_ARCH_MAP. Validation is
eager: an unknown platform fails before any output tree is touched.
"""

from __future__ import annotations

import logging

from abisync.core.errors import InvalidPlatformError
from abisync.core.models.abi import (
    ARCH_X86,
    DEFAULT_PLATFORMS,
    LEGACY_ABI,
    PLATFORM_ARCH_MAP,
    PREDECESSOR_ABI,
    AbiSet,
    Strategy,
)

logger = logging.getLogger(__name__)

# Build types whose filter gets extra ABIs on top of the resolved set
_BUILD_TYPE_EXTRAS: dict[str, frozenset[str]] = {
    "release": frozenset(),
    "profile": frozenset(),
    "debug": frozenset({ARCH_X86}),
}


def resolve_platforms(target_platform: str | None) -> frozenset[str]:
    """Validate a comma-separated platform list.

    Args:
        target_platform: Value of the ``target-platform`` property,
            or None when it is not set.

    Returns:
        The set of platform identifiers (DEFAULT_PLATFORMS when unset).

    Raises:
        InvalidPlatformError: On the first token not in PLATFORM_ARCH_MAP.
    """
    if target_platform is None:
        return DEFAULT_PLATFORMS

    platforms = []
    for token in target_platform.split(","):
        if token not in PLATFORM_ARCH_MAP:
            raise InvalidPlatformError(token)
        platforms.append(token)
    return frozenset(platforms)


def resolve_abis(target_platform: str | None) -> AbiSet:
    """Map the requested platforms to their ABI directory names."""
    abis = frozenset(PLATFORM_ARCH_MAP[p] for p in resolve_platforms(target_platform))
    logger.debug("Resolved ABIs: %s", ", ".join(sorted(abis)))
    return abis


def with_legacy_abi(abis: AbiSet, strategy: Strategy) -> AbiSet:
    """Add the legacy ABI when reconciliation will populate it.

    armeabi is only ever added when armeabi-v7a is built and a
    strategy is active.
    """
    if strategy is Strategy.NONE or PREDECESSOR_ABI not in abis:
        return abis
    return abis | {LEGACY_ABI}


def abi_filters(abis: AbiSet, build_type: str, split_per_abi: bool = False) -> AbiSet | None:
    """ABI filter for one build type.

    Returns None when split per ABI is enabled: every ABI ships as its
    own artifact and no filter applies.
    """
    if split_per_abi:
        return None
    extras = _BUILD_TYPE_EXTRAS.get(build_type, frozenset())
    return abis | extras
