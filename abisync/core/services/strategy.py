"""
Strategy selector — collapse the strategy flags into one Strategy.

Two flag sources feed it:
    support-armeabi      command-line property, developer convenience
    ext.supportArmeabi   project extension, production configuration

The extension value wins when both are present. Split-per-ABI builds
never reconcile.
"""

from __future__ import annotations

import logging

from abisync.core.errors import InvalidStrategyError
from abisync.core.models.abi import Strategy

logger = logging.getLogger(__name__)

SUPPORT_ARMEABI_PROPERTY = "support-armeabi"
SUPPORT_ARMEABI_EXTENSION = "supportArmeabi"

_TRUE_WORDS = frozenset({"true", "y"})


def parse_bool(value: str | bool | None) -> bool:
    """Parse a boolean property the way the host build does.

    After trimming, "true" and "y" (any case) and "1" are true.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip()
    return text == "1" or text.lower() in _TRUE_WORDS


def _parse_int(value: str | int, source: str) -> int:
    # int() would truncate floats and accept bools
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise InvalidStrategyError(value, source)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidStrategyError(value, source) from e


def _present(value: str | int | None) -> bool:
    # unset and blank are the same thing
    return value is not None and not (isinstance(value, str) and not value.strip())


def select_strategy(
    split_per_abi: bool,
    support_armeabi: str | int | None = None,
    extension: str | int | None = None,
) -> Strategy:
    """Pick the reconciliation strategy for a build.

    Args:
        split_per_abi: Whether one artifact is produced per ABI.
        support_armeabi: The ``support-armeabi`` property, if set.
        extension: The ``supportArmeabi`` project extension, if set.

    Returns:
        The active Strategy. Out-of-range integers collapse to NONE.

    Raises:
        InvalidStrategyError: If a present flag is not an integer.
    """
    if split_per_abi:
        return Strategy.NONE

    result = Strategy.NONE.value
    if _present(support_armeabi):
        result = _parse_int(support_armeabi, SUPPORT_ARMEABI_PROPERTY)
    if _present(extension):
        result = _parse_int(extension, f"ext.{SUPPORT_ARMEABI_EXTENSION}")

    if result < Strategy.NONE or result > Strategy.OVERRIDE:
        logger.warning("armeabi strategy %d out of range, using none", result)
        return Strategy.NONE
    return Strategy(result)
