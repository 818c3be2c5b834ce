"""
ABI model — platforms, ABI directories, and reconciliation strategies.

Platforms are what the build is asked to compile (``--Ptarget-platform``).
ABIs are the directory names native libraries land in. Every platform
maps to exactly one ABI; the legacy ``armeabi`` ABI is never compiled,
only populated from ``armeabi-v7a`` by reconciliation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

# ── Platforms (values accepted by target-platform) ──────────────

PLATFORM_ARM32 = "android-arm"
PLATFORM_ARM64 = "android-arm64"
PLATFORM_X86 = "android-x86"
PLATFORM_X86_64 = "android-x64"

# ── ABI directory names ─────────────────────────────────────────

ARCH_ARMV6 = "armeabi"
ARCH_ARM32 = "armeabi-v7a"
ARCH_ARM64 = "arm64-v8a"
ARCH_X86 = "x86"
ARCH_X86_64 = "x86_64"

PLATFORM_ARCH_MAP: MappingProxyType[str, str] = MappingProxyType({
    PLATFORM_ARM32: ARCH_ARM32,
    PLATFORM_ARM64: ARCH_ARM64,
    PLATFORM_X86: ARCH_X86,
    PLATFORM_X86_64: ARCH_X86_64,
})

DEFAULT_PLATFORMS: frozenset[str] = frozenset({PLATFORM_ARM32, PLATFORM_ARM64})

LEGACY_ABI = ARCH_ARMV6
PREDECESSOR_ABI = ARCH_ARM32

NATIVE_LIB_SUFFIX = ".so"

AbiSet = frozenset[str]


@dataclass(frozen=True)
class ReconcilePolicy:
    """The two independent axes behind a strategy."""

    overwrite: bool            # replace same-named files in the legacy dir
    remove_predecessor: bool   # delete the predecessor dir afterwards


class Strategy(IntEnum):
    """How the legacy ABI directory is populated.

    NONE      nothing to do
    COPY      copy v7a → armeabi where armeabi lacks the file
    MOVE      as COPY, then delete armeabi-v7a
    OVERRIDE  copy v7a → armeabi unconditionally, then delete armeabi-v7a
    """

    NONE = 0
    COPY = 1
    MOVE = 2
    OVERRIDE = 3

    @property
    def policy(self) -> ReconcilePolicy | None:
        return _POLICIES.get(self)

    @property
    def label(self) -> str:
        return self.name.lower()


_POLICIES: dict[Strategy, ReconcilePolicy] = {
    Strategy.COPY: ReconcilePolicy(overwrite=False, remove_predecessor=False),
    Strategy.MOVE: ReconcilePolicy(overwrite=False, remove_predecessor=True),
    Strategy.OVERRIDE: ReconcilePolicy(overwrite=True, remove_predecessor=True),
}
