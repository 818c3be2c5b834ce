"""
Domain models — ABI constants, strategies, and build types.

All models are re-exported here for convenient access:

    from abisync.core.models import Strategy, BuildSettings, VariantRef
"""

from abisync.core.models.abi import (
    DEFAULT_PLATFORMS,
    LEGACY_ABI,
    NATIVE_LIB_SUFFIX,
    PLATFORM_ARCH_MAP,
    PREDECESSOR_ABI,
    AbiSet,
    ReconcilePolicy,
    Strategy,
)
from abisync.core.models.build import (
    DEFAULT_LIB_SUBDIR,
    BuildSettings,
    ReconcileResult,
    VariantRef,
)

__all__ = [
    # abi.py
    "AbiSet",
    # build.py
    "BuildSettings",
    "DEFAULT_LIB_SUBDIR",
    "DEFAULT_PLATFORMS",
    "LEGACY_ABI",
    "NATIVE_LIB_SUFFIX",
    "PLATFORM_ARCH_MAP",
    "PREDECESSOR_ABI",
    "ReconcilePolicy",
    "ReconcileResult",
    "Strategy",
    "VariantRef",
]
