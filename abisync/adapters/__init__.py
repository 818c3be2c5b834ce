"""Adapters — locators for the native-packaging task outputs.

Public re-exports for convenient access.
"""

from abisync.adapters.base import NativeLibsLocator
from abisync.adapters.gradle import GradleLocator
from abisync.adapters.static import StaticLocator

__all__ = [
    "GradleLocator",
    "NativeLibsLocator",
    "StaticLocator",
]
