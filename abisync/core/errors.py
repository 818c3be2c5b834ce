"""
Error taxonomy — every failure that aborts a variant's build.

"Nothing to do" cases (strategy NONE, missing armeabi-v7a directory)
are not errors and never raise. File-system failures surface as the
builtin ``OSError``.
"""

from __future__ import annotations


class AbiSyncError(Exception):
    """Base class for all abisync errors."""


class ConfigError(AbiSyncError):
    """Raised when the build configuration file is invalid or missing."""


class InvalidPlatformError(AbiSyncError):
    """An unknown platform was passed to target-platform."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Invalid platform: {platform}.")


class InvalidStrategyError(AbiSyncError):
    """A strategy flag is not an integer."""

    def __init__(self, value: object, source: str):
        self.value = value
        self.source = source
        super().__init__(f"Invalid armeabi strategy from {source}: {value!r} is not an integer.")


class TaskWiringError(AbiSyncError):
    """The native-packaging task a variant depends on could not be found."""

    def __init__(self, task_name: str, variant: str = ""):
        self.task_name = task_name
        self.variant = variant
        super().__init__(f"Can not find Task:{task_name} !!!")
