"""
Build models — resolved settings, variants, and reconciliation results.

BuildSettings is computed once at startup from every flag source and
is frozen afterwards. VariantRef is what a locator hands back for each
build variant. ReconcileResult is the per-variant outcome.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from abisync.core.models.abi import AbiSet, Strategy

DEFAULT_LIB_SUBDIR = "0/lib"


class BuildSettings(BaseModel):
    """The resolved, immutable configuration for one build."""

    model_config = ConfigDict(frozen=True)

    abis: AbiSet
    strategy: Strategy = Strategy.NONE
    split_per_abi: bool = False
    lib_subdir: str = DEFAULT_LIB_SUBDIR

    @field_validator("abis")
    @classmethod
    def _non_empty(cls, value: AbiSet) -> AbiSet:
        if not value:
            raise ValueError("ABI set must not be empty")
        return value

    def to_dict(self) -> dict[str, Any]:
        return {
            "abis": sorted(self.abis),
            "strategy": self.strategy.label,
            "split_per_abi": self.split_per_abi,
            "lib_subdir": self.lib_subdir,
        }


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


class VariantRef(BaseModel):
    """A build variant and the output of its native-packaging task.

    ``task_output`` is None when the upstream task could not be found
    for this variant.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    task_output: Path | None = None

    @property
    def upstream_task(self) -> str:
        """Name of the native-packaging task this variant depends on."""
        return f"transformNativeLibsWithStripDebugSymbolFor{_capitalize(self.name)}"

    @property
    def task_name(self) -> str:
        """Name of the reconciliation task for this variant."""
        return f"supportArmeabiFor{_capitalize(self.name)}"


class ReconcileResult(BaseModel):
    """Outcome of reconciling one variant's output tree."""

    variant: str = ""
    status: Literal["reconciled", "skipped", "failed"] = "reconciled"
    output_root: str = ""
    strategy: str = Strategy.NONE.label

    copied: list[str] = Field(default_factory=list)
    kept: list[str] = Field(default_factory=list)   # already present, not overwritten
    removed_predecessor: bool = False

    reason: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @classmethod
    def skip(cls, reason: str, **kwargs: Any) -> ReconcileResult:
        """Create a skipped result."""
        return cls(status="skipped", reason=reason, **kwargs)

    @classmethod
    def failure(cls, error: str, **kwargs: Any) -> ReconcileResult:
        """Create a failed result."""
        return cls(status="failed", error=error, **kwargs)
