"""
Reconciliation engine — populate armeabi from armeabi-v7a.

Runs once per build variant, after that variant's native-packaging
task has written its output tree and before packaging finalizes:

    <task output>/<lib_subdir>/
        armeabi-v7a/libfoo.so    predecessor (source)
        armeabi/libfoo.so        legacy (destination)

Flow:
    strategy NONE → skip
    no predecessor dir → skip
    copy *.so into legacy dir (overwrite per policy)
    remove predecessor dir (per policy)

There is no rollback. Files copied before a failure stay in place;
a re-run skips or re-copies them.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from abisync.core.errors import TaskWiringError
from abisync.core.models.abi import (
    LEGACY_ABI,
    NATIVE_LIB_SUFFIX,
    PREDECESSOR_ABI,
    Strategy,
)
from abisync.core.models.build import BuildSettings, ReconcileResult, VariantRef

logger = logging.getLogger(__name__)


def _native_libs(directory: Path) -> list[Path]:
    """Native libraries directly inside ``directory``, sorted by name."""
    return sorted(
        p for p in directory.iterdir()
        if p.name.endswith(NATIVE_LIB_SUFFIX) and p.is_file()
    )


def reconcile_output_tree(root: Path, strategy: Strategy, variant: str = "") -> ReconcileResult:
    """Materialize the legacy ABI directory under one output tree.

    Args:
        root: The directory holding the per-ABI subdirectories.
        strategy: Active strategy for this build.
        variant: Variant name, for reporting only.

    Returns:
        ReconcileResult with status ``reconciled`` or ``skipped``.

    Raises:
        OSError: If a copy, mkdir or delete fails. Earlier copies are kept.
    """
    base = {"variant": variant, "output_root": str(root), "strategy": strategy.label}

    policy = strategy.policy
    if policy is None:
        logger.info("[%s] armeabi strategy is none, nothing to do", variant or root)
        return ReconcileResult.skip("strategy is none", **base)

    predecessor = root / PREDECESSOR_ABI
    if not predecessor.is_dir():
        logger.info("[%s] no %s directory in %s, skipping", variant or root, PREDECESSOR_ABI, root)
        return ReconcileResult.skip(f"{PREDECESSOR_ABI} not found", **base)

    legacy = root / LEGACY_ABI
    legacy.mkdir(exist_ok=True)

    result = ReconcileResult(**base)
    for lib in _native_libs(predecessor):
        target = legacy / lib.name
        if target.exists() and not policy.overwrite:
            result.kept.append(lib.name)
            continue
        shutil.copyfile(lib, target)
        logger.debug("Copied %s → %s", lib, target)
        result.copied.append(lib.name)

    if policy.remove_predecessor and predecessor.exists():
        shutil.rmtree(predecessor)
        result.removed_predecessor = True
        logger.info("[%s] removed %s", variant or root, predecessor)

    logger.info(
        "[%s] %s: %d copied, %d kept",
        variant or root, strategy.label, len(result.copied), len(result.kept),
    )
    return result


def output_root(variant: VariantRef, settings: BuildSettings) -> Path:
    """The ABI-directory root for a variant.

    Raises:
        TaskWiringError: If the variant's native-packaging task is absent.
    """
    if variant.task_output is None:
        raise TaskWiringError(variant.upstream_task, variant.name)
    return variant.task_output / settings.lib_subdir


def reconcile_variant(variant: VariantRef, settings: BuildSettings) -> ReconcileResult:
    """Reconcile one variant using the resolved build settings."""
    root = output_root(variant, settings)
    return reconcile_output_tree(root, settings.strategy, variant=variant.name)


@dataclass
class ReconcileTask:
    """A reconciliation unit for the orchestrator to schedule.

    Must run after ``runs_after`` and before the variant's packaging
    is finalized.
    """

    name: str
    variant: VariantRef
    runs_after: str
    settings: BuildSettings
    output_root: Path

    def run(self) -> ReconcileResult:
        return reconcile_output_tree(
            self.output_root, self.settings.strategy, variant=self.variant.name,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "variant": self.variant.name,
            "runs_after": self.runs_after,
            "output_root": str(self.output_root),
        }


@dataclass
class TaskPlan:
    """Reconciliation tasks planned for a build."""

    settings: BuildSettings
    tasks: list[ReconcileTask] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.tasks)


def plan_tasks(variants: Iterable[VariantRef], settings: BuildSettings) -> TaskPlan:
    """Create one reconciliation task per variant.

    No tasks are planned when the strategy is NONE. Every variant is
    wired before any task runs, so a missing upstream task fails the
    build without touching an output tree.

    Raises:
        TaskWiringError: If any variant's native-packaging task is absent.
    """
    plan = TaskPlan(settings=settings)
    if settings.strategy is Strategy.NONE:
        logger.debug("Strategy is none, no reconciliation tasks planned")
        return plan

    for variant in variants:
        plan.tasks.append(
            ReconcileTask(
                name=variant.task_name,
                variant=variant,
                runs_after=variant.upstream_task,
                settings=settings,
                output_root=output_root(variant, settings),
            )
        )
        logger.debug("Planned %s after %s", variant.task_name, variant.upstream_task)
    return plan
