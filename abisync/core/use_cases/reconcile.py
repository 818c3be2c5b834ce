"""
Reconcile use case — plan and run reconciliation for every variant.

This is the vertical slice from flags to mutated output trees:

    resolve settings → locate variants → plan tasks → run each task

Variants run one after another. The first failure stops the run; the
failing variant is reported as ``failed`` and later variants are not
attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from abisync.adapters.base import NativeLibsLocator
from abisync.adapters.gradle import GradleLocator
from abisync.adapters.static import StaticLocator
from abisync.core.config.loader import BuildFile
from abisync.core.errors import AbiSyncError
from abisync.core.models.build import BuildSettings, ReconcileResult, VariantRef
from abisync.core.services.reconcile import TaskPlan, plan_tasks
from abisync.core.use_cases.resolve import resolve_build

logger = logging.getLogger(__name__)


@dataclass
class ReconcileRunResult:
    """Result of a reconcile (or tasks) run."""

    settings: BuildSettings | None = None
    plan: TaskPlan | None = None
    results: list[ReconcileResult] = field(default_factory=list)
    dry_run: bool = False
    error: str | None = None

    @property
    def reconciled(self) -> int:
        return sum(1 for r in self.results if r.status == "reconciled")

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == "skipped")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "failed")

    @property
    def ok(self) -> bool:
        return self.error is None and self.failed == 0

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
        if self.settings:
            result["settings"] = self.settings.to_dict()
        if self.plan:
            result["tasks"] = [t.to_dict() for t in self.plan.tasks]
        result["dry_run"] = self.dry_run
        result["results"] = [r.model_dump(mode="json") for r in self.results]
        result["reconciled"] = self.reconciled
        result["skipped"] = self.skipped
        result["failed"] = self.failed
        return result


def select_locator(
    build_file: BuildFile | None,
    build_dir: Path | None = None,
    variants: list[str] | None = None,
) -> NativeLibsLocator:
    """Pick the locator for this run.

    A build directory means Gradle layout discovery. Otherwise the
    variants declared in abisync.yml are used, optionally narrowed to
    ``variants``; a requested name that is not declared has no output.
    """
    if build_dir is not None:
        return GradleLocator(build_dir, variants)

    declared = build_file.variant_refs() if build_file else []
    if not variants:
        return StaticLocator(declared)

    by_name = {v.name: v for v in declared}
    return StaticLocator([by_name.get(name, VariantRef(name=name)) for name in variants])


def run_reconcile(
    config_path: Path | None = None,
    properties: Mapping[str, str] | None = None,
    build_dir: Path | None = None,
    variants: list[str] | None = None,
    dry_run: bool = False,
    locator: NativeLibsLocator | None = None,
) -> ReconcileRunResult:
    """Reconcile every located variant.

    Args:
        config_path: Optional explicit path to abisync.yml.
        properties: Command-line property overrides.
        build_dir: Gradle build directory to discover variants in.
        variants: Restrict to these variant names.
        dry_run: Plan only, do not touch any output tree.
        locator: Inject a locator directly (overrides build_dir/config).

    Returns:
        ReconcileRunResult with one result per variant attempted.
    """
    result = ReconcileRunResult(dry_run=dry_run)

    resolved = resolve_build(config_path, properties)
    if resolved.error:
        result.error = resolved.error
        return result
    assert resolved.settings is not None
    result.settings = resolved.settings

    if locator is None:
        locator = select_locator(resolved.build_file, build_dir, variants)
    logger.debug("Using %r", locator)

    try:
        result.plan = plan_tasks(locator.list_variants(), resolved.settings)
    except AbiSyncError as e:
        result.error = str(e)
        return result

    if dry_run:
        return result

    for task in result.plan.tasks:
        try:
            result.results.append(task.run())
        except OSError as e:
            logger.error("%s failed: %s", task.name, e)
            result.results.append(
                ReconcileResult.failure(
                    str(e),
                    variant=task.variant.name,
                    output_root=str(task.output_root),
                    strategy=resolved.settings.strategy.label,
                )
            )
            result.error = f"{task.name} failed: {e}"
            break

    return result
