"""
Gradle locator — find native-packaging outputs in a build directory.

The strip-debug-symbol transform writes one directory per variant:

    <build_dir>/intermediates/transforms/stripDebugSymbol/<variant>/0/lib/<abi>/

With no explicit variant names, every directory there is a variant.
Explicit names that have no directory come back without an output,
which the engine reports as a wiring error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from abisync.adapters.base import NativeLibsLocator
from abisync.core.models.build import VariantRef

logger = logging.getLogger(__name__)

TRANSFORM_OUTPUT_DIR = Path("intermediates", "transforms", "stripDebugSymbol")


class GradleLocator(NativeLibsLocator):
    """Locate strip-debug-symbol outputs under a Gradle build dir."""

    def __init__(self, build_dir: Path, variants: list[str] | None = None):
        self._build_dir = build_dir
        self._variants = list(variants) if variants else None

    @property
    def name(self) -> str:
        return "gradle"

    @property
    def transforms_dir(self) -> Path:
        return self._build_dir / TRANSFORM_OUTPUT_DIR

    def list_variants(self) -> list[VariantRef]:
        names = self._variants
        if names is None:
            if not self.transforms_dir.is_dir():
                logger.warning("No transform outputs under %s", self.transforms_dir)
                return []
            names = sorted(p.name for p in self.transforms_dir.iterdir() if p.is_dir())

        refs = []
        for name in names:
            output = self.transforms_dir / name
            refs.append(VariantRef(name=name, task_output=output if output.is_dir() else None))
        logger.debug("Gradle variants in %s: %s", self._build_dir, names)
        return refs
