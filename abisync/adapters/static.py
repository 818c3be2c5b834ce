"""
Static locator — variants declared up front.

Used with the ``variants:`` list in abisync.yml, and in tests.
"""

from __future__ import annotations

from abisync.adapters.base import NativeLibsLocator
from abisync.core.models.build import VariantRef


class StaticLocator(NativeLibsLocator):
    """Serves a fixed list of variants."""

    def __init__(self, variants: list[VariantRef]):
        self._variants = list(variants)

    @property
    def name(self) -> str:
        return "static"

    def list_variants(self) -> list[VariantRef]:
        return list(self._variants)
