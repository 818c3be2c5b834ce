"""
Locator base — the contract between the core and the host build.

The core never inspects host build objects. Whatever drives the build
supplies a locator that lists the variants and, for each one, the
output directory of its native-packaging task.

To create a new locator:
    1. Subclass NativeLibsLocator
    2. Implement name and list_variants
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from abisync.core.models.build import VariantRef


class NativeLibsLocator(ABC):
    """Lists build variants with their native-packaging output."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The locator identifier (e.g., 'static', 'gradle')."""

    @abstractmethod
    def list_variants(self) -> list[VariantRef]:
        """Return every variant to reconcile.

        A variant whose native-packaging task cannot be found is still
        returned, with ``task_output=None``.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
