"""Immutable description of one element to generate."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from ..elements import ClassLike, ElementKind

StructureFn = Callable[[ClassLike], ClassLike]


@dataclass(frozen=True)
class ElementSpec:
    """Qualified name, kind, ordered imports and the structure callback of an element.

    Every "mutating" operation returns a new spec; `kind` never changes.
    """

    qualified_name: str
    kind: ElementKind
    imports: Tuple[str, ...] = ()
    structure: Optional[StructureFn] = None

    def add_import(self, name: str) -> "ElementSpec":
        name = name.lstrip("\\")
        if not name or name in self.imports:
            return self
        return replace(self, imports=self.imports + (name,))

    def configure(self, structure: StructureFn) -> "ElementSpec":
        return replace(self, structure=structure)

    @property
    def namespace(self) -> str:
        namespace, _, _ = self.qualified_name.strip("\\").rpartition("\\")
        return namespace

    @property
    def short_name(self) -> str:
        return self.qualified_name.strip("\\").rpartition("\\")[2]


__all__ = ["ElementSpec", "StructureFn"]
