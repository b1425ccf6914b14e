"""Fluent blueprint for one generated PHP file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from ..config import ConfigError
from ..elements import ClassLike, ElementKind
from ..logging import get_logger
from .dependencies import DependencyAnalyzer
from .spec import ElementSpec, StructureFn

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..elements import PhpFile
    from ..printing.assembler import FileAssembler

_PROBE_NAMES = {
    ElementKind.CLASS: "TempClass",
    ElementKind.INTERFACE: "TempInterface",
    ElementKind.TRAIT: "TempTrait",
    ElementKind.ENUM: "TempEnum",
}


class Blueprint:
    """Accumulates an ElementSpec and hands it to a FileAssembler.

    With auto-imports enabled, `with_structure` runs the structure function
    once against a throwaway probe element to harvest its dependencies, and
    the assembler runs it again against the real element at build time.
    Structure functions must therefore only describe structure: any other
    side effect happens twice.
    """

    def __init__(
        self,
        qualified_name: str,
        kind: ElementKind | str,
        dependency_analyzer: Optional[DependencyAnalyzer] = None,
    ) -> None:
        try:
            kind = ElementKind(kind)
        except ValueError:
            raise ConfigError(f"Unsupported element kind: {kind}") from None
        self._spec = ElementSpec(qualified_name=qualified_name, kind=kind)
        self.auto_imports = True
        self._analyzer = dependency_analyzer or DependencyAnalyzer()
        self.logger = get_logger("blueprint")

    @classmethod
    def for_class(cls, qualified_name: str, structure: Optional[StructureFn] = None) -> "Blueprint":
        return cls._create(qualified_name, ElementKind.CLASS, structure)

    @classmethod
    def for_interface(cls, qualified_name: str, structure: Optional[StructureFn] = None) -> "Blueprint":
        return cls._create(qualified_name, ElementKind.INTERFACE, structure)

    @classmethod
    def for_trait(cls, qualified_name: str, structure: Optional[StructureFn] = None) -> "Blueprint":
        return cls._create(qualified_name, ElementKind.TRAIT, structure)

    @classmethod
    def for_enum(cls, qualified_name: str, structure: Optional[StructureFn] = None) -> "Blueprint":
        return cls._create(qualified_name, ElementKind.ENUM, structure)

    @classmethod
    def _create(
        cls, qualified_name: str, kind: ElementKind, structure: Optional[StructureFn]
    ) -> "Blueprint":
        blueprint = cls(qualified_name, kind)
        if structure is not None:
            blueprint.with_structure(structure)
        return blueprint

    @property
    def spec(self) -> ElementSpec:
        return self._spec

    @property
    def qualified_name(self) -> str:
        return self._spec.qualified_name

    @property
    def kind(self) -> ElementKind:
        return self._spec.kind

    def add_import(self, name: str) -> "Blueprint":
        self._spec = self._spec.add_import(name)
        return self

    def add_imports(self, names: Iterable[str]) -> "Blueprint":
        for name in names:
            if name:
                self.add_import(name)
        return self

    def enable_auto_imports(self, enable: bool = True) -> "Blueprint":
        self.auto_imports = enable
        return self

    def with_structure(self, structure: StructureFn) -> "Blueprint":
        if self.auto_imports:
            probe = self._spec.kind.create(_PROBE_NAMES[self._spec.kind])
            result = structure(probe)
            if isinstance(result, ClassLike):
                dependencies = self._analyzer.extract(result)
                self.logger.debug(
                    "Probe of %s found %d dependencies", self.qualified_name, len(dependencies)
                )
                self.add_imports(dependencies)
        self._spec = self._spec.configure(structure)
        return self

    def build(self, assembler: "FileAssembler") -> "PhpFile":
        return assembler.assemble(self._spec)

    def __repr__(self) -> str:
        return f"Blueprint({self.qualified_name!r}, {self.kind.value})"


__all__ = ["Blueprint"]
