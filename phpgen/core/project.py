"""Ordered batch of blueprints built all-or-nothing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Protocol, runtime_checkable

from ..logging import get_logger
from ..models import FinishedArtifact

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..elements import PhpFile
    from ..printing.assembler import FileAssembler


@runtime_checkable
class BlueprintLike(Protocol):
    """Shape a factory result must have to be built."""

    qualified_name: str

    def build(self, assembler: "FileAssembler") -> "PhpFile":
        """Assemble the file for this blueprint."""


class BatchBuildError(RuntimeError):
    """Raised when one entry of a batch cannot be built; the whole batch is abandoned."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"Failed to build '{key}': {message}")
        self.key = key


class Project:
    """Collects blueprints in insertion order under disambiguated keys.

    Adding the same qualified name several times yields keys `Name`,
    `Name_1`, `Name_2`, ... so related artifacts can share a naming scheme
    without overwriting each other.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Callable[[], Any]] = {}
        self.logger = get_logger("project")

    def add(self, blueprint: BlueprintLike) -> "Project":
        key = self._unique_key(blueprint.qualified_name)
        self._factories[key] = lambda: blueprint
        return self

    def add_factory(self, name: str, factory: Callable[[], Any]) -> "Project":
        """Register a blueprint factory evaluated lazily by `build`."""
        self._factories[self._unique_key(name)] = factory
        return self

    def keys(self) -> List[str]:
        return list(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def build(self, assembler: "FileAssembler") -> List[FinishedArtifact]:
        """Build every entry in order; the first failure aborts the batch."""
        artifacts: List[FinishedArtifact] = []
        for key, factory in self._factories.items():
            try:
                blueprint = factory()
            except Exception as exc:
                raise BatchBuildError(key, f"factory raised {exc.__class__.__name__}: {exc}") from exc
            if not isinstance(blueprint, BlueprintLike) or not isinstance(
                getattr(blueprint, "qualified_name", None), str
            ):
                raise BatchBuildError(
                    key, f"factory must return a blueprint, got {type(blueprint).__name__}"
                )
            # Assembler and structure-function errors propagate unchanged.
            php_file = blueprint.build(assembler)
            self.logger.debug("Built %s", key)
            artifacts.append(
                FinishedArtifact(
                    key=key,
                    qualified_name=blueprint.qualified_name,
                    kind=getattr(blueprint, "kind", None),
                    file=php_file,
                )
            )
        return artifacts

    def _unique_key(self, name: str) -> str:
        if name not in self._factories:
            return name
        n = 1
        while f"{name}_{n}" in self._factories:
            n += 1
        return f"{name}_{n}"


__all__ = ["BatchBuildError", "BlueprintLike", "Project"]
