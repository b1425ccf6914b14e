"""Base classes for generator command plugins."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..core.project import Project


@dataclass(frozen=True)
class ArgumentSpec:
    """Positional input a command requires."""

    name: str
    description: str = ""
    required: bool = True


@dataclass(frozen=True)
class OptionSpec:
    """Named input; flags (accepts_value=False) default to False."""

    name: str
    description: str = ""
    shortcut: Optional[str] = None
    accepts_value: bool = False
    default: Any = None


class Command(ABC):
    """Contract for commands that describe a batch of files to generate."""

    name: str = ""
    description: str = ""
    arguments: Sequence[ArgumentSpec] = ()
    options: Sequence[OptionSpec] = ()

    @abstractmethod
    def handle(self, params: Mapping[str, Any]) -> Project:
        """Return the project to build for the given argument and option values."""

    def argument(self, params: Mapping[str, Any], name: str) -> str:
        value = params.get(name)
        if not isinstance(value, str) or not value:
            raise ValueError(f"Argument '{name}' must be a non-empty string")
        return value

    def option(self, params: Mapping[str, Any], name: str) -> Any:
        for spec in self.options:
            if spec.name == name:
                value = params.get(name)
                if value is None:
                    return spec.default if spec.accepts_value else False
                return value
        raise KeyError(f"Command '{self.name}' has no option '{name}'")
