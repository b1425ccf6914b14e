"""Generator commands: the built-in set plus plugins from the `phpgen.commands` entry-point group."""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, List, Sequence, Tuple, Type

from ..config import ConfigError
from .base import ArgumentSpec, Command, OptionSpec
from .cqrs_command import CqrsCommandCommand
from .cqrs_query import CqrsQueryCommand
from .create_class import CreateClassCommand
from .create_dto import CreateDtoCommand

_ENTRY_POINT_GROUP = "phpgen.commands"

BUILTIN_COMMANDS: Tuple[Type[Command], ...] = (
    CreateClassCommand,
    CreateDtoCommand,
    CqrsQueryCommand,
    CqrsCommandCommand,
)


def discover_commands(enabled: Sequence[str] | None = None) -> List[Command]:
    """Instantiate built-in commands, then plugins, keyed by `Command.name`.

    `enabled` is the `commands` list from .phpgen.yml; when it is empty every
    command is returned. A plugin may not reuse the name of a command that is
    already registered.
    """
    available: Dict[str, Command] = {}
    for command_class in BUILTIN_COMMANDS:
        command = command_class()
        available[command.name] = command

    for entry in _iter_entry_points():
        command = _load_plugin(entry)
        if command.name in available:
            raise ConfigError(
                f"Plugin command '{command.name}' from entry point '{entry.name}' clashes with an existing command"
            )
        available[command.name] = command

    if not enabled:
        return list(available.values())

    wanted = set(enabled)
    missing = sorted(wanted - set(available))
    if missing:
        raise ConfigError(f"Unknown commands requested: {', '.join(missing)}")
    return [command for name, command in available.items() if name in wanted]


def _load_plugin(entry: metadata.EntryPoint) -> Command:
    try:
        loaded = entry.load()
    except Exception as exc:
        raise ConfigError(f"Could not import plugin command '{entry.name}': {exc}") from exc

    if isinstance(loaded, Command):
        return loaded
    if isinstance(loaded, type):
        if issubclass(loaded, Command):
            return loaded()
    elif callable(loaded):
        command = loaded()
        if isinstance(command, Command):
            return command
    raise ConfigError(f"Entry point '{entry.name}' must provide a Command subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "ArgumentSpec",
    "BUILTIN_COMMANDS",
    "Command",
    "OptionSpec",
    "discover_commands",
]
