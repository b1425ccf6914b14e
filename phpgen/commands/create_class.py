"""class:create, an empty class at a fully-qualified name."""

from __future__ import annotations

from typing import Any, Mapping

from ..blueprint import Blueprint
from ..core.project import Project
from .base import ArgumentSpec, Command


class CreateClassCommand(Command):
    name = "class:create"
    description = "Create a simple class"
    arguments = (ArgumentSpec("fully-qualified-name", "Class name"),)

    def handle(self, params: Mapping[str, Any]) -> Project:
        project = Project()
        project.add(Blueprint.for_class(self.argument(params, "fully-qualified-name")))
        return project


__all__ = ["CreateClassCommand"]
