"""dto:create, a final readonly class with promoted constructor properties.

Example::

    phpgen dto:create "App\\DTOs\\User\\UserDto" \
        --properties "id:int,name:string,address:App\\DTOs\\Address\\AddressDto" --dry-run -v
"""

from __future__ import annotations

from typing import Any, Mapping

from ..blueprint import Blueprint
from ..core.project import Project
from ..core.type_parser import parse_property_types
from ..elements import ClassType
from .base import ArgumentSpec, Command, OptionSpec

DEFAULT_PROPERTIES = "id:int"


class CreateDtoCommand(Command):
    name = "dto:create"
    description = "Create a simple DTO class with readonly properties"
    arguments = (ArgumentSpec("fully-qualified-name", "DTO class name"),)
    options = (
        OptionSpec(
            "properties",
            "Properties (format: name:type,email:string)",
            shortcut="p",
            accepts_value=True,
            default=DEFAULT_PROPERTIES,
        ),
    )

    def handle(self, params: Mapping[str, Any]) -> Project:
        name = self.argument(params, "fully-qualified-name")
        properties = self.option(params, "properties")
        if not isinstance(properties, str):
            raise ValueError("Properties must be a string")
        return Project().add(self.create_dto(name, properties))

    @staticmethod
    def create_dto(name: str, properties_text: str) -> Blueprint:
        properties = parse_property_types(properties_text)

        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly()
            constructor = cls.add_method("__construct")
            for property_name, property_type in properties.items():
                constructor.add_promoted_parameter(property_name).set_type(property_type).set_public()
            return cls

        return Blueprint.for_class(name, structure)


__all__ = ["CreateDtoCommand"]
