"""JSON tool descriptions and parameter handling for generator commands."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from ..commands import Command, OptionSpec

DRY_RUN = "dryRun"
TOOL_PREFIX = "phpgen_"


def camel_case(name: str) -> str:
    """Convert kebab-case to camelCase (`fully-qualified-name` -> `fullyQualifiedName`)."""
    head, *rest = name.split("-")
    return head[:1].lower() + head[1:] + "".join(part[:1].upper() + part[1:] for part in rest)


def tool_name(command: Command) -> str:
    return TOOL_PREFIX + re.sub(r"[^A-Za-z0-9_]", "_", command.name)


def _option_type(option: OptionSpec) -> str:
    if not option.accepts_value:
        return "boolean"
    if isinstance(option.default, bool):
        return "boolean"
    if isinstance(option.default, int):
        return "integer"
    if isinstance(option.default, float):
        return "number"
    return "string"


def tool_schema(command: Command) -> Dict[str, Any]:
    properties: Dict[str, Dict[str, Any]] = {}
    required: List[str] = []
    for argument in command.arguments:
        key = camel_case(argument.name)
        properties[key] = {
            "type": "string",
            "description": argument.description or f"Argument: {argument.name}",
        }
        if argument.required:
            required.append(key)
    for option in command.options:
        properties[camel_case(option.name)] = {
            "type": _option_type(option),
            "description": option.description or f"Option: {option.name}",
            "default": option.default if option.accepts_value else False,
        }
    properties[DRY_RUN] = {
        "type": "boolean",
        "description": "Preview generated files without writing them",
        "default": False,
    }
    return {
        "name": tool_name(command),
        "command": command.name,
        "description": command.description,
        "inputSchema": {"type": "object", "properties": properties, "required": required},
    }


def _field_name(name: str) -> str:
    return name.replace("-", "_")


_ANNOTATIONS: Dict[str, Any] = {"boolean": bool, "integer": int, "number": float, "string": str}


def request_model(command: Command) -> Type[BaseModel]:
    """Build a strict pydantic model accepting the command's camelCase tool parameters."""
    fields: Dict[str, Any] = {}
    for argument in command.arguments:
        if argument.required:
            fields[_field_name(argument.name)] = (str, Field(..., alias=camel_case(argument.name)))
        else:
            fields[_field_name(argument.name)] = (Optional[str], Field(None, alias=camel_case(argument.name)))
    for option in command.options:
        default = option.default if option.accepts_value else False
        fields[_field_name(option.name)] = (
            _ANNOTATIONS[_option_type(option)],
            Field(default, alias=camel_case(option.name)),
        )
    fields["dry_run"] = (bool, Field(False, alias=DRY_RUN))
    return create_model(
        tool_name(command) + "_parameters",
        __config__=ConfigDict(extra="forbid", strict=True),
        **fields,
    )


def _describe(error: Mapping[str, Any]) -> str:
    key = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        return f"Required argument '{key}' is missing"
    if error["type"] == "extra_forbidden":
        return f"Unknown parameter '{key}'"
    return f"Parameter '{key}' is invalid: {error['msg']}"


def validate_parameters(command: Command, parameters: Mapping[str, Any]) -> BaseModel:
    """Validate tool parameters, raising ValueError that names every problem."""
    try:
        return request_model(command).model_validate(dict(parameters))
    except ValidationError as exc:
        raise ValueError("; ".join(_describe(error) for error in exc.errors())) from None


def to_command_params(command: Command, parameters: BaseModel) -> Dict[str, Any]:
    """Map validated tool parameters back onto the command's own names."""
    return {
        spec.name: getattr(parameters, _field_name(spec.name))
        for spec in list(command.arguments) + list(command.options)
    }


__all__ = [
    "DRY_RUN",
    "camel_case",
    "request_model",
    "to_command_params",
    "tool_name",
    "tool_schema",
    "validate_parameters",
]
