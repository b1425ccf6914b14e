"""Parser for compact `name:type,other:type` property lists."""

from __future__ import annotations

from typing import Dict, List

_OPENERS = {"<", "("}
_CLOSERS = {">", ")"}


class PropertyTypeParser:
    """Turns `id:int,items:array<Item>` into an ordered name -> type mapping.

    Commas and colons nested inside `<...>` or `(...)` belong to the type, so
    generics such as `array<string,array<int,string>>` and callable signatures
    such as `callable(string):bool` survive intact. Entries with an empty name
    or an empty type are dropped instead of rejected, which lets trailing
    commas and half-typed fragments through without failing the command.
    """

    @staticmethod
    def parse(text: str) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        current: List[str] = []
        name = ""
        in_name = True
        depth = 0

        def flush() -> None:
            type_expr = "".join(current).strip()
            if name and type_expr:
                properties[name] = type_expr

        for char in text:
            if char in _OPENERS:
                depth += 1
                current.append(char)
            elif char in _CLOSERS:
                depth -= 1
                current.append(char)
            elif char == ":" and depth == 0 and in_name:
                name = "".join(current).strip()
                current = []
                in_name = False
            elif char == "," and depth == 0:
                flush()
                current = []
                name = ""
                in_name = True
            else:
                current.append(char)

        flush()
        return properties


def parse_property_types(text: str) -> Dict[str, str]:
    """Module-level shortcut for PropertyTypeParser.parse."""
    return PropertyTypeParser.parse(text)


__all__ = ["PropertyTypeParser", "parse_property_types"]
