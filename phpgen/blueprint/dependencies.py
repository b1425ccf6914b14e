"""Dependency analyzer: collects the qualified type names an element refers to."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..elements import Attribute, ClassLike, ClassReference, Method, Property

TYPE_NAME_PATTERN = re.compile(r"\\?[A-Za-z_][A-Za-z0-9_]*(?:\\[A-Za-z_][A-Za-z0-9_]*)*")


class DependencyAnalyzer:
    """Extracts every externally-qualified type an element references.

    A name counts as a dependency only when it contains a namespace separator
    once a single leading backslash is removed; builtins and names already in
    scope are left alone. Sources are visited in a fixed order (supertypes,
    traits, methods, properties, attributes) and the result keeps first-seen
    order so that generated import blocks are stable between runs.
    """

    def extract(self, element: ClassLike) -> List[str]:
        candidates: List[str] = []
        candidates.extend(self._from_supertypes(element))
        candidates.extend(element.get_traits())
        candidates.extend(self._from_methods(element.get_methods()))
        candidates.extend(self._from_properties(element.get_properties()))
        candidates.extend(self._from_attributes(element.attributes))

        dependencies: List[str] = []
        for candidate in candidates:
            for name in self.qualified_names(candidate):
                if name not in dependencies:
                    dependencies.append(name)
        return dependencies

    @staticmethod
    def is_qualified(name: Optional[str]) -> bool:
        if not name:
            return False
        return "\\" in name[1:] if name.startswith("\\") else "\\" in name

    @classmethod
    def qualified_names(cls, type_expression: Optional[str]) -> List[str]:
        """Return the qualified names inside a (possibly composite) type expression."""
        if not type_expression:
            return []
        names: List[str] = []
        for token in TYPE_NAME_PATTERN.findall(type_expression):
            if cls.is_qualified(token):
                names.append(token.lstrip("\\"))
        return names

    @staticmethod
    def _from_supertypes(element: ClassLike) -> List[str]:
        return [*element.get_extends(), *element.get_implements()]

    def _from_methods(self, methods: Iterable[Method]) -> List[str]:
        found: List[str] = []
        for method in methods:
            for parameter in method.get_parameters():
                if parameter.type:
                    found.append(parameter.type)
            if method.return_type:
                found.append(method.return_type)
            found.extend(self._from_attributes(method.attributes))
            for parameter in method.get_parameters():
                found.extend(self._from_attributes(parameter.attributes))
        return found

    def _from_properties(self, properties: Iterable[Property]) -> List[str]:
        found: List[str] = []
        for prop in properties:
            if prop.type:
                found.append(prop.type)
            found.extend(self._from_attributes(prop.attributes))
        return found

    @staticmethod
    def _from_attributes(attributes: Iterable[Attribute]) -> List[str]:
        found: List[str] = []
        for attribute in attributes:
            found.append(attribute.name)
            # Plain literals stay opaque; only Name::class references are imported.
            for argument in attribute.argument_values():
                if isinstance(argument, ClassReference):
                    found.append(argument.name)
        return found


__all__ = ["DependencyAnalyzer", "TYPE_NAME_PATTERN"]
