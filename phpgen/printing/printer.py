"""Renders PhpFile models to PSR-12 formatted source through Jinja templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..blueprint.dependencies import TYPE_NAME_PATTERN, DependencyAnalyzer
from ..elements import (
    Attribute,
    ClassLike,
    ClassReference,
    ClassType,
    Constant,
    EnumType,
    InterfaceType,
    Literal,
    Method,
    Parameter,
    PhpFile,
    PhpNamespace,
    PromotedParameter,
    Property,
    PUBLIC,
)
from .lint import PhpSourceLinter

_WRAP_WIDTH = 120


class PhpPrinter:
    """Prints files with imports applied to every type name they contain."""

    INDENT = "    "

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        linter: PhpSourceLinter | None = None,
    ) -> None:
        self.templates_dir = templates_dir
        self.linter = linter or PhpSourceLinter()
        self._env = self._create_env(templates_dir)

    def print_file(self, php_file: PhpFile) -> str:
        namespaces = []
        for namespace in php_file.get_namespaces():
            namespaces.append(
                {
                    "name": namespace.name,
                    "uses": self._use_statements(namespace),
                    "elements": [
                        self.print_element(element, namespace)
                        for element in namespace.get_elements()
                    ],
                }
            )
        template = self._env.get_template("file.php.j2")
        rendered = template.render(
            comment=php_file.comment.splitlines() if php_file.comment else [],
            strict_types=php_file.strict_types,
            namespaces=namespaces,
        )
        return self.linter.lint(rendered)

    def print_element(self, element: ClassLike, namespace: PhpNamespace | None = None) -> str:
        namespace = namespace or PhpNamespace("")
        sections: List[str] = []
        traits = element.get_traits()
        if traits:
            sections.append("\n".join(f"use {self.simplify(name, namespace)};" for name in traits))
        if isinstance(element, EnumType) and element.cases:
            sections.append("\n".join(self._print_case(case, namespace) for case in element.get_cases()))
        if element.constants:
            sections.append(
                "\n".join(self._print_constant(constant, namespace) for constant in element.constants.values())
            )
        for prop in element.get_properties():
            sections.append(self._print_property(prop, namespace))
        body_less = isinstance(element, InterfaceType)
        for method in element.get_methods():
            sections.append(self._print_method(method, namespace, body_less=body_less))

        template = self._env.get_template("element.php.j2")
        return template.render(
            docblock=self._docblock(_comment_lines(element.comment)),
            attributes=[self._print_attribute(attr, namespace) for attr in element.attributes],
            header=self._header(element, namespace),
            sections=sections,
        )

    def simplify(self, name: str, namespace: PhpNamespace) -> str:
        """Shorten one qualified name using the namespace's imports."""
        if not DependencyAnalyzer.is_qualified(name):
            return name
        full = name.lstrip("\\")
        alias = namespace.uses.get(full)
        if alias:
            return alias
        if namespace.name and full.startswith(namespace.name + "\\"):
            relative = full[len(namespace.name) + 1:]
            if "\\" not in relative and relative not in namespace.uses.values():
                return relative
        return "\\" + full

    def simplify_type(self, type_expression: str, namespace: PhpNamespace) -> str:
        return TYPE_NAME_PATTERN.sub(lambda m: self.simplify(m.group(0), namespace), type_expression)

    def _use_statements(self, namespace: PhpNamespace) -> List[str]:
        statements = []
        for name, alias in namespace.uses.items():
            parent, _, short = name.rpartition("\\")
            if short == alias and parent == namespace.name:
                # Already in scope.
                continue
            if short == alias:
                statements.append(name)
            else:
                statements.append(f"{name} as {alias}")
        return statements

    def _header(self, element: ClassLike, namespace: PhpNamespace) -> str:
        parts: List[str] = []
        if isinstance(element, ClassType):
            if element.final:
                parts.append("final")
            if element.abstract:
                parts.append("abstract")
            if element.readonly:
                parts.append("readonly")
        parts.append(getattr(element, "keyword", "class"))
        name = element.name
        if isinstance(element, EnumType) and element.backing_type:
            name = f"{name}: {element.backing_type}"
        parts.append(name)

        extends = element.get_extends()
        if extends:
            parts.append("extends " + ", ".join(self.simplify(n, namespace) for n in extends))
        implements = element.get_implements()
        if implements:
            parts.append("implements " + ", ".join(self.simplify(n, namespace) for n in implements))
        return " ".join(parts)

    def _print_case(self, case, namespace: PhpNamespace) -> str:
        prefix = self._member_prefix(case.comment, case.attributes, namespace)
        if case.value is None:
            return f"{prefix}case {case.name};"
        return f"{prefix}case {case.name} = {self._dump(case.value, namespace)};"

    def _print_constant(self, constant: Constant, namespace: PhpNamespace) -> str:
        prefix = self._member_prefix(constant.comment, constant.attributes, namespace)
        modifiers = [m for m in ("final" if constant.final else None, constant.visibility) if m]
        modifiers.append("const")
        return f"{prefix}{' '.join(modifiers)} {constant.name} = {self._dump(constant.value, namespace)};"

    def _print_property(self, prop: Property, namespace: PhpNamespace) -> str:
        doc = _comment_lines(prop.comment)
        native, full = self._split_type(prop.type, prop.nullable, namespace)
        if full:
            doc.append(f"@var {full}")
        prefix = self._member_prefix(None, prop.attributes, namespace, docblock=self._docblock(doc))
        modifiers = [prop.visibility]
        if prop.static:
            modifiers.append("static")
        if prop.readonly:
            modifiers.append("readonly")
        if native:
            modifiers.append(native)
        line = f"{' '.join(modifiers)} ${prop.name}"
        if prop.has_value:
            line += f" = {self._dump(prop.value, namespace)}"
        return f"{prefix}{line};"

    def _print_method(self, method: Method, namespace: PhpNamespace, *, body_less: bool) -> str:
        doc = _comment_lines(method.comment)
        params: List[str] = []
        multiline = False
        for parameter in method.get_parameters():
            rendered, generic = self._print_parameter(parameter, namespace)
            if generic:
                doc.append(f"@param {generic} ${parameter.name}")
            if isinstance(parameter, PromotedParameter) or parameter.comment or parameter.attributes:
                multiline = True
            params.append(rendered)

        returns = ""
        if method.return_type:
            native, full = self._split_type(method.return_type, method.return_nullable, namespace)
            returns = f": {native}"
            if full:
                doc.append(f"@return {full}")

        modifiers: List[str] = []
        if method.abstract:
            modifiers.append("abstract")
        elif method.final:
            modifiers.append("final")
        modifiers.append(method.visibility or PUBLIC)
        if method.static:
            modifiers.append("static")
        signature = f"{' '.join(modifiers)} function {method.name}"

        inline = f"{signature}({', '.join(p.replace(chr(10), ' ') for p in params)}){returns}"
        if len(inline) + len(self.INDENT) > _WRAP_WIDTH:
            multiline = True
        if multiline and params:
            lines = [f"{signature}("]
            for param in params:
                lines.append(_indent(param + ",", self.INDENT))
            lines.append(f"){returns}")
            head = "\n".join(lines)
        else:
            head = inline

        prefix = self._member_prefix(None, method.attributes, namespace, docblock=self._docblock(doc))
        if body_less or method.abstract:
            return f"{prefix}{head};"
        body = _indent(method.body.rstrip(), self.INDENT) + "\n" if method.body else ""
        opener = " {" if multiline and params else "\n{"
        return f"{prefix}{head}{opener}\n{body}}}"

    def _print_parameter(self, parameter: Parameter, namespace: PhpNamespace) -> tuple[str, Optional[str]]:
        parts: List[str] = []
        for attribute in parameter.attributes:
            parts.append(self._print_attribute(attribute, namespace))
        if isinstance(parameter, PromotedParameter):
            parts.append(parameter.visibility)
            if parameter.readonly:
                parts.append("readonly")
        native, full = self._split_type(parameter.type, parameter.nullable, namespace)
        if native:
            parts.append(native)
        name = f"{'&' if parameter.by_reference else ''}{'...' if parameter.variadic else ''}${parameter.name}"
        if parameter.has_default_value:
            name += f" = {self._dump(parameter.default_value, namespace)}"
        parts.append(name)
        rendered = " ".join(parts)
        if parameter.comment:
            rendered = f"/** {' '.join(_comment_lines(parameter.comment))} */\n{rendered}"
        return rendered, full

    def _split_type(
        self, type_expression: Optional[str], nullable: bool, namespace: PhpNamespace
    ) -> tuple[Optional[str], Optional[str]]:
        """Return (native type, full generic type for docblocks or None)."""
        if not type_expression:
            return None, None
        simplified = self.simplify_type(type_expression.strip(), namespace)
        full: Optional[str] = None
        native = simplified
        if "<" in simplified:
            full = simplified
            native = simplified.split("<", 1)[0].strip()
        if nullable and not native.startswith("?") and "|" not in native and native not in ("mixed", "null"):
            native = f"?{native}"
        return native, full

    def _member_prefix(
        self,
        comment: Optional[str],
        attributes: Sequence[Attribute],
        namespace: PhpNamespace,
        *,
        docblock: Optional[str] = None,
    ) -> str:
        lines: List[str] = []
        docblock = docblock if docblock is not None else self._docblock(_comment_lines(comment))
        if docblock:
            lines.append(docblock)
        lines.extend(self._print_attribute(attr, namespace) for attr in attributes)
        return "".join(line + "\n" for line in lines)

    def _print_attribute(self, attribute: Attribute, namespace: PhpNamespace) -> str:
        name = self.simplify(attribute.name, namespace)
        if not attribute.arguments:
            return f"#[{name}]"
        if isinstance(attribute.arguments, dict):
            args = ", ".join(f"{key}: {self._dump(value, namespace)}" for key, value in attribute.arguments.items())
        else:
            args = ", ".join(self._dump(value, namespace) for value in attribute.arguments)
        return f"#[{name}({args})]"

    def _dump(self, value: Any, namespace: PhpNamespace) -> str:
        if isinstance(value, ClassReference):
            return f"{self.simplify(value.name, namespace)}::class"
        if isinstance(value, Literal):
            return value.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return repr(value)
        if isinstance(value, str):
            escaped = value.replace("\\", "\\\\").replace("'", "\\'")
            return f"'{escaped}'"
        if isinstance(value, dict):
            items = ", ".join(
                f"{self._dump(key, namespace)} => {self._dump(item, namespace)}" for key, item in value.items()
            )
            return f"[{items}]"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._dump(item, namespace) for item in value) + "]"
        raise TypeError(f"Cannot print value of type {type(value).__name__}")

    @staticmethod
    def _docblock(lines: List[str]) -> str:
        if not lines:
            return ""
        body = "\n".join(f" * {line}" if line else " *" for line in lines)
        return f"/**\n{body}\n */"

    def _create_env(self, templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(list(dict.fromkeys(directories)))
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def _comment_lines(comment: Optional[str]) -> List[str]:
    return comment.splitlines() if comment else []


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line.strip() else "" for line in text.split("\n"))


__all__ = ["PhpPrinter"]
