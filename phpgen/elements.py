"""In-memory model of PHP files and the class-like elements they declare."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Type

PUBLIC = "public"
PROTECTED = "protected"
PRIVATE = "private"

_VISIBILITIES = (PUBLIC, PROTECTED, PRIVATE)


def _check_visibility(visibility: Optional[str]) -> Optional[str]:
    if visibility is not None and visibility not in _VISIBILITIES:
        raise ValueError(f"Unknown visibility '{visibility}'")
    return visibility


@dataclass(frozen=True)
class Literal:
    """Raw PHP expression printed verbatim."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ClassReference:
    """A `Name::class` literal; the referenced name is imported like any other type."""

    name: str

    def __str__(self) -> str:
        return f"{self.name}::class"


class Attribute:
    """PHP 8 attribute attached to an element, member or parameter."""

    def __init__(self, name: str, arguments: Sequence[Any] | Dict[str, Any] | None = None) -> None:
        self.name = name
        if arguments is None:
            self.arguments: Sequence[Any] | Dict[str, Any] = []
        elif isinstance(arguments, dict):
            self.arguments = dict(arguments)
        else:
            self.arguments = list(arguments)

    def argument_values(self) -> List[Any]:
        if isinstance(self.arguments, dict):
            return list(self.arguments.values())
        return list(self.arguments)

    def __repr__(self) -> str:
        return f"Attribute({self.name!r})"


class _Attributable:
    def __init__(self) -> None:
        self.attributes: List[Attribute] = []

    def add_attribute(self, name: str, arguments: Sequence[Any] | Dict[str, Any] | None = None):
        self.attributes.append(Attribute(name, arguments))
        return self


class _Commented:
    def __init__(self) -> None:
        self.comment: Optional[str] = None

    def set_comment(self, comment: Optional[str]):
        self.comment = comment
        return self

    def add_comment(self, line: str):
        self.comment = line if not self.comment else f"{self.comment}\n{line}"
        return self


class Parameter(_Attributable, _Commented):
    """Method or function parameter."""

    _NO_DEFAULT = object()

    def __init__(self, name: str) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.type: Optional[str] = None
        self.nullable = False
        self.variadic = False
        self.by_reference = False
        self._default: Any = self._NO_DEFAULT

    def set_type(self, type_: Optional[str]) -> "Parameter":
        self.type = type_
        return self

    def set_nullable(self, nullable: bool = True) -> "Parameter":
        self.nullable = nullable
        return self

    def set_variadic(self, variadic: bool = True) -> "Parameter":
        self.variadic = variadic
        return self

    def set_reference(self, by_reference: bool = True) -> "Parameter":
        self.by_reference = by_reference
        return self

    def set_default_value(self, value: Any) -> "Parameter":
        self._default = value
        return self

    @property
    def has_default_value(self) -> bool:
        return self._default is not self._NO_DEFAULT

    @property
    def default_value(self) -> Any:
        return None if self._default is self._NO_DEFAULT else self._default


class PromotedParameter(Parameter):
    """Constructor parameter promoted to a property."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.visibility: str = PUBLIC
        self.readonly = False

    def set_visibility(self, visibility: str) -> "PromotedParameter":
        self.visibility = _check_visibility(visibility) or PUBLIC
        return self

    def set_public(self) -> "PromotedParameter":
        return self.set_visibility(PUBLIC)

    def set_protected(self) -> "PromotedParameter":
        return self.set_visibility(PROTECTED)

    def set_private(self) -> "PromotedParameter":
        return self.set_visibility(PRIVATE)

    def set_readonly(self, readonly: bool = True) -> "PromotedParameter":
        self.readonly = readonly
        return self


class Method(_Attributable, _Commented):
    """Method declaration with an optional body."""

    def __init__(self, name: str) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.parameters: Dict[str, Parameter] = {}
        self.return_type: Optional[str] = None
        self.return_nullable = False
        self.visibility: Optional[str] = None
        self.static = False
        self.final = False
        self.abstract = False
        self.body: Optional[str] = None

    def add_parameter(self, name: str, default: Any = Parameter._NO_DEFAULT) -> Parameter:
        parameter = Parameter(name)
        if default is not Parameter._NO_DEFAULT:
            parameter.set_default_value(default)
        self.parameters[name] = parameter
        return parameter

    def add_promoted_parameter(self, name: str, default: Any = Parameter._NO_DEFAULT) -> PromotedParameter:
        parameter = PromotedParameter(name)
        if default is not Parameter._NO_DEFAULT:
            parameter.set_default_value(default)
        self.parameters[name] = parameter
        return parameter

    def get_parameters(self) -> List[Parameter]:
        return list(self.parameters.values())

    def set_return_type(self, type_: Optional[str]) -> "Method":
        self.return_type = type_
        return self

    def set_return_nullable(self, nullable: bool = True) -> "Method":
        self.return_nullable = nullable
        return self

    def set_visibility(self, visibility: Optional[str]) -> "Method":
        self.visibility = _check_visibility(visibility)
        return self

    def set_public(self) -> "Method":
        return self.set_visibility(PUBLIC)

    def set_protected(self) -> "Method":
        return self.set_visibility(PROTECTED)

    def set_private(self) -> "Method":
        return self.set_visibility(PRIVATE)

    def set_static(self, static: bool = True) -> "Method":
        self.static = static
        return self

    def set_final(self, final: bool = True) -> "Method":
        self.final = final
        return self

    def set_abstract(self, abstract: bool = True) -> "Method":
        self.abstract = abstract
        return self

    def set_body(self, body: Optional[str]) -> "Method":
        self.body = body
        return self

    def add_body(self, line: str) -> "Method":
        self.body = line if self.body is None else f"{self.body}\n{line}"
        return self


class Property(_Attributable, _Commented):
    """Class or trait property."""

    def __init__(self, name: str) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.type: Optional[str] = None
        self.nullable = False
        self.visibility: str = PUBLIC
        self.static = False
        self.readonly = False
        self._value: Any = Parameter._NO_DEFAULT

    def set_type(self, type_: Optional[str]) -> "Property":
        self.type = type_
        return self

    def set_nullable(self, nullable: bool = True) -> "Property":
        self.nullable = nullable
        return self

    def set_visibility(self, visibility: str) -> "Property":
        self.visibility = _check_visibility(visibility) or PUBLIC
        return self

    def set_public(self) -> "Property":
        return self.set_visibility(PUBLIC)

    def set_protected(self) -> "Property":
        return self.set_visibility(PROTECTED)

    def set_private(self) -> "Property":
        return self.set_visibility(PRIVATE)

    def set_static(self, static: bool = True) -> "Property":
        self.static = static
        return self

    def set_readonly(self, readonly: bool = True) -> "Property":
        self.readonly = readonly
        return self

    def set_value(self, value: Any) -> "Property":
        self._value = value
        return self

    @property
    def has_value(self) -> bool:
        return self._value is not Parameter._NO_DEFAULT

    @property
    def value(self) -> Any:
        return None if self._value is Parameter._NO_DEFAULT else self._value


class Constant(_Attributable, _Commented):
    """Class constant."""

    def __init__(self, name: str, value: Any) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.value = value
        self.visibility: Optional[str] = None
        self.final = False

    def set_visibility(self, visibility: Optional[str]) -> "Constant":
        self.visibility = _check_visibility(visibility)
        return self

    def set_public(self) -> "Constant":
        return self.set_visibility(PUBLIC)

    def set_private(self) -> "Constant":
        return self.set_visibility(PRIVATE)

    def set_final(self, final: bool = True) -> "Constant":
        self.final = final
        return self


class EnumCase(_Attributable, _Commented):
    """Case of a (possibly backed) enum."""

    def __init__(self, name: str, value: Any = None) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.value = value


class ClassLike(_Attributable, _Commented):
    """Members shared by classes, interfaces, traits and enums."""

    def __init__(self, name: str) -> None:
        _Attributable.__init__(self)
        _Commented.__init__(self)
        self.name = name
        self.methods: Dict[str, Method] = {}
        self.constants: Dict[str, Constant] = {}

    def add_method(self, name: str) -> Method:
        method = Method(name)
        self.methods[name] = method
        return method

    def get_method(self, name: str) -> Method:
        try:
            return self.methods[name]
        except KeyError:
            raise KeyError(f"Method '{name}' not found in {self.name}") from None

    def has_method(self, name: str) -> bool:
        return name in self.methods

    def get_methods(self) -> List[Method]:
        return list(self.methods.values())

    def add_constant(self, name: str, value: Any) -> Constant:
        constant = Constant(name, value)
        self.constants[name] = constant
        return constant

    # Overridden by the element types that can carry these members.
    def get_extends(self) -> List[str]:
        return []

    def get_implements(self) -> List[str]:
        return []

    def get_traits(self) -> List[str]:
        return []

    def get_properties(self) -> List[Property]:
        return []


class _TraitUser:
    def __init__(self) -> None:
        self.traits: List[str] = []

    def add_trait(self, name: str):
        if name not in self.traits:
            self.traits.append(name)
        return self

    def get_traits(self) -> List[str]:
        return list(self.traits)


class _PropertyHolder:
    def __init__(self) -> None:
        self.properties: Dict[str, Property] = {}

    def add_property(self, name: str, value: Any = Parameter._NO_DEFAULT) -> Property:
        prop = Property(name)
        if value is not Parameter._NO_DEFAULT:
            prop.set_value(value)
        self.properties[name] = prop
        return prop

    def set_properties(self, properties: Sequence[Property]):
        self.properties = {prop.name: prop for prop in properties}
        return self

    def get_property(self, name: str) -> Property:
        return self.properties[name]

    def get_properties(self) -> List[Property]:
        return list(self.properties.values())


class ClassType(_TraitUser, _PropertyHolder, ClassLike):
    """PHP class."""

    keyword = "class"

    def __init__(self, name: str) -> None:
        ClassLike.__init__(self, name)
        _TraitUser.__init__(self)
        _PropertyHolder.__init__(self)
        self.extends: Optional[str] = None
        self.implements: List[str] = []
        self.final = False
        self.abstract = False
        self.readonly = False

    def set_extends(self, name: Optional[str]) -> "ClassType":
        self.extends = name
        return self

    def get_extends(self) -> List[str]:
        return [self.extends] if self.extends else []

    def add_implement(self, name: str) -> "ClassType":
        if name not in self.implements:
            self.implements.append(name)
        return self

    def set_implements(self, names: Sequence[str]) -> "ClassType":
        self.implements = list(dict.fromkeys(names))
        return self

    def get_implements(self) -> List[str]:
        return list(self.implements)

    def set_final(self, final: bool = True) -> "ClassType":
        self.final = final
        return self

    def set_abstract(self, abstract: bool = True) -> "ClassType":
        self.abstract = abstract
        return self

    def set_readonly(self, readonly: bool = True) -> "ClassType":
        self.readonly = readonly
        return self


class InterfaceType(ClassLike):
    """PHP interface."""

    keyword = "interface"

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.extends: List[str] = []

    def add_extend(self, name: str) -> "InterfaceType":
        if name not in self.extends:
            self.extends.append(name)
        return self

    def set_extends(self, names: Sequence[str]) -> "InterfaceType":
        self.extends = list(dict.fromkeys(names))
        return self

    def get_extends(self) -> List[str]:
        return list(self.extends)


class TraitType(_TraitUser, _PropertyHolder, ClassLike):
    """PHP trait."""

    keyword = "trait"

    def __init__(self, name: str) -> None:
        ClassLike.__init__(self, name)
        _TraitUser.__init__(self)
        _PropertyHolder.__init__(self)


class EnumType(_TraitUser, ClassLike):
    """PHP enum, optionally backed by `int` or `string`."""

    keyword = "enum"

    def __init__(self, name: str) -> None:
        ClassLike.__init__(self, name)
        _TraitUser.__init__(self)
        self.backing_type: Optional[str] = None
        self.implements: List[str] = []
        self.cases: Dict[str, EnumCase] = {}

    def set_type(self, backing_type: Optional[str]) -> "EnumType":
        if backing_type not in (None, "int", "string"):
            raise ValueError(f"Enum backing type must be int or string, got '{backing_type}'")
        self.backing_type = backing_type
        return self

    def add_case(self, name: str, value: Any = None) -> EnumCase:
        case = EnumCase(name, value)
        self.cases[name] = case
        return case

    def get_cases(self) -> List[EnumCase]:
        return list(self.cases.values())

    def add_implement(self, name: str) -> "EnumType":
        if name not in self.implements:
            self.implements.append(name)
        return self

    def get_implements(self) -> List[str]:
        return list(self.implements)


class ElementKind(str, Enum):
    """Kinds of artifacts a blueprint can describe."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    ENUM = "enum"

    @property
    def element_type(self) -> Type[ClassLike]:
        return _ELEMENT_TYPES[self]

    def create(self, name: str) -> ClassLike:
        return self.element_type(name)


_ELEMENT_TYPES: Dict[ElementKind, Type[ClassLike]] = {
    ElementKind.CLASS: ClassType,
    ElementKind.INTERFACE: InterfaceType,
    ElementKind.TRAIT: TraitType,
    ElementKind.ENUM: EnumType,
}


class PhpNamespace:
    """Namespace block holding imports and declared elements."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.uses: Dict[str, str] = {}
        self.elements: Dict[str, ClassLike] = {}

    def add_use(self, name: str, alias: Optional[str] = None) -> "PhpNamespace":
        name = name.lstrip("\\")
        if not name or name in self.uses:
            return self
        alias = alias or self._unique_alias(name)
        self.uses[name] = alias
        return self

    def get_uses(self) -> Dict[str, str]:
        return dict(self.uses)

    def _unique_alias(self, name: str) -> str:
        segments = name.split("\\")
        taken = set(self.uses.values()) | set(self.elements)
        alias = segments[-1]
        index = len(segments) - 2
        while alias in taken and index >= 0:
            alias = segments[index] + alias
            index -= 1
        return alias

    def add_element(self, element: ClassLike) -> ClassLike:
        self.elements[element.name] = element
        return element

    def add_class(self, name: str) -> ClassType:
        return self.add_element(ClassType(name))  # type: ignore[return-value]

    def add_interface(self, name: str) -> InterfaceType:
        return self.add_element(InterfaceType(name))  # type: ignore[return-value]

    def add_trait(self, name: str) -> TraitType:
        return self.add_element(TraitType(name))  # type: ignore[return-value]

    def add_enum(self, name: str) -> EnumType:
        return self.add_element(EnumType(name))  # type: ignore[return-value]

    def get_elements(self) -> List[ClassLike]:
        return list(self.elements.values())

    def qualify(self, short_name: str) -> str:
        return f"{self.name}\\{short_name}" if self.name else short_name


class PhpFile:
    """A PHP source file: optional strict-types declaration plus namespaces."""

    def __init__(self) -> None:
        self.strict_types = False
        self.comment: Optional[str] = None
        self.namespaces: Dict[str, PhpNamespace] = {}

    def set_strict_types(self, strict: bool = True) -> "PhpFile":
        self.strict_types = strict
        return self

    def add_comment(self, line: str) -> "PhpFile":
        self.comment = line if not self.comment else f"{self.comment}\n{line}"
        return self

    def add_namespace(self, name: str) -> PhpNamespace:
        namespace = self.namespaces.get(name)
        if namespace is None:
            namespace = PhpNamespace(name)
            self.namespaces[name] = namespace
        return namespace

    def get_namespaces(self) -> List[PhpNamespace]:
        return list(self.namespaces.values())

    def primary_element(self, namespace: Optional[str] = None) -> Optional[ClassLike]:
        """Return the first element declared in `namespace` (or in the first namespace)."""
        candidates = []
        if namespace is not None and namespace in self.namespaces:
            candidates.append(self.namespaces[namespace])
        candidates.extend(self.namespaces.values())
        for ns in candidates:
            elements = ns.get_elements()
            if elements:
                return elements[0]
        return None


__all__ = [
    "Attribute",
    "ClassLike",
    "ClassReference",
    "ClassType",
    "Constant",
    "ElementKind",
    "EnumCase",
    "EnumType",
    "InterfaceType",
    "Literal",
    "Method",
    "Parameter",
    "PhpFile",
    "PhpNamespace",
    "PromotedParameter",
    "Property",
    "TraitType",
    "PRIVATE",
    "PROTECTED",
    "PUBLIC",
]
