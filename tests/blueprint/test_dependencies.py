from __future__ import annotations

from phpgen.blueprint import DependencyAnalyzer
from phpgen.elements import ClassReference, ClassType, EnumType, InterfaceType, Literal


def test_extracts_in_source_order_without_duplicates() -> None:
    cls = ClassType("Service")
    cls.set_extends("Base\\Service")
    cls.add_implement("Contracts\\Runnable")
    cls.add_trait("Support\\Loggable")
    method = cls.add_method("run")
    method.add_parameter("input").set_type("Io\\Input")
    method.set_return_type("Io\\Output")
    cls.add_property("input").set_type("Io\\Input")
    cls.add_attribute("Meta\\Tagged")

    assert DependencyAnalyzer().extract(cls) == [
        "Base\\Service",
        "Contracts\\Runnable",
        "Support\\Loggable",
        "Io\\Input",
        "Io\\Output",
        "Meta\\Tagged",
    ]


def test_unqualified_and_builtin_types_are_ignored() -> None:
    cls = ClassType("Plain")
    method = cls.add_method("count")
    method.add_parameter("items").set_type("array")
    method.add_parameter("when").set_type("\\DateTime")
    method.set_return_type("int")
    cls.add_property("name").set_type("string")

    assert DependencyAnalyzer().extract(cls) == []


def test_composite_and_generic_types_yield_each_qualified_name() -> None:
    cls = ClassType("Holder")
    cls.add_property("value").set_type("?Ns\\A|Ns\\B")
    cls.add_property("items").set_type("array<Ns\\C>")

    assert DependencyAnalyzer().extract(cls) == ["Ns\\A", "Ns\\B", "Ns\\C"]


def test_leading_separator_is_removed() -> None:
    iface = InterfaceType("Repo")
    iface.add_extend("\\Vendor\\Base\\Repository")

    assert DependencyAnalyzer().extract(iface) == ["Vendor\\Base\\Repository"]


def test_attribute_class_references_count_but_literals_do_not() -> None:
    iface = InterfaceType("Handler")
    iface.add_attribute(
        "Illuminate\\Container\\Attributes\\Bind",
        [ClassReference("App\\Infra\\HandlerImpl"), Literal("Other\\Thing::class")],
    )
    handle = iface.add_method("handle")
    handle.add_attribute("Attr\\OnMethod")
    handle.add_parameter("value").add_attribute("Attr\\OnParam")

    assert DependencyAnalyzer().extract(iface) == [
        "Attr\\OnMethod",
        "Attr\\OnParam",
        "Illuminate\\Container\\Attributes\\Bind",
        "App\\Infra\\HandlerImpl",
    ]


def test_enum_implements_are_collected() -> None:
    enum = EnumType("Status")
    enum.set_type("string")
    enum.add_implement("App\\Contracts\\HasLabel")
    enum.add_case("Active", "active")

    assert DependencyAnalyzer().extract(enum) == ["App\\Contracts\\HasLabel"]


def test_is_qualified() -> None:
    assert DependencyAnalyzer.is_qualified("Ns\\Name")
    assert DependencyAnalyzer.is_qualified("\\Ns\\Name")
    assert not DependencyAnalyzer.is_qualified("\\DateTime")
    assert not DependencyAnalyzer.is_qualified("string")
    assert not DependencyAnalyzer.is_qualified("")
    assert not DependencyAnalyzer.is_qualified(None)
