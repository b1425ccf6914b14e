"""query:generate, the read side of a Laravel CQRS layout.

Generates the handler interface (bound to its implementation through the
container's ``Bind`` attribute), the query and result value objects, the
database-backed implementation and a feature test skeleton::

    phpgen query:generate User FindUserById --dry-run -v
"""

from __future__ import annotations

from typing import Any, Mapping

from ..blueprint import Blueprint
from ..core.project import Project
from ..elements import ClassReference, ClassType, InterfaceType, Property
from .base import ArgumentSpec, Command, OptionSpec

BIND_ATTRIBUTE = "Illuminate\\Container\\Attributes\\Bind"
CONNECTION_INTERFACE = "Illuminate\\Database\\ConnectionInterface"
REFRESH_DATABASE = "Illuminate\\Foundation\\Testing\\RefreshDatabase"
TEST_CASE = "Tests\\TestCase"


class QueryNames:
    """Fully-qualified names of every artifact generated for one query."""

    def __init__(self, context: str, query: str) -> None:
        self.context = context
        self.query = query

    @property
    def handler_interface(self) -> str:
        return f"App\\Contracts\\Query\\{self.context}\\{self.query}QueryHandler"

    @property
    def query_class(self) -> str:
        return f"App\\Contracts\\Query\\{self.context}\\{self.query}Query"

    @property
    def result_class(self) -> str:
        return f"App\\Contracts\\Query\\{self.context}\\{self.query}Result"

    @property
    def implementation(self) -> str:
        return f"App\\Infrastructure\\Query\\{self.context}\\{self.query}QueryHandlerImplementation"

    @property
    def implementation_test(self) -> str:
        return (
            f"Tests\\Feature\\Infrastructure\\Query\\{self.context}\\"
            f"{self.query}QueryHandlerImplementationTest"
        )


class CqrsQueryCommand(Command):
    name = "query:generate"
    description = "Generate Laravel CQRS Query interface, implementation, and test"
    arguments = (
        ArgumentSpec("context", "Context/domain name (e.g., User, Product, Order)"),
        ArgumentSpec("queryName", "Query name (e.g., GetUser, FindProducts, SearchOrders)"),
    )
    options = (OptionSpec("no-query", "Skip generating the Query class"),)

    def handle(self, params: Mapping[str, Any]) -> Project:
        names = QueryNames(self.argument(params, "context"), self.argument(params, "queryName"))
        with_query = not self.option(params, "no-query")

        project = Project()
        project.add(self.create_interface(names, with_query))
        if with_query:
            project.add(self.create_query(names))
        project.add(self.create_result(names))
        project.add(self.create_implementation(names, with_query))
        project.add(self.create_test(names))
        return project

    @staticmethod
    def create_interface(names: QueryNames, with_query: bool) -> Blueprint:
        def structure(interface: InterfaceType) -> InterfaceType:
            interface.add_attribute(BIND_ATTRIBUTE, [ClassReference(names.implementation)])
            handle = interface.add_method("handle")
            if with_query:
                handle.add_parameter("query").set_type(names.query_class)
            handle.set_return_type(names.result_class)
            handle.set_comment("Execute the query and return the result")
            return interface

        return Blueprint.for_interface(names.handler_interface, structure)

    @staticmethod
    def create_query(names: QueryNames) -> Blueprint:
        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly()
            constructor = cls.add_method("__construct")
            constructor.set_comment("Query constructor with parameters")
            constructor.set_body("// TODO: Add query parameters as needed")
            constructor.add_promoted_parameter("id").set_type("int").set_comment("Entity ID")
            return cls

        return Blueprint.for_class(names.query_class, structure)

    @staticmethod
    def create_result(names: QueryNames) -> Blueprint:
        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly()
            constructor = cls.add_method("__construct")
            constructor.set_comment("Result constructor with data")
            constructor.set_body("// TODO: Add result properties as needed")
            constructor.add_promoted_parameter("data").set_type("mixed").set_comment("Query result data")
            return cls

        return Blueprint.for_class(names.result_class, structure)

    @staticmethod
    def create_implementation(names: QueryNames, with_query: bool) -> Blueprint:
        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly().add_implement(names.handler_interface)
            constructor = cls.add_method("__construct")
            constructor.add_promoted_parameter("connection").set_type(CONNECTION_INTERFACE).set_private()
            handle = cls.add_method("handle")
            if with_query:
                handle.add_parameter("query").set_type(names.query_class)
            handle.set_return_type(names.result_class)
            handle.set_comment("@inheritdoc")
            handle.set_body("// TODO: Implement query logic")
            return cls

        return Blueprint.for_class(names.implementation, structure)

    @staticmethod
    def create_test(names: QueryNames) -> Blueprint:
        implementation = names.implementation.rpartition("\\")[2]

        def structure(cls: ClassType) -> ClassType:
            cls.set_extends(TEST_CASE)
            cls.add_trait(REFRESH_DATABASE)
            cls.set_properties([Property("queryHandler").set_type(names.implementation).set_private()])
            set_up = cls.add_method("setUp").set_return_type("void")
            set_up.set_body(f"parent::setUp();\n\n$this->queryHandler = $this->app->make({implementation}::class);")
            cls.add_method("testHandleReturnsExpectedResult").set_return_type("void").set_body(
                "// TODO: Implement test for successful query execution"
            )
            cls.add_method("testHandleWithInvalidData").set_return_type("void").set_body(
                "// TODO: Implement test for edge cases"
            )
            return cls

        return Blueprint.for_class(names.implementation_test, structure)


__all__ = ["CqrsQueryCommand", "QueryNames"]
