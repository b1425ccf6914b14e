"""command:generate, the write side of a Laravel CQRS layout."""

from __future__ import annotations

from typing import Any, Mapping

from ..blueprint import Blueprint
from ..core.project import Project
from ..elements import ClassReference, ClassType, InterfaceType, Property
from .base import ArgumentSpec, Command, OptionSpec
from .cqrs_query import BIND_ATTRIBUTE, CONNECTION_INTERFACE, REFRESH_DATABASE, TEST_CASE

_INSERT_BODY = """\
// TODO: Implement command logic (INSERT/UPDATE/DELETE)
// Example for INSERT:
// $this->connection->table('users')->insert([
//     'name' => $command->name,
//     'email' => $command->email,
// ]);
// return (int) $this->connection->getPdo()->lastInsertId();

// For transactions:
// return $this->connection->transaction(function () use ($command) {
//     $this->connection->table('users')->insert([...]);
//     return (int) $this->connection->getPdo()->lastInsertId();
// });

throw new \\RuntimeException('Not implemented');"""

_UPDATE_BODY = """\
// TODO: Implement command logic (INSERT/UPDATE/DELETE)
// Example for UPDATE/DELETE:
// $this->connection->table('users')
//     ->where('id', $command->id)
//     ->update(['name' => $command->name]);

// For transactions:
// $this->connection->transaction(function () use ($command) {
//     $this->connection->table('users')->where(...)->update([...]);
// });

throw new \\RuntimeException('Not implemented');"""


class CommandNames:
    """Fully-qualified names of every artifact generated for one command."""

    def __init__(self, context: str, command: str) -> None:
        self.context = context
        self.command = command

    @property
    def handler_interface(self) -> str:
        return f"App\\Contracts\\Command\\{self.context}\\{self.command}CommandHandler"

    @property
    def command_class(self) -> str:
        return f"App\\Contracts\\Command\\{self.context}\\{self.command}Command"

    @property
    def implementation(self) -> str:
        return f"App\\Infrastructure\\Command\\{self.context}\\{self.command}CommandHandlerImplementation"

    @property
    def implementation_test(self) -> str:
        return (
            f"Tests\\Feature\\Infrastructure\\Command\\{self.context}\\"
            f"{self.command}CommandHandlerImplementationTest"
        )


class CqrsCommandCommand(Command):
    name = "command:generate"
    description = "Generate Laravel CQRS Command interface, implementation, and test"
    arguments = (
        ArgumentSpec("context", "Context/domain name (e.g., User, Product, Order)"),
        ArgumentSpec("commandName", "Command name (e.g., CreateUser, UpdateProduct, DeleteOrder)"),
    )
    options = (
        OptionSpec("no-return-id", "Do not return ID (void return type)"),
        OptionSpec("no-command", "Skip generating the Command class"),
    )

    def handle(self, params: Mapping[str, Any]) -> Project:
        names = CommandNames(self.argument(params, "context"), self.argument(params, "commandName"))
        with_command = not self.option(params, "no-command")
        return_type = "void" if self.option(params, "no-return-id") else "int"

        project = Project()
        project.add(self.create_interface(names, with_command, return_type))
        if with_command:
            project.add(self.create_command(names))
        project.add(self.create_implementation(names, with_command, return_type))
        project.add(self.create_test(names, return_type))
        return project

    @staticmethod
    def create_interface(names: CommandNames, with_command: bool, return_type: str) -> Blueprint:
        def structure(interface: InterfaceType) -> InterfaceType:
            interface.add_attribute(BIND_ATTRIBUTE, [ClassReference(names.implementation)])
            handle = interface.add_method("handle")
            if with_command:
                handle.add_parameter("command").set_type(names.command_class)
            handle.set_return_type(return_type)
            handle.set_comment(
                "Execute the command and return the generated ID"
                if return_type == "int"
                else "Execute the command"
            )
            return interface

        return Blueprint.for_interface(names.handler_interface, structure)

    @staticmethod
    def create_command(names: CommandNames) -> Blueprint:
        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly()
            constructor = cls.add_method("__construct").set_body("// TODO: Add command parameters as needed")
            constructor.add_promoted_parameter("id").set_type("int")
            return cls

        return Blueprint.for_class(names.command_class, structure)

    @staticmethod
    def create_implementation(names: CommandNames, with_command: bool, return_type: str) -> Blueprint:
        def structure(cls: ClassType) -> ClassType:
            cls.set_final().set_readonly().add_implement(names.handler_interface)
            constructor = cls.add_method("__construct")
            constructor.add_promoted_parameter("connection").set_type(CONNECTION_INTERFACE).set_private()
            handle = cls.add_method("handle")
            if with_command:
                handle.add_parameter("command").set_type(names.command_class)
            handle.set_return_type(return_type)
            handle.set_comment("@inheritdoc")
            handle.set_body(_INSERT_BODY if return_type == "int" else _UPDATE_BODY)
            return cls

        return Blueprint.for_class(names.implementation, structure)

    @staticmethod
    def create_test(names: CommandNames, return_type: str) -> Blueprint:
        implementation = names.implementation.rpartition("\\")[2]
        success_body = (
            "// TODO: Implement test for successful command execution with ID return"
            if return_type == "int"
            else "// TODO: Implement test for successful command execution"
        )

        def structure(cls: ClassType) -> ClassType:
            cls.set_extends(TEST_CASE)
            cls.add_trait(REFRESH_DATABASE)
            cls.set_properties([Property("commandHandler").set_type(names.implementation).set_private()])
            set_up = cls.add_method("setUp").set_return_type("void")
            set_up.set_body(
                f"parent::setUp();\n\n$this->commandHandler = $this->app->make({implementation}::class);"
            )
            cls.add_method("testHandleExecutesSuccessfully").set_return_type("void").set_body(success_body)
            cls.add_method("testHandleWithInvalidData").set_return_type("void").set_body(
                "// TODO: Implement test for edge cases"
            )
            return cls

        return Blueprint.for_class(names.implementation_test, structure)


__all__ = ["CommandNames", "CqrsCommandCommand"]
