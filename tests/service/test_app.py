"""Tests for the FastAPI tool service."""

from __future__ import annotations

from typing import Any, Mapping

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

import phpgen.commands as commands_module
from phpgen.commands import Command, discover_commands
from phpgen.config import PhpGenConfig
from phpgen.core.project import Project
from phpgen.service.app import create_app
from phpgen.service.tools import camel_case, request_model, to_command_params, validate_parameters
from tests._fixtures.workspace import Workspace


@pytest.fixture
def client(laravel_config: PhpGenConfig) -> TestClient:
    return TestClient(create_app(lambda: laravel_config))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_tools_describe_every_command(client: TestClient) -> None:
    response = client.get("/tools")
    assert response.status_code == 200
    tools = {tool["name"]: tool for tool in response.json()}

    assert set(tools) >= {
        "phpgen_class_create",
        "phpgen_dto_create",
        "phpgen_query_generate",
        "phpgen_command_generate",
    }
    schema = tools["phpgen_dto_create"]["inputSchema"]
    assert schema["required"] == ["fullyQualifiedName"]
    assert schema["properties"]["properties"] == {
        "type": "string",
        "description": "Properties (format: name:type,email:string)",
        "default": "id:int",
    }
    assert schema["properties"]["dryRun"]["type"] == "boolean"
    query = tools["phpgen_query_generate"]["inputSchema"]
    assert query["required"] == ["context", "queryName"]
    assert query["properties"]["noQuery"]["type"] == "boolean"


def test_run_tool_writes_files(client: TestClient, workspace: Workspace) -> None:
    response = client.post(
        "/tools/class:create",
        json={"parameters": {"fullyQualifiedName": "App\\Services\\Mailer"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["command"] == "class:create"
    assert data["dry_run"] is False
    assert data["files"][0].endswith("Mailer.php")
    assert (workspace.root / "app" / "Services" / "Mailer.php").exists()


def test_run_tool_dry_run_returns_previews(client: TestClient, workspace: Workspace) -> None:
    response = client.post(
        "/tools/phpgen_dto_create",
        json={
            "parameters": {
                "fullyQualifiedName": "App\\DTOs\\UserDto",
                "properties": "id:int,email:string",
                "dryRun": True,
            }
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["dry_run"] is True
    assert data["files"] == []
    [preview] = data["previews"]
    assert preview["class_name"] == "UserDto"
    assert preview["namespace"] == "App\\DTOs"
    assert "public string $email," in preview["content"]
    assert not (workspace.root / "app").exists()


def test_unknown_tool_is_404(client: TestClient) -> None:
    response = client.post("/tools/phpgen_nope", json={"parameters": {}})
    assert response.status_code == 404


@pytest.mark.parametrize(
    "parameters, message",
    [
        (
            {},
            "Required argument 'context' is missing; Required argument 'queryName' is missing",
        ),
        ({"context": "User", "queryName": "Find", "extra": 1}, "Unknown parameter 'extra'"),
        (
            {"context": "User", "queryName": "Find", "noQuery": "yes"},
            "Parameter 'noQuery' is invalid: Input should be a valid boolean",
        ),
        (
            {"context": 3, "queryName": "Find"},
            "Parameter 'context' is invalid: Input should be a valid string",
        ),
    ],
)
def test_invalid_parameters_are_400(client: TestClient, parameters: dict, message: str) -> None:
    response = client.post("/tools/query:generate", json={"parameters": parameters})

    assert response.status_code == 400
    assert response.json()["detail"] == message


def test_batch_failures_are_422(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    class _BrokenCommand(Command):
        name = "broken:create"
        description = "Always fails"

        def handle(self, params: Mapping[str, Any]) -> Project:
            return Project().add_factory("App\\Broken", lambda: None)

    class _EntryPoint:
        name = "broken:create"

        @staticmethod
        def load() -> type:
            return _BrokenCommand

    monkeypatch.setattr(commands_module, "_iter_entry_points", lambda: [_EntryPoint()])

    response = client.post("/tools/broken:create", json={"parameters": {}})

    assert response.status_code == 422
    assert response.json()["key"] == "App\\Broken"


def test_camel_case() -> None:
    assert camel_case("fully-qualified-name") == "fullyQualifiedName"
    assert camel_case("queryName") == "queryName"
    assert camel_case("no-return-id") == "noReturnId"


def test_validated_parameters_map_back_to_command_names() -> None:
    [command] = discover_commands(["dto:create"])

    parameters = validate_parameters(command, {"fullyQualifiedName": "App\\UserDto", "dryRun": True})

    assert parameters.dry_run is True
    assert to_command_params(command, parameters) == {
        "fully-qualified-name": "App\\UserDto",
        "properties": "id:int",
    }


def test_request_model_is_strict_about_flags() -> None:
    [command] = discover_commands(["command:generate"])
    model = request_model(command)

    with pytest.raises(ValidationError):
        model.model_validate({"context": "Order", "commandName": "Create", "noReturnId": 1})
    assert model.model_validate({"context": "Order", "commandName": "Create"}).no_return_id is False
