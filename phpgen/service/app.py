"""FastAPI application exposing generator commands as tools."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..commands import Command, discover_commands
from ..config import ConfigError, PhpGenConfig, load_config
from ..core.generator import Generator
from ..core.project import BatchBuildError
from ..logging import get_logger
from .tools import to_command_params, tool_name, tool_schema, validate_parameters

logger = get_logger("service")


class HealthResponse(BaseModel):
    status: str


class ToolDescription(BaseModel):
    name: str
    command: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")

    model_config = {"populate_by_name": True}


class ToolRequest(BaseModel):
    parameters: Dict[str, Any] = Field(default_factory=dict)


class PreviewModel(BaseModel):
    file_path: str
    class_name: str
    namespace: str
    content: str


class ToolResponse(BaseModel):
    command: str
    dry_run: bool
    files: List[str] = Field(default_factory=list)
    previews: List[PreviewModel] = Field(default_factory=list)


def _default_config() -> PhpGenConfig:
    return load_config(Path.cwd())


def create_app(
    config_factory: Callable[[], PhpGenConfig] = _default_config,
) -> FastAPI:
    """Create the FastAPI application exposing phpgen commands."""

    app = FastAPI(title="PhpGen Service", version="1.0.0")

    async def get_config() -> PhpGenConfig:
        # Re-read per request so edits to .phpgen.yml apply without a restart.
        return config_factory()

    def _find_command(config: PhpGenConfig, name: str) -> Command:
        for command in discover_commands(config.commands):
            if name in (command.name, tool_name(command)):
                return command
        raise HTTPException(status_code=404, detail=f"Unknown tool '{name}'")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/tools", response_model=List[ToolDescription], response_model_by_alias=True)
    async def list_tools(config: PhpGenConfig = Depends(get_config)) -> List[ToolDescription]:
        return [ToolDescription(**tool_schema(command)) for command in discover_commands(config.commands)]

    @app.post("/tools/{name}", response_model=ToolResponse)
    async def run_tool(
        name: str,
        payload: ToolRequest,
        config: PhpGenConfig = Depends(get_config),
    ) -> ToolResponse:
        command = _find_command(config, name)
        parameters = validate_parameters(command, payload.parameters)
        dry_run = bool(parameters.dry_run)

        def _run() -> ToolResponse:
            project = command.handle(to_command_params(command, parameters))
            generator = Generator(config)
            if dry_run:
                previews = [PreviewModel(**p.as_dict()) for p in generator.preview(project)]
                return ToolResponse(command=command.name, dry_run=True, previews=previews)
            files = [str(path) for path in generator.generate(project)]
            return ToolResponse(command=command.name, dry_run=False, files=files)

        logger.info("Running tool %s", command.name)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(BatchBuildError)
    async def batch_error_handler(_: Any, exc: BatchBuildError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "key": exc.key})

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    config_path: Optional[Union[str, Path]] = None,
) -> None:  # pragma: no cover - integration path
    root = Path(config_path) if config_path else Path.cwd()
    app = create_app(lambda: load_config(root))
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
