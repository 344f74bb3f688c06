"""FastMCP server exposing the Kalendis code generators as tools."""

from __future__ import annotations

import logging
from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .dispatch import TOOLS, call_tool
from .errors import GenerationError

logger = logging.getLogger(__name__)

mcp = FastMCP("kalendis-mcp")

Environment = Literal["production", "staging", "development"]
Framework = Literal["nextjs", "express", "fastify", "nestjs"]

TypesImportPath = Annotated[
    Optional[str],
    Field(description='Import path for types file (optional, defaults to "../types")'),
]
OutputDir = Annotated[
    Optional[str],
    Field(description="Directory to write the generated files into; existing files are kept"),
]


def _run(tool: str, arguments: dict | None = None) -> str:
    try:
        return call_tool(tool, arguments)
    except GenerationError as e:
        logger.warning("Tool %s failed: %s", tool, e)
        raise ToolError(str(e)) from e


@mcp.tool(name="generate-backend-client", description=TOOLS["generate-backend-client"].description)
def generate_backend_client(
    environment: Annotated[
        Optional[Environment],
        Field(description="Target environment (optional, defaults to production)"),
    ] = None,
    typesImportPath: TypesImportPath = None,
    outputDir: OutputDir = None,
) -> str:
    return _run("generate-backend-client", {
        "environment": environment,
        "typesImportPath": typesImportPath,
        "outputDir": outputDir,
    })


@mcp.tool(name="generate-frontend-client", description=TOOLS["generate-frontend-client"].description)
def generate_frontend_client(
    typesImportPath: TypesImportPath = None,
    outputDir: OutputDir = None,
) -> str:
    return _run("generate-frontend-client", {"typesImportPath": typesImportPath, "outputDir": outputDir})


@mcp.tool(name="generate-api-routes", description=TOOLS["generate-api-routes"].description)
def generate_api_routes(
    framework: Annotated[Framework, Field(description="Target framework")],
    typesImportPath: Annotated[
        Optional[str],
        Field(description="Import path for types file (optional, defaults per framework)"),
    ] = None,
    outputDir: OutputDir = None,
) -> str:
    return _run("generate-api-routes", {
        "framework": framework,
        "typesImportPath": typesImportPath,
        "outputDir": outputDir,
    })


@mcp.tool(name="list-endpoints", description=TOOLS["list-endpoints"].description)
def list_endpoints() -> str:
    return _run("list-endpoints")


@mcp.tool(name="describe-endpoint", description=TOOLS["describe-endpoint"].description)
def describe_endpoint(
    name: Annotated[str, Field(description="Operation name, e.g. getBooking")],
) -> str:
    return _run("describe-endpoint", {"name": name})


def run() -> None:
    """Serve the tools over stdio."""
    logger.info("Starting kalendis-mcp (%d tools)", len(TOOLS))
    mcp.run()
