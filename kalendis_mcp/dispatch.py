"""Tool table and dispatcher for the generator commands.

Each tool maps camelCase arguments onto one codegen function and returns the
artifact as text. Multi-file artifacts are joined with ``// File: <path>``
headers. When ``outputDir`` is given the files are also written to disk,
never overwriting an existing file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from . import codegen
from .errors import InvalidArgument
from .loader import Catalog, Endpoint, load_catalog
from .writer import write_files

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "\n\n// ========================================\n\n"

# File names used when a single-file artifact is written to outputDir
DEFAULT_FILENAMES = {
    "generate-backend-client": "kalendisClient.ts",
    "generate-frontend-client": "api.ts",
    "generate-api-routes": "routes.ts",
}


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    arguments: tuple[str, ...] = ()
    required: tuple[str, ...] = ()


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "generate-backend-client",
            "Generate a TypeScript client that calls Kalendis API directly with x-api-key authentication",
            ("environment", "typesImportPath", "outputDir"),
        ),
        ToolSpec(
            "generate-frontend-client",
            "Generate a TypeScript client for frontend apps that calls your backend API endpoints",
            ("typesImportPath", "outputDir"),
        ),
        ToolSpec(
            "generate-api-routes",
            "Generate API route handlers for Next.js, Express, Fastify or NestJS that use the Kalendis backend client",
            ("framework", "typesImportPath", "outputDir"),
        ),
        ToolSpec(
            "list-endpoints",
            "List all available Kalendis API endpoints with descriptions",
        ),
        ToolSpec(
            "describe-endpoint",
            "Describe one Kalendis API endpoint by operation name",
            ("name",),
            required=("name",),
        ),
    )
}


# ---------------------------------------------------------------------------
# Endpoint listing
# ---------------------------------------------------------------------------

def endpoint_summary(endpoint: Endpoint) -> dict[str, Any]:
    return {
        "name": endpoint.name,
        "method": endpoint.method,
        "path": endpoint.path,
        "description": endpoint.description,
        "params": list(endpoint.params or ()),
        "body": list(endpoint.body or ()),
        "response": endpoint.response.raw,
        "response_description": endpoint.response.description,
    }


def list_endpoints(catalog: Catalog | None = None) -> list[dict[str, Any]]:
    """Structured listing of every endpoint, in catalog order."""
    catalog = catalog if catalog is not None else load_catalog()
    return [endpoint_summary(endpoint) for endpoint in catalog.values()]


def format_endpoint(summary: Mapping[str, Any]) -> str:
    lines = [
        f"{summary['name']}:",
        f"  {summary['method']} {summary['path']}",
        f"  {summary['description']}",
    ]
    if summary["params"]:
        lines.append("    Query params: " + ", ".join(summary["params"]))
    if summary["body"]:
        lines.append("    Body params: " + ", ".join(summary["body"]))
    lines.append(f"    Response: {summary['response']} - {summary['response_description']}")
    return "\n".join(lines)


def format_endpoint_list(summaries: list[dict[str, Any]]) -> str:
    body = "\n\n".join(format_endpoint(s) for s in summaries)
    return f"Kalendis API Endpoints:\n\n{body}"


# ---------------------------------------------------------------------------
# Artifacts
# ---------------------------------------------------------------------------

def join_files(files: Mapping[str, str]) -> str:
    """Join a multi-file artifact into one text block."""
    return FILE_SEPARATOR.join(f"// File: {path}\n{content}" for path, content in files.items())


def render_artifact(
    tool: str,
    arguments: Mapping[str, Any],
    catalog: Catalog | None = None,
) -> str | dict[str, str]:
    """Run the codegen function behind a generate-* tool."""
    types_path = arguments.get("typesImportPath") or None
    if tool == "generate-backend-client":
        return codegen.generate_backend_client(
            environment=arguments.get("environment"),
            types_import_path=types_path,
            catalog=catalog,
        )
    if tool == "generate-frontend-client":
        return codegen.generate_frontend_client(types_import_path=types_path, catalog=catalog)
    if tool == "generate-api-routes":
        return codegen.generate_routes(
            arguments.get("framework"),
            types_import_path=types_path,
            catalog=catalog,
        )
    raise InvalidArgument(f"Unknown tool: {tool}")


def artifact_files(tool: str, artifact: str | dict[str, str]) -> dict[str, str]:
    """Relative path -> content for writing an artifact to disk."""
    if isinstance(artifact, dict):
        return dict(artifact)
    return {DEFAULT_FILENAMES[tool]: artifact}


def _write_report(output_dir: str, written: list[Path], skipped: list[Path]) -> str:
    lines = [f"Output directory: {output_dir}"]
    for path in written:
        lines.append(f"  wrote {path}")
    for path in skipped:
        lines.append(f"  skipped {path} (already exists)")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

def _check_arguments(spec: ToolSpec, arguments: Mapping[str, Any]) -> None:
    unknown = sorted(set(arguments) - set(spec.arguments))
    if unknown:
        raise InvalidArgument(f"{spec.name} does not accept: {', '.join(unknown)}")
    for name in spec.arguments:
        value = arguments.get(name)
        if value is not None and not isinstance(value, str):
            raise InvalidArgument(f"{name} must be a string")
    for name in spec.required:
        if not arguments.get(name):
            raise InvalidArgument(f"{name} is required")


def _decline(path: Path) -> bool:
    return False


def call_tool(
    name: str,
    arguments: Mapping[str, Any] | None = None,
    catalog: Catalog | None = None,
) -> str:
    """Run one tool and return its text result.

    Raises:
        InvalidArgument: unknown tool, unexpected argument, or a bad
            environment/framework value.
        UnknownOperation: describe-endpoint with a name not in the catalog.
    """
    spec = TOOLS.get(name)
    if spec is None:
        raise InvalidArgument(f"Unknown tool: {name}")
    arguments = {k: v for k, v in (arguments or {}).items() if v is not None}
    _check_arguments(spec, arguments)
    logger.info("Calling tool %s", name)

    catalog = catalog if catalog is not None else load_catalog()

    if name == "list-endpoints":
        return format_endpoint_list(list_endpoints(catalog))
    if name == "describe-endpoint":
        return format_endpoint(endpoint_summary(catalog[arguments["name"]]))

    artifact = render_artifact(name, arguments, catalog)
    text = join_files(artifact) if isinstance(artifact, dict) else artifact

    output_dir = arguments.get("outputDir")
    if output_dir:
        written, skipped = write_files(
            Path(output_dir), artifact_files(name, artifact), confirm=_decline
        )
        logger.info("Wrote %d file(s), skipped %d under %s", len(written), len(skipped), output_dir)
        text = f"{text}\n\n{_write_report(output_dir, written, skipped)}"
    return text

