"""Kalendis API client and route-handler generator, served over MCP."""

from .codegen import (
    generate_backend_client,
    generate_express_routes,
    generate_fastify_routes,
    generate_frontend_client,
    generate_nestjs_module,
    generate_nextjs_routes,
    generate_routes,
    render_method,
)
from .dispatch import call_tool, list_endpoints
from .errors import CatalogError, GenerationError, InvalidArgument, UnknownOperation
from .loader import load_catalog
from .schema_parser import project_type

__version__ = "1.0.0"
