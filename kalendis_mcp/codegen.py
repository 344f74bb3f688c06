"""Render Kalendis TypeScript artifacts from the endpoint catalog.

Takes contexts from context_builder and renders the Jinja2 templates under
templates/. Every function here is pure: the same catalog and options always
produce the same text, and nothing is written to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from . import config
from .context_builder import (
    build_client_context,
    build_method_context,
    build_proxy_context,
    build_routes_context,
)
from .loader import Catalog, Endpoint, load_catalog
from .naming import NEST_CONTROLLER_PREFIX

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

NESTJS_FILES = ("kalendis.controller.ts", "kalendis.service.ts", "kalendis.module.ts")

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=jinja2.StrictUndefined,
)


def _render(template_name: str, context: dict[str, Any]) -> str:
    return _env.get_template(template_name).render(**context)


def _catalog(catalog: Catalog | None) -> Catalog:
    return catalog if catalog is not None else load_catalog()


def render_method(endpoint: Endpoint) -> str:
    """Render one KalendisClient method, indented for the class body."""
    return _render("client/method.ts.j2", build_method_context(endpoint)).rstrip("\n")


def generate_backend_client(
    environment: str | None = None,
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> str:
    """Render the server-side KalendisClient class."""
    env_name = config.resolve_environment(environment)
    catalog = _catalog(catalog)
    context = build_client_context(
        catalog,
        base_url=config.resolve_base_url(env_name),
        types_path=types_import_path or config.DEFAULT_TYPES_IMPORT_PATH,
    )
    context["methods"] = [render_method(endpoint) for endpoint in catalog.values()]
    context["api_url_env"] = config.API_URL_ENV
    logger.debug("Rendering backend client for %s (%d methods)", env_name, len(catalog))
    return _render("client/backend.ts.j2", context)


def generate_frontend_client(
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> str:
    """Render the browser-side proxy client that calls the app's own routes."""
    catalog = _catalog(catalog)
    context = build_proxy_context(catalog, types_import_path or config.DEFAULT_TYPES_IMPORT_PATH)
    logger.debug("Rendering frontend client (%d functions)", len(context["functions"]))
    return _render("client/frontend.ts.j2", context)


def _routes_context(catalog: Catalog, types_path: str) -> dict[str, Any]:
    context = build_routes_context(catalog, types_path)
    context["api_key_env"] = config.API_KEY_ENV
    context["controller_prefix"] = NEST_CONTROLLER_PREFIX
    return context


def generate_nextjs_routes(
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> dict[str, str]:
    """Render one app-router route.ts per catalog route, keyed by file path."""
    context = _routes_context(
        _catalog(catalog), types_import_path or config.NEXTJS_TYPES_IMPORT_PATH
    )
    template = _env.get_template("routes/nextjs.ts.j2")
    files = {}
    for group in context["groups"]:
        files[group.file] = template.render(group=group, **context)
    logger.debug("Rendered %d Next.js route files", len(files))
    return files


def generate_express_routes(
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> str:
    """Render a single Express router module."""
    context = _routes_context(
        _catalog(catalog), types_import_path or config.DEFAULT_TYPES_IMPORT_PATH
    )
    return _render("routes/express.ts.j2", context)


def generate_fastify_routes(
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> str:
    """Render a single Fastify plugin module."""
    context = _routes_context(
        _catalog(catalog), types_import_path or config.DEFAULT_TYPES_IMPORT_PATH
    )
    return _render("routes/fastify.ts.j2", context)


def generate_nestjs_module(
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> dict[str, str]:
    """Render the NestJS controller, service and module files."""
    context = _routes_context(
        _catalog(catalog), types_import_path or config.NESTJS_TYPES_IMPORT_PATH
    )
    controller, service, module = NESTJS_FILES
    return {
        controller: _render("routes/nestjs/controller.ts.j2", context),
        service: _render("routes/nestjs/service.ts.j2", context),
        module: _render("routes/nestjs/module.ts.j2", context),
    }


_ROUTE_GENERATORS = {
    "nextjs": generate_nextjs_routes,
    "express": generate_express_routes,
    "fastify": generate_fastify_routes,
    "nestjs": generate_nestjs_module,
}


def generate_routes(
    framework: str | None,
    types_import_path: str | None = None,
    catalog: Catalog | None = None,
) -> str | dict[str, str]:
    """Render route handlers for a framework.

    Next.js and NestJS produce several files (a dict of path -> content);
    Express and Fastify produce a single module.
    """
    name = config.resolve_framework(framework)
    logger.debug("Rendering %s routes", name)
    return _ROUTE_GENERATORS[name](types_import_path=types_import_path, catalog=catalog)
