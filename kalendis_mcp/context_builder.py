"""Build Jinja2 template contexts from the endpoint catalog.

Selects the client method shape for each endpoint, describes each route
handler as a framework-neutral RouteBinding, and groups bindings into
Next.js route files. Every builder is a pure fold over the catalog in
catalog order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable

from .config import HANDLER_ERROR_STATUS
from .errors import CatalogError
from .loader import Catalog, Endpoint, FieldSpec
from .naming import colon_path, humanize, nest_route, nextjs_route_file, success_status
from .schema_parser import Scalar, generate_body_type, generate_param_type, project_type


class MethodShape(enum.Enum):
    QUERY_OPTIONAL = "query_optional"  # GET with params
    QUERY_REQUIRED = "query_required"  # DELETE with params, no default
    JSON_BODY = "json_body"            # POST/PUT with a JSON payload
    NO_ARGS = "no_args"                # neither params nor body


def select_shape(endpoint: Endpoint) -> MethodShape:
    """Pick the single method shape for an endpoint."""
    has_params = endpoint.params is not None
    has_body = endpoint.body is not None
    if has_params and has_body:
        raise CatalogError(endpoint.name, "descriptor carries both params and body")

    if has_params:
        if endpoint.method == "GET":
            return MethodShape.QUERY_OPTIONAL
        if endpoint.method == "DELETE":
            return MethodShape.QUERY_REQUIRED
        raise CatalogError(endpoint.name, f"{endpoint.method} endpoints cannot take query params")
    if has_body:
        if endpoint.method in ("POST", "PUT"):
            return MethodShape.JSON_BODY
        raise CatalogError(endpoint.name, f"{endpoint.method} endpoints cannot take a body")
    return MethodShape.NO_ARGS


def signature_fields(endpoint: Endpoint, shape: MethodShape) -> list[dict[str, str]]:
    """Typed members of the params/data object a client method accepts."""
    fields = []
    for name, spec in endpoint.fields.items():
        if shape is MethodShape.QUERY_OPTIONAL:
            marker, ts_type = "?", generate_param_type(spec.kind, spec.required)
        elif shape is MethodShape.QUERY_REQUIRED:
            marker, ts_type = "", generate_param_type(spec.kind, spec.required)
        else:
            marker = "" if spec.required else "?"
            ts_type = generate_body_type(spec.kind, spec.required)
        fields.append({"name": name, "marker": marker, "type": ts_type})
    return fields


def build_method_context(endpoint: Endpoint) -> dict[str, Any]:
    """Context for templates/client/method.ts.j2."""
    shape = select_shape(endpoint)
    return {
        "name": endpoint.name,
        "shape": shape.value,
        "method": endpoint.method,
        "path": endpoint.path,
        "description": endpoint.description,
        "return_type": project_type(endpoint.response.type),
        "fields": signature_fields(endpoint, shape),
    }


# ---------------------------------------------------------------------------
# Proxy client
# ---------------------------------------------------------------------------

def _argument_name(shape: MethodShape) -> str | None:
    if shape in (MethodShape.QUERY_OPTIONAL, MethodShape.QUERY_REQUIRED):
        return "params"
    if shape is MethodShape.JSON_BODY:
        return "data"
    return None


def proxy_url_expression(endpoint: Endpoint, shape: MethodShape) -> str:
    """TypeScript expression for the same-origin URL of an endpoint's route."""
    arg = _argument_name(shape)
    segments = []
    path_fields = []
    for segment in endpoint.route.split("/"):
        if segment.startswith("{") and segment.endswith("}"):
            placeholder = segment[1:-1]
            target = endpoint.route_params.get(placeholder, placeholder)
            path_fields.append(target)
            segments.append(f"${{encodeURIComponent(String({arg}.{target}))}}")
        else:
            segments.append(segment)
    url = "/".join(segments)
    url = f"`{url}`" if path_fields else f"'{url}'"

    if shape in (MethodShape.QUERY_OPTIONAL, MethodShape.QUERY_REQUIRED):
        if path_fields:
            excluded = ", ".join(f"'{name}'" for name in path_fields)
            return f"{url} + buildQuery({arg}, [{excluded}])"
        return f"{url} + buildQuery({arg})"
    return url


def proxy_signature_fields(endpoint: Endpoint, shape: MethodShape) -> list[dict[str, str]]:
    """Members of a proxy function argument; required query params stay required."""
    fields = signature_fields(endpoint, shape)
    if shape is MethodShape.QUERY_OPTIONAL:
        for field in fields:
            field["marker"] = "" if endpoint.fields[field["name"]].required else "?"
    return fields


def build_proxy_function_context(endpoint: Endpoint) -> dict[str, Any]:
    shape = select_shape(endpoint)
    fields = proxy_signature_fields(endpoint, shape)
    return {
        "name": endpoint.name,
        "shape": shape.value,
        "method": endpoint.method,
        "argument": _argument_name(shape),
        "fields": fields,
        # An empty default only when every member may be omitted
        "default_argument": shape is MethodShape.QUERY_OPTIONAL and all(f["marker"] for f in fields),
        "return_type": project_type(endpoint.response.type),
        "url": proxy_url_expression(endpoint, shape),
        "failure": f"Failed to {humanize(endpoint.name)}",
        "localize": endpoint.localize,
    }


# ---------------------------------------------------------------------------
# Route bindings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoundField:
    """One client argument pulled from the incoming request."""

    name: str      # field name on the client call
    source: str    # "path" or "query"
    key: str       # placeholder or query-string key
    kind: str      # string | number | boolean
    required: bool

    @property
    def expression(self) -> str:
        """TypeScript expression extracting this value inside a handler."""
        raw = f"{self.source}.{self.key}"
        if self.required:
            value = f"requireParam({raw}, '{self.key}')"
            if self.kind == "number":
                return f"Number({value})"
            if self.kind == "boolean":
                return f"{value} === 'true'"
            return value
        value = f"optionalParam({raw})"
        if self.kind == "number":
            return f"toNumber({value})"
        if self.kind == "boolean":
            return f"toBoolean({value})"
        return value


@dataclass(frozen=True)
class RouteBinding:
    """extract -> call -> wrap, independent of any framework."""

    operation: str
    method: str
    route: str
    fields: tuple[BoundField, ...]
    has_body: bool
    takes_argument: bool
    success_status: int
    result_type: str

    @property
    def uses_path(self) -> bool:
        return any(f.source == "path" for f in self.fields)

    @property
    def uses_query(self) -> bool:
        return any(f.source == "query" for f in self.fields)

    @property
    def sources(self) -> list[str]:
        """Request parts the handler reads, in path, query, body order."""
        used = []
        if self.uses_path:
            used.append("path")
        if self.uses_query:
            used.append("query")
        if self.has_body:
            used.append("body")
        return used

    @property
    def verb(self) -> str:
        return self.method.lower()

    @property
    def colon_route(self) -> str:
        return colon_path(self.route)

    @property
    def nest_route(self) -> str:
        return nest_route(self.route)

    @property
    def nest_decorator(self) -> str:
        return self.method.capitalize()


def _field_kind(spec: FieldSpec) -> str:
    if isinstance(spec.kind, Scalar) and spec.kind.name in ("number", "boolean"):
        return spec.kind.name
    return "string"


def build_binding(endpoint: Endpoint) -> RouteBinding:
    """Describe the route handler for one endpoint."""
    shape = select_shape(endpoint)
    path_keys = {
        endpoint.route_params.get(placeholder, placeholder): placeholder
        for placeholder in endpoint.route_placeholders
    }

    fields: list[BoundField] = []
    if shape is MethodShape.JSON_BODY:
        # Path values override whatever the body carries for the same field
        for name, placeholder in path_keys.items():
            spec = endpoint.fields[name]
            fields.append(BoundField(name, "path", placeholder, _field_kind(spec), True))
    else:
        for name, spec in endpoint.fields.items():
            if name in path_keys:
                fields.append(BoundField(name, "path", path_keys[name], _field_kind(spec), True))
            else:
                fields.append(BoundField(name, "query", name, _field_kind(spec), spec.required))

    return RouteBinding(
        operation=endpoint.name,
        method=endpoint.method,
        route=endpoint.route,
        fields=tuple(fields),
        has_body=shape is MethodShape.JSON_BODY,
        takes_argument=shape is not MethodShape.NO_ARGS,
        success_status=success_status(endpoint.name, endpoint.method),
        result_type=project_type(endpoint.response.type),
    )


@dataclass(frozen=True)
class RouteGroup:
    """Bindings served by the same route template (one Next.js file)."""

    route: str
    file: str
    bindings: tuple[RouteBinding, ...]


def group_routes(bindings: Iterable[RouteBinding]) -> list[RouteGroup]:
    """Group bindings by route, in order of first appearance."""
    grouped: dict[str, list[RouteBinding]] = {}
    for binding in bindings:
        grouped.setdefault(binding.route, []).append(binding)
    return [
        RouteGroup(route=route, file=nextjs_route_file(route), bindings=tuple(items))
        for route, items in grouped.items()
    ]


def _coercions(bindings: Iterable[RouteBinding]) -> dict[str, bool]:
    kinds = {(f.kind, f.required) for b in bindings for f in b.fields}
    return {
        "needs_to_number": ("number", False) in kinds,
        "needs_to_boolean": ("boolean", False) in kinds,
    }


# ---------------------------------------------------------------------------
# Artifact contexts
# ---------------------------------------------------------------------------

def build_client_context(catalog: Catalog, base_url: str, types_path: str) -> dict[str, Any]:
    return {
        "types_path": types_path,
        "base_url": base_url,
        "methods": [build_method_context(endpoint) for endpoint in catalog.values()],
    }


def build_proxy_context(catalog: Catalog, types_path: str) -> dict[str, Any]:
    functions = [build_proxy_function_context(endpoint) for endpoint in catalog.values()]
    return {
        "types_path": types_path,
        "functions": functions,
        "uses_localization": any(f["localize"] for f in functions),
    }


def build_routes_context(catalog: Catalog, types_path: str) -> dict[str, Any]:
    bindings = [build_binding(endpoint) for endpoint in catalog.values()]
    return {
        "types_path": types_path,
        "bindings": bindings,
        "groups": group_routes(bindings),
        "error_status": HANDLER_ERROR_STATUS,
        **_coercions(bindings),
    }
