"""Load and validate the Kalendis endpoint catalog.

Reads spec/endpoints.json into frozen Endpoint descriptors, parsing every
type expression once. A catalog that breaks an invariant is rejected here,
so the renderers never see an ambiguous descriptor.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .errors import CatalogError, UnknownOperation
from .naming import route_placeholders
from .schema_parser import SCALAR_KINDS, Scalar, TypeExpr, parse_type_expr

CATALOG_PATH = Path(__file__).parent / "spec" / "endpoints.json"

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
QUERY_METHODS = ("GET", "DELETE")
BODY_METHODS = ("POST", "PUT")

# Must be an identifier in Python and TypeScript alike
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: TypeExpr
    required: bool
    description: str = ""


@dataclass(frozen=True)
class ResponseSpec:
    type: TypeExpr
    raw: str
    description: str = ""


@dataclass(frozen=True)
class Endpoint:
    """One catalog entry: an API operation and the route that proxies it."""

    name: str
    path: str
    method: str
    description: str
    params: Mapping[str, FieldSpec] | None
    body: Mapping[str, FieldSpec] | None
    response: ResponseSpec
    headers: tuple[str, ...]
    route: str
    route_params: Mapping[str, str] = field(default_factory=dict)
    localize: bool = False

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        """Params or body fields, whichever this endpoint carries."""
        return self.params or self.body or {}

    @property
    def route_placeholders(self) -> list[str]:
        return route_placeholders(self.route)


class Catalog(Mapping[str, Endpoint]):
    """Read-only, insertion-ordered mapping of operation name -> Endpoint."""

    def __init__(self, endpoints: Mapping[str, Endpoint]) -> None:
        self._endpoints = MappingProxyType(dict(endpoints))

    def __getitem__(self, name: str) -> Endpoint:
        try:
            return self._endpoints[name]
        except KeyError:
            raise UnknownOperation(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._endpoints)

    def __len__(self) -> int:
        return len(self._endpoints)

    def __repr__(self) -> str:
        return f"Catalog({list(self._endpoints)!r})"


def load_spec(path: Path | None = None) -> dict[str, Any]:
    """Load the raw endpoint table from disk."""
    spec_file = path or CATALOG_PATH
    with open(spec_file, encoding="utf-8") as f:
        return json.load(f)


def _parse_fields(
    operation: str,
    section: str,
    raw: dict[str, Any],
    scalar_only: bool,
) -> Mapping[str, FieldSpec]:
    if not isinstance(raw, Mapping):
        raise CatalogError(operation, f"{section} must be a mapping of field name to descriptor")
    fields: dict[str, FieldSpec] = {}
    for name, spec in raw.items():
        if not _IDENTIFIER_RE.match(name):
            raise CatalogError(operation, f"{section} field {name!r} is not a valid identifier")
        if not isinstance(spec, Mapping) or "type" not in spec:
            raise CatalogError(operation, f"{section} field {name!r} has no type")
        kind = parse_type_expr(spec["type"])
        if scalar_only and not (isinstance(kind, Scalar) and kind.name in SCALAR_KINDS):
            raise CatalogError(
                operation,
                f"query param {name!r} must be string, number or boolean; got {spec['type']!r}",
            )
        fields[name] = FieldSpec(
            name=name,
            kind=kind,
            required=bool(spec.get("required", False)),
            description=spec.get("description", ""),
        )
    return MappingProxyType(fields)


def parse_endpoint(name: str, raw: dict[str, Any]) -> Endpoint:
    """Validate one raw catalog entry and build its descriptor."""
    if not _IDENTIFIER_RE.match(name):
        raise CatalogError(name, "operation name is not a valid identifier")

    for key in ("path", "route"):
        if not raw.get(key):
            raise CatalogError(name, f"{key} is missing")

    method = str(raw.get("method", "")).upper()
    if method not in HTTP_METHODS:
        raise CatalogError(name, f"unsupported HTTP method {raw.get('method')!r}")

    has_params = "params" in raw and raw["params"] is not None
    has_body = "body" in raw and raw["body"] is not None
    if has_params and has_body:
        raise CatalogError(name, "descriptor carries both params and body")
    if has_params and method not in QUERY_METHODS:
        raise CatalogError(name, f"{method} endpoints take a body, not query params")
    if has_body and method not in BODY_METHODS:
        raise CatalogError(name, f"{method} endpoints take query params, not a body")

    params = _parse_fields(name, "params", raw["params"], scalar_only=True) if has_params else None
    body = _parse_fields(name, "body", raw["body"], scalar_only=False) if has_body else None

    response_raw = raw.get("response") or {}
    if "type" not in response_raw:
        raise CatalogError(name, "response type is missing")

    endpoint = Endpoint(
        name=name,
        path=raw["path"],
        method=method,
        description=raw.get("description", ""),
        params=params,
        body=body,
        response=ResponseSpec(
            type=parse_type_expr(response_raw["type"]),
            raw=response_raw["type"],
            description=response_raw.get("description", ""),
        ),
        headers=tuple(raw.get("headers", ())),
        route=raw["route"],
        route_params=MappingProxyType(dict(raw.get("route_params", {}))),
        localize=bool(raw.get("localize", False)),
    )

    for placeholder in endpoint.route_placeholders:
        target = endpoint.route_params.get(placeholder, placeholder)
        if target not in endpoint.fields:
            raise CatalogError(
                name,
                f"route placeholder {{{placeholder}}} maps to unknown field {target!r}",
            )
    for placeholder in endpoint.route_params:
        if placeholder not in endpoint.route_placeholders:
            raise CatalogError(name, f"route_params names {placeholder!r}, which is not in {endpoint.route}")

    return endpoint


def load_catalog(raw: dict[str, Any] | None = None) -> Catalog:
    """Validate a raw endpoint table and return the catalog.

    With no argument, loads the bundled table (cached for the process).
    """
    if raw is None:
        return _bundled_catalog()

    endpoints: dict[str, Endpoint] = {}
    seen_paths: dict[str, str] = {}
    seen_routes: dict[tuple[str, str], str] = {}

    for name, entry in raw.items():
        endpoint = parse_endpoint(name, entry)

        if endpoint.path in seen_paths:
            raise CatalogError(name, f"path {endpoint.path} already used by {seen_paths[endpoint.path]}")
        seen_paths[endpoint.path] = name

        route_key = (endpoint.method, endpoint.route)
        if route_key in seen_routes:
            raise CatalogError(
                name,
                f"route {endpoint.method} {endpoint.route} already used by {seen_routes[route_key]}",
            )
        seen_routes[route_key] = name

        endpoints[name] = endpoint

    return Catalog(endpoints)


@lru_cache(maxsize=1)
def _bundled_catalog() -> Catalog:
    return load_catalog(load_spec())
