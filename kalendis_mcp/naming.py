"""Convert catalog routes and operation names to framework spellings.

Route templates use {placeholder} segments:

  /api/users/{id}

and render per framework as:

  Express / Fastify   /api/users/:id
  Next.js file        app/api/users/[id]/route.ts
  NestJS controller   @Controller('api') + 'users/:id'

Examples:
  addBooking              -> 201 on success (creates a resource)
  getBookingsByIds (POST) -> 200 on success (a lookup, not a create)
  getUsersByAccountId     -> "get users by account id"
"""

from __future__ import annotations

import re

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")

# Operations that create a resource answer 201
_CREATE_PREFIXES = ("add",)

NEST_CONTROLLER_PREFIX = "api"


def _camel_to_words(name: str) -> list[str]:
    """Split camelCase or PascalCase into lowercase words."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", name)
    s2 = re.sub(r"([a-z\d])([A-Z])", r"\1 \2", s1)
    return s2.lower().split()


def humanize(name: str) -> str:
    """getUsersByAccountId -> 'get users by account id'."""
    return " ".join(_camel_to_words(name))


def colon_path(route: str) -> str:
    """Express/Fastify spelling of a route template."""
    return _PLACEHOLDER_RE.sub(r":\1", route)


def nextjs_route_file(route: str) -> str:
    """Next.js app-router file serving a route template."""
    segments = [s for s in route.split("/") if s]
    dirs = [_PLACEHOLDER_RE.sub(r"[\1]", s) for s in segments]
    return "/".join(["app", *dirs, "route.ts"])


def nest_route(route: str) -> str:
    """Route relative to the NestJS controller prefix."""
    path = colon_path(route).lstrip("/")
    prefix = NEST_CONTROLLER_PREFIX + "/"
    if path == NEST_CONTROLLER_PREFIX:
        return ""
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


def success_status(name: str, method: str) -> int:
    """HTTP status a generated handler answers on success."""
    if method == "POST" and name.startswith(_CREATE_PREFIXES):
        return 201
    return 200


def route_placeholders(route: str) -> list[str]:
    return _PLACEHOLDER_RE.findall(route)
