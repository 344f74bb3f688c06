"""Generation-time configuration.

Base URLs per target environment, the environment variable names baked into
the emitted code, and the default import paths for the shared types module.
"""

from __future__ import annotations

import os

from .errors import InvalidArgument

# Read at generation time (development default) and at runtime by the
# emitted client.
API_URL_ENV = "KALENDIS_API_URL"

# Read by the emitted route modules when they construct the client.
API_KEY_ENV = "KALENDIS_API_KEY"

LOG_LEVEL_ENV = "KALENDIS_MCP_LOG_LEVEL"

SANDBOX_URL = "https://sandbox.api.kalendis.dev"

BASE_URLS: dict[str, str] = {
    "production": "https://api.kalendis.dev",
    "staging": "https://dev-303703761.us-central1.run.app",
    "development": SANDBOX_URL,
}

ENVIRONMENTS: tuple[str, ...] = tuple(BASE_URLS)
DEFAULT_ENVIRONMENT = "production"

FRAMEWORKS: tuple[str, ...] = ("nextjs", "express", "fastify", "nestjs")

DEFAULT_TYPES_IMPORT_PATH = "../types"
NEXTJS_TYPES_IMPORT_PATH = "@/lib/types"
NESTJS_TYPES_IMPORT_PATH = "@/types"

# Failure status for every generated route handler
HANDLER_ERROR_STATUS = 500


def resolve_environment(environment: str | None) -> str:
    """Validate an environment name, defaulting to production."""
    if environment is None or environment == "":
        return DEFAULT_ENVIRONMENT
    if environment not in BASE_URLS:
        allowed = ", ".join(ENVIRONMENTS)
        raise InvalidArgument(f"Valid environment is required ({allowed}); got {environment!r}")
    return environment


def resolve_base_url(environment: str | None = None) -> str:
    """Return the default base URL baked into a generated client.

    Only the development default can be overridden, via KALENDIS_API_URL.
    """
    env = resolve_environment(environment)
    if env == "development":
        return os.environ.get(API_URL_ENV) or BASE_URLS["development"]
    return BASE_URLS[env]


def resolve_framework(framework: str | None) -> str:
    """Validate a route framework name; there is no default."""
    if framework not in FRAMEWORKS:
        allowed = ", ".join(FRAMEWORKS)
        if not framework:
            raise InvalidArgument(f"Valid framework is required ({allowed})")
        raise InvalidArgument(f"Unsupported framework {framework!r}; expected one of: {allowed}")
    return framework
