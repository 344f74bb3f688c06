"""Shared fixtures for the Kalendis generator tests.

The bundled catalog is loaded once per session. Validation tests get a fresh
deep copy of the raw endpoint table so they can break it freely.
"""

from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from kalendis_mcp.loader import load_catalog, load_spec


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def catalog():
    """The bundled, validated endpoint catalog."""
    return load_catalog()


@pytest.fixture
def raw_catalog() -> dict[str, Any]:
    """Mutable copy of spec/endpoints.json for negative tests."""
    return copy.deepcopy(load_spec())


# ---------------------------------------------------------------------------
# Tool accessor
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def tool() -> Callable[[str], Callable[..., str]]:
    """Return a callable that looks up a server tool function by name.

    Usage in tests::

        text = tool("list_endpoints")()
    """
    from kalendis_mcp import server

    def _get_tool(name: str):
        obj = getattr(server, name, None)
        if obj is None:
            pytest.fail(f"Tool {name!r} not found in kalendis_mcp.server")
        # @mcp.tool() wraps functions in FunctionTool; unwrap to get the
        # plain callable.
        return getattr(obj, "fn", obj)
    return _get_tool
