"""Entry point: python -m kalendis_mcp

  serve                  run the MCP tool server on stdio (default)
  generate <tool> ...    render one artifact and print it, or write it with --out
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import config
from .dispatch import DEFAULT_FILENAMES, artifact_files, join_files, render_artifact
from .errors import GenerationError
from .writer import write_files

logger = logging.getLogger("kalendis_mcp")

GENERATE_TOOLS = tuple(DEFAULT_FILENAMES)


def _configure_logging() -> None:
    level = os.environ.get(config.LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kalendis-mcp",
        description="Generate TypeScript clients and route handlers for the Kalendis API.",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="run the MCP server on stdio")

    gen = sub.add_parser("generate", help="render one artifact")
    gen.add_argument("tool", choices=GENERATE_TOOLS)
    gen.add_argument("--environment", choices=config.ENVIRONMENTS)
    gen.add_argument("--framework", choices=config.FRAMEWORKS)
    gen.add_argument("--types-import-path", dest="types_import_path")
    gen.add_argument("--out", type=Path, help="write files under this directory instead of printing")
    return parser


def generate(args: argparse.Namespace) -> int:
    arguments = {
        "environment": args.environment,
        "framework": args.framework,
        "typesImportPath": args.types_import_path,
    }
    artifact = render_artifact(args.tool, arguments)

    if args.out is None:
        print(join_files(artifact) if isinstance(artifact, dict) else artifact)
        return 0

    written, skipped = write_files(args.out, artifact_files(args.tool, artifact))
    for path in written:
        print(f"Generated {path}")
    for path in skipped:
        print(f"Skipped {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)

    if args.command in (None, "serve"):
        from .server import run
        run()
        return 0

    try:
        return generate(args)
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
