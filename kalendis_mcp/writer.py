"""Write generated artifacts to disk, asking before overwriting."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

Confirm = Callable[[Path], bool]


def prompt_overwrite(path: Path) -> bool:
    """Ask on stdin whether an existing file may be replaced."""
    answer = input(f"{path} already exists. Overwrite? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def write_file(path: Path, content: str, confirm: Confirm | None = None) -> bool:
    """Write content to path, creating parent directories.

    Returns False without touching the file when it exists and confirm
    declines.
    """
    path = Path(path)
    if path.exists():
        ask = confirm or prompt_overwrite
        if not ask(path):
            logger.info("Skipped existing %s", path)
            return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
    return True


def write_files(
    base_dir: Path,
    files: Mapping[str, str],
    confirm: Confirm | None = None,
) -> tuple[list[Path], list[Path]]:
    """Write relative-path -> content pairs under base_dir.

    Returns (written, skipped) in the order of files.
    """
    written: list[Path] = []
    skipped: list[Path] = []
    for relative, content in files.items():
        target = Path(base_dir) / relative
        if write_file(target, content, confirm):
            written.append(target)
        else:
            skipped.append(target)
    return written, skipped
