"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path

import typer


def parse_project_dir(value: str) -> Path:
    """Parse a project directory argument; it must exist."""
    path = Path(value) if value else Path.cwd()
    if not path.is_dir():
        raise typer.BadParameter(f"Not a directory: {value!r}")
    return path


def parse_port(value: int | None) -> int | None:
    """Validate a TCP port number."""
    if value is None:
        return None
    if not 0 < value < 65536:
        raise typer.BadParameter(f"Invalid port: {value}")
    return value
