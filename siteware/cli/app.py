"""Main CLI application."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer
from typing_extensions import Annotated

from ..build import pipeline
from ..configuration.master import load_build_config
from ..configuration.settings import ServeSettings
from ..core.context import resolve_output
from ..core.errors import SitewareError
from ..core.layout import ProjectPaths
from .parsers import parse_port, parse_project_dir

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="siteware",
    help="Static site generator: HTML fragments + Jinja2 templates + static assets.",
    no_args_is_help=True,
)

ProjectOption = Annotated[
    str,
    typer.Option(
        "--project",
        "-p",
        help="Project directory (default: cwd).",
        metavar="DIR",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _fail(exc: SitewareError) -> NoReturn:
    logger.error(str(exc))
    raise typer.Exit(code=1) from exc


@app.command()
def init(project: ProjectOption = "", verbose: VerboseOption = False) -> None:
    """Initialize a new empty project."""
    _configure_logging(verbose)
    project_dir = parse_project_dir(project)

    logger.info("Initializing new project...")
    try:
        pipeline.init_project(project_dir)
    except SitewareError as exc:
        _fail(exc)
    logger.info("Done!")


@app.command()
def build(project: ProjectOption = "", verbose: VerboseOption = False) -> None:
    """Build the project into the output directory from its configuration."""
    _configure_logging(verbose)
    project_dir = parse_project_dir(project)

    logger.debug(f"Building {project_dir}")
    try:
        pipeline.run_build(project_dir)
    except SitewareError as exc:
        _fail(exc)


@app.command()
def serve(
    project: ProjectOption = "",
    host: Annotated[
        str,
        typer.Option("--host", help="Bind address (default: SITEWARE_BIND_HOST or 127.0.0.1)."),
    ] = "",
    port: Annotated[
        Optional[int],
        typer.Option("--port", help="Bind port (default: SITEWARE_BIND_PORT or 8080)."),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Serve the built output directory over HTTP."""
    _configure_logging(verbose)
    project_dir = parse_project_dir(project)
    settings = ServeSettings()

    paths = ProjectPaths.from_root(project_dir)
    try:
        config = load_build_config(paths.master_config)
    except SitewareError as exc:
        _fail(exc)

    output = resolve_output(paths, config)
    if not output.is_dir():
        logger.error(f"Output directory {output} does not exist; run build first")
        raise typer.Exit(code=1)

    bind_host = host or settings.bind_host
    bind_port = parse_port(port) or config.port or settings.bind_port

    from .server import serve_directory

    logger.info(f"Serving files at http://{bind_host}:{bind_port}. Press Ctrl+C to terminate.")
    serve_directory(output, bind_host, bind_port)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
