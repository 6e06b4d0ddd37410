"""Build pipeline: reconcile output, sync statics, render the source tree."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from ..configuration.directory import DirectoryConfigResolver
from ..configuration.master import load_build_config
from ..core.context import BuildContext
from ..core.errors import ConfigError, FilesystemError
from ..core.layout import STATIC_DIR_NAME, ProjectPaths
from ..rendering.engine import TemplateRenderer
from .reconcile import clear_output
from .sync import sync_tree
from .walker import BuildReport, walk_source_tree

logger = logging.getLogger(__name__)


def create_context(project_root: Path) -> BuildContext:
    """Load the build configuration and assemble a fresh build context.

    Nothing on disk is modified here, so an invalid configuration aborts
    the build before the output tree is touched.
    """
    paths = ProjectPaths.from_root(project_root)
    config = load_build_config(paths.master_config)
    context = BuildContext(
        paths=paths,
        config=config,
        resolver=DirectoryConfigResolver(),
        logger=logger,
    )

    output = context.output.resolve()
    if output == paths.root or paths.root.is_relative_to(output):
        raise ConfigError(f"Refusing to build into {output}: it contains the project")
    if output.is_relative_to(paths.source):
        raise ConfigError(f"Refusing to build into {output}: it is inside the source tree")

    return context


def run_build(project_root: Path) -> BuildReport:
    """Regenerate the output tree of the project at ``project_root``.

    Args:
        project_root: Directory holding the master config, src/, templates/ and static/

    Returns:
        Summary of the generated output
    """
    context = create_context(project_root)
    log = context.logger

    log.info("Clearing output...")
    removed = clear_output(context.output, context.protected_names)
    log.debug(f"Removed {len(removed)} entr{'y' if len(removed) == 1 else 'ies'}")

    log.info("Syncing statics...")
    sync_tree(context.paths.static, context.output / STATIC_DIR_NAME)

    log.info("Generating HTML files...")
    renderer = TemplateRenderer(context.paths.templates, context.paths.root)
    report = walk_source_tree(context, renderer)

    log.info(
        f"Done! {len(report.pages)} page(s), {len(report.thumbnails)} thumbnail(s) "
        f"→ {context.output}"
    )
    return report


def init_project(project_root: Path) -> list[Path]:
    """Create empty static, source and template directories.

    Args:
        project_root: Existing project directory

    Returns:
        The scaffolded directories
    """
    paths = ProjectPaths.from_root(project_root)
    try:
        mode = stat.S_IMODE(paths.root.stat().st_mode)
    except OSError as exc:
        raise FilesystemError(f"Error reading project directory info: {exc}") from exc

    created = []
    for directory in (paths.static, paths.source, paths.templates):
        try:
            directory.mkdir(mode=mode, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Error creating {directory}: {exc}") from exc
        logger.debug(f"Created {directory}")
        created.append(directory)

    return created
