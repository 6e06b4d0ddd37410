"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, TemplateNotFound
from markupsafe import Markup

from ..core.errors import FilesystemError, RenderError
from ..core.layout import DEFAULT_TEMPLATE_NAME
from .functions import make_readdir
from .io import atomic_write_text

logger = logging.getLogger(__name__)


def resolve_template_name(name: str | None) -> str:
    """Return ``name``, or the default template when it is unset or blank."""
    if name is None or not name.strip():
        return DEFAULT_TEMPLATE_NAME
    return name


class TemplateRenderer:
    """Renders source fragments through layout templates.

    A source file is first rendered on its own, then handed to the layout
    as ``content`` alongside the ``data`` payload from its directory
    configuration and a ``page`` description. Templates may call
    ``readdir(path)`` to list a directory.
    """

    def __init__(self, templates_dir: Path, project_root: Path, file_mode: int = 0o644) -> None:
        self.templates_dir = templates_dir
        self.file_mode = file_mode
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            undefined=StrictUndefined,
            autoescape=True,
            keep_trailing_newline=True,
        )
        self.env.globals["readdir"] = make_readdir(project_root)

    def load_template(self, name: str | None) -> Template:
        """Load a layout template from the templates directory.

        Args:
            name: Template file name, or None/blank for the default

        Returns:
            Compiled Jinja2 template
        """
        template_name = resolve_template_name(name)
        try:
            return self.env.get_template(template_name)
        except TemplateNotFound as exc:
            raise RenderError(
                f"Template not found: {self.templates_dir / template_name}"
            ) from exc
        except TemplateError as exc:
            raise RenderError(f"Error parsing template {template_name}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise RenderError(
                f"Template {self.templates_dir / template_name} is not valid UTF-8: {exc}"
            ) from exc

    def render_text(
        self, template_name: str | None, source: Path, data: Any = None, page: dict | None = None
    ) -> str:
        """Render ``source`` through a layout and return the text.

        Args:
            template_name: Layout template name, or None/blank for the default
            source: Source fragment path
            data: Payload exposed to both fragment and layout as ``data``
            page: Extra page description; defaults to the source name

        Returns:
            Rendered document
        """
        layout = self.load_template(template_name)

        try:
            fragment_text = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(f"Source {source} is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise FilesystemError(f"Error reading source {source}: {exc}") from exc

        if page is None:
            page = {"name": source.name, "path": source.name, "source": str(source)}
        context = {"data": data, "page": page}

        try:
            fragment = self.env.from_string(fragment_text)
        except TemplateError as exc:
            raise RenderError(f"Error parsing {source}: {exc}") from exc

        try:
            content = fragment.render(**context)
            return layout.render(content=Markup(content), **context)
        except (TemplateError, TypeError, ValueError) as exc:
            raise RenderError(
                f"Error rendering {layout.name} for {source}: {exc}"
            ) from exc

    def render_file(
        self,
        template_name: str | None,
        source: Path,
        destination: Path,
        data: Any = None,
        page: dict | None = None,
    ) -> Path:
        """Render ``source`` and write the result to ``destination``.

        Returns:
            Destination path
        """
        logger.debug(f"Rendering {source} with {resolve_template_name(template_name)}")

        rendered_text = self.render_text(template_name, source, data, page)

        try:
            atomic_write_text(destination, rendered_text, mode=self.file_mode)
        except OSError as exc:
            raise FilesystemError(f"Error writing {destination}: {exc}") from exc

        logger.debug(f"Rendered {source} → {destination}")
        return destination
