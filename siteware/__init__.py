"""Siteware - static site generator.

Renders a tree of HTML fragments through Jinja2 templates chosen by
per-directory configuration and mirrors static assets into an output tree.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .build.pipeline import init_project, run_build  # noqa: E402
from .cli import main  # noqa: E402

__all__ = ["__version__", "init_project", "main", "run_build"]
