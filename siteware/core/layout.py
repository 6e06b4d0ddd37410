"""Fixed names of a siteware project and its output tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

STATIC_DIR_NAME = "static"
SOURCE_DIR_NAME = "src"
TEMPLATE_DIR_NAME = "templates"
DIR_CONFIG_FILE_NAME = "siteware.json"
MASTER_CONFIG_FILE_NAME = "siteware.master.json"
DEFAULT_TEMPLATE_NAME = "default.template"
THUMB_DIR_NAME = ".thumbs"

PROTECTED_OUTPUT_NAMES = frozenset(
    {".git", STATIC_DIR_NAME, ".gitignore", "CNAME", ".nojekyll"}
)
HTML_SUFFIXES = frozenset({".html", ".htm"})
IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg"})


@dataclass(frozen=True)
class ProjectPaths:
    root: Path
    source: Path
    templates: Path
    static: Path
    master_config: Path

    @classmethod
    def from_root(cls, root: Path) -> ProjectPaths:
        root = root.resolve()
        return cls(
            root=root,
            source=root / SOURCE_DIR_NAME,
            templates=root / TEMPLATE_DIR_NAME,
            static=root / STATIC_DIR_NAME,
            master_config=root / MASTER_CONFIG_FILE_NAME,
        )
