from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image


def write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_image(path: Path, size: tuple[int, int], mode: str = "RGB") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A minimal project with an existing output directory named ``out``."""
    root = tmp_path / "site"
    (root / "src").mkdir(parents=True)
    (root / "templates").mkdir()
    (root / "static").mkdir()
    (root / "out").mkdir()
    (root / "templates" / "default.template").write_text(
        "<main>{{ content }}</main>", encoding="utf-8"
    )
    write_json(root / "siteware.master.json", {"output": "out"})
    return root
