from __future__ import annotations

import os
from pathlib import Path

import pytest

from siteware.core.errors import FilesystemError, RenderError
from siteware.rendering.engine import TemplateRenderer, resolve_template_name
from siteware.rendering.functions import read_directory


@pytest.fixture
def renderer(project: Path) -> TemplateRenderer:
    return TemplateRenderer(project / "templates", project)


def _source(project: Path, name: str, text: str) -> Path:
    path = project / "src" / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_template_name_uses_default(name: str | None) -> None:
    assert resolve_template_name(name) == "default.template"


def test_named_template_is_kept() -> None:
    assert resolve_template_name("page.template") == "page.template"


def test_fragment_is_wrapped_by_default_template(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "index.html", "<p>Hello</p>")
    dest = renderer.render_file(None, source, project / "out" / "index.html")
    assert dest.read_text(encoding="utf-8") == "<main><p>Hello</p></main>"


def test_data_payload_reaches_fragment_and_layout(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "page.template").write_text(
        "<title>{{ data.title }}</title>{{ content }}", encoding="utf-8"
    )
    source = _source(project, "about.html", "<h1>{{ data.title }}</h1>{% for tag in data.tags %}[{{ tag }}]{% endfor %}")
    text = renderer.render_text("page.template", source, {"title": "About", "tags": ["a", "b"]})
    assert text == "<title>About</title><h1>About</h1>[a][b]"


def test_scalar_data_and_escaping(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "scalar.template").write_text("{{ data }}|{{ content }}", encoding="utf-8")
    source = _source(project, "x.html", "<b>{{ data }}</b>")
    text = renderer.render_text("scalar.template", source, "<i>")
    assert text == "&lt;i&gt;|<b>&lt;i&gt;</b>"


def test_absent_data_is_none(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "none.template").write_text(
        "{% if data is none %}no data{% endif %}", encoding="utf-8"
    )
    source = _source(project, "x.html", "")
    assert renderer.render_text("none.template", source) == "no data"


def test_page_description_is_available(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "page.template").write_text("{{ page.path }}", encoding="utf-8")
    source = _source(project, "x.html", "")
    text = renderer.render_text("page.template", source, page={"name": "x.html", "path": "blog/x.html", "source": ""})
    assert text == "blog/x.html"


def test_missing_template_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "index.html", "hi")
    with pytest.raises(RenderError, match="Template not found"):
        renderer.render_file("nope.template", source, project / "out" / "index.html")
    assert not (project / "out" / "index.html").exists()


def test_template_syntax_error_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "bad.template").write_text("{% if %}", encoding="utf-8")
    source = _source(project, "index.html", "hi")
    with pytest.raises(RenderError):
        renderer.render_text("bad.template", source)


def test_fragment_syntax_error_names_source(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "broken.html", "{% for %}")
    with pytest.raises(RenderError, match="broken.html"):
        renderer.render_text(None, source)


def test_undefined_variable_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "index.html", "{{ missing_variable }}")
    with pytest.raises(RenderError):
        renderer.render_text(None, source)


def test_readdir_lists_entries(project: Path, renderer: TemplateRenderer) -> None:
    (project / "static" / "b.css").write_text("b", encoding="utf-8")
    (project / "static" / "a.css").write_text("aaa", encoding="utf-8")
    (project / "static" / "img").mkdir()
    source = _source(
        project,
        "list.html",
        '{% for e in readdir("static") %}{{ e.name }}:{{ e.size if not e.is_dir else "dir" }};{% endfor %}',
    )
    assert renderer.render_text(None, source) == "<main>a.css:3;b.css:1;img:dir;</main>"


def test_readdir_soft_fails_on_missing_directory(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "list.html", '{{ readdir("does/not/exist") | length }}')
    assert renderer.render_text(None, source) == "<main>0</main>"


def test_read_directory_never_raises(tmp_path: Path) -> None:
    a_file = tmp_path / "file.txt"
    a_file.write_text("x", encoding="utf-8")
    assert read_directory(a_file) == []
    assert read_directory("\0bad") == []
    entries = read_directory(tmp_path)
    assert [entry.name for entry in entries] == ["file.txt"]
    assert entries[0].size == 1
    assert entries[0].mod_time.tzinfo is not None


def test_non_utf8_fragment_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    source = project / "src" / "latin.html"
    source.write_bytes(b"\xff\xfe bad")
    with pytest.raises(RenderError, match="latin.html"):
        renderer.render_text(None, source)


def test_non_utf8_template_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    (project / "templates" / "latin.template").write_bytes(b"<p>\xff</p>{{ content }}")
    source = _source(project, "index.html", "hi")
    with pytest.raises(RenderError, match="latin.template"):
        renderer.render_text("latin.template", source)


def test_type_error_in_template_is_render_error(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "index.html", "{{ data + 1 }}")
    with pytest.raises(RenderError, match="index.html"):
        renderer.render_text(None, source, data="text")


def test_write_failure_leaves_no_temporary_file(project: Path, renderer: TemplateRenderer) -> None:
    source = _source(project, "index.html", "hi")
    destination = project / "out" / "index.html"
    destination.mkdir()
    with pytest.raises(FilesystemError, match="Error writing"):
        renderer.render_file(None, source, destination)
    assert sorted(path.name for path in destination.parent.iterdir()) == ["index.html"]


def test_read_directory_keeps_dangling_symlinks(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")
    os.symlink(tmp_path / "nowhere", tmp_path / "dangling")
    entries = read_directory(tmp_path)
    assert [entry.name for entry in entries] == ["a.txt", "dangling"]
    assert not entries[1].is_dir
