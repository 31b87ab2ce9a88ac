"""
Tests for template source providers.
"""

import pytest

from tplchain.errors import TemplateNotFound
from tplchain.sources import DictSourceProvider, FileSystemSourceProvider, TemplateSource, kind_for_path

from tests.infrastructure.file_utils import write, write_templates


def test_filesystem_resolves_text_and_python(tmp_path):
    write_templates(tmp_path, {
        "base.tpl": "BASE",
        "pages/list.tpl.py": "tpl.write('x')",
    })
    provider = FileSystemSourceProvider(tmp_path)

    base = provider.resolve("base")
    assert base.text == "BASE"
    assert base.kind == "text"
    assert base.origin == str((tmp_path / "base.tpl").resolve())

    page = provider.resolve("pages/list")
    assert page.kind == "python"
    assert provider.exists("pages/list")


def test_filesystem_search_order(tmp_path):
    write(tmp_path / "first" / "x.tpl.py", "tpl.write('py')")
    write(tmp_path / "second" / "x.tpl", "second")
    write(tmp_path / "first" / "y.tpl", "first-y")
    write(tmp_path / "second" / "y.tpl", "second-y")
    provider = FileSystemSourceProvider([tmp_path / "first", tmp_path / "second"])

    # directory order first, then extension order
    assert provider.resolve("x").kind == "python"
    assert provider.resolve("y").text == "first-y"


def test_filesystem_custom_extensions(tmp_path):
    write(tmp_path / "page.html", "<p>")
    provider = FileSystemSourceProvider(tmp_path, extensions=[".html"])
    assert provider.resolve("page").text == "<p>"
    assert not provider.exists("page.html")


def test_filesystem_missing_lists_searched_paths(tmp_path):
    provider = FileSystemSourceProvider(tmp_path)
    with pytest.raises(TemplateNotFound) as exc:
        provider.resolve("ghost")
    assert exc.value.name == "ghost"
    assert len(exc.value.searched) == 2
    assert "Template not found: ghost" in str(exc.value)


@pytest.mark.parametrize("name", ["../secret", "/etc/passwd", "a/../../secret", ""])
def test_filesystem_rejects_escaping_names(tmp_path, name):
    write(tmp_path / "secret.tpl", "s")
    provider = FileSystemSourceProvider(tmp_path / "templates")
    assert not provider.exists(name)
    with pytest.raises(TemplateNotFound):
        provider.resolve(name)


def test_filesystem_list_names(tmp_path):
    write_templates(tmp_path, {
        "base.tpl": "",
        "pages/list.tpl.py": "",
        "notes.txt": "",
    })
    provider = FileSystemSourceProvider(tmp_path)
    assert provider.list_names() == ["base", "pages/list"]


def test_filesystem_requires_extensions(tmp_path):
    with pytest.raises(ValueError):
        FileSystemSourceProvider(tmp_path, extensions=[])


def test_dict_provider():
    provider = DictSourceProvider({"a": "A"})
    provider.add("b", TemplateSource(name="b", text="tpl.write('B')", kind="python"))

    assert provider.resolve("a") == TemplateSource(name="a", text="A", kind="text", origin="<memory:a>")
    assert provider.resolve("b").kind == "python"
    assert provider.list_names() == ["a", "b"]
    with pytest.raises(TemplateNotFound):
        provider.resolve("c")


def test_kind_for_path():
    assert kind_for_path("x.tpl.py") == "python"
    assert kind_for_path("x.tpl") == "text"
