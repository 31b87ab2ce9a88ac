import textwrap
from pathlib import Path

import pytest

from tplchain import DictSourceProvider, TemplateEngine

from tests.infrastructure.file_utils import write, write_templates


@pytest.fixture
def engine_for():
    """Фабрика движка поверх шаблонов в памяти."""
    def _make(templates, **kwargs) -> TemplateEngine:
        return TemplateEngine(DictSourceProvider(templates), **kwargs)
    return _make


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Минимальный проект: tplchain.yaml + каталог templates/ с цепочкой из трёх шаблонов."""
    root = tmp_path
    write(root / "tplchain.yaml", "template_path: templates\nmax_depth: 8\n")
    write_templates(root / "templates", {
        "base.tpl": textwrap.dedent("""\
            <title>{% block title %}Site{% endblock %}</title>
            {% block body %}empty{% endblock %}
            """),
        "layouts/page.tpl": textwrap.dedent("""\
            {% extends base %}
            {% block title %}${heading} | {% super %}{% endblock %}
            """),
        "news.tpl": textwrap.dedent("""\
            {% extends "layouts/page" %}
            {% block body %}<h1>${heading}</h1>{% endblock %}
            """),
        "list.tpl.py": textwrap.dedent("""\
            tpl.set_parent("base")
            with tpl.block("body"):
                for item in items.split(","):
                    tpl.write("<li>", item, "</li>")
            """),
    })
    return root
