"""
Тесты этапов разрешения цепочки: порядок, линейные проходы и ограничители.
"""

import itertools

import pytest

from tplchain.capture import TemplateBuilder
from tplchain.errors import InheritanceDepthExceeded, RenderTimeout, TemplateNotFound, UnclosedBlock
from tplchain.resolver import ChainResolver, compile_chain, resolve_supers
from tplchain.sources import DictSourceProvider

CHAIN = {
    "root": "<{% block a %}r{% endblock %}|{% block b %}R{% endblock %}>",
    "mid": "{% extends root %}{% block a %}{% super %}m{% endblock %}",
    "leaf": "{% extends mid %}{% block a %}{% super %}l{% endblock %}{% block b %}L{% endblock %}",
}


@pytest.fixture
def resolver():
    return ChainResolver(DictSourceProvider(CHAIN))


def test_parse_chain_is_leaf_first_and_linked(resolver):
    chain = resolver.parse_chain("leaf")
    assert [u.name for u in chain] == ["leaf", "mid", "root"]
    assert chain[0].parent is chain[1]
    assert chain[1].parent is chain[2]
    assert chain[2].parent is None
    assert [u.name for u in chain[0].ancestors()] == ["mid", "root"]
    assert chain[0].chain() == chain


def test_blocks_keep_declaration_order(resolver):
    leaf = resolver.parse_chain("leaf")[0]
    assert list(leaf.blocks) == ["a", "b"]


def test_resolve_supers_returns_leaf_view_of_block_texts(resolver):
    chain = resolver.parse_chain("leaf")
    texts = resolve_supers(chain)
    assert texts == {"a": "rml", "b": "L"}
    assert chain[1].blocks["a"].render() == "rm"


def test_compile_chain_returns_root_text(resolver):
    chain = resolver.parse_chain("leaf")
    resolve_supers(chain)
    assert compile_chain(chain) == "<rml|L>"


def test_single_template_chain(resolver):
    assert resolver.render("root") == "<r|R>"


def test_depth_bound():
    templates = {f"t{i}": f"{{% extends t{i + 1} %}}" for i in range(10)}
    templates["t10"] = "end"
    resolver = ChainResolver(DictSourceProvider(templates), max_depth=5)
    with pytest.raises(InheritanceDepthExceeded) as exc:
        resolver.render("t0")
    assert exc.value.max_depth == 5
    assert exc.value.template == "t4"


def test_depth_bound_allows_exact_length():
    templates = {"a": "{% extends b %}", "b": "{% extends c %}", "c": "C"}
    resolver = ChainResolver(DictSourceProvider(templates), max_depth=3)
    assert resolver.render("a") == "C"


def test_cyclic_inheritance_is_stopped_by_depth_bound():
    templates = {"a": "{% extends b %}", "b": "{% extends a %}"}
    resolver = ChainResolver(DictSourceProvider(templates), max_depth=6)
    with pytest.raises(InheritanceDepthExceeded):
        resolver.render("a")


def test_invalid_max_depth():
    with pytest.raises(ValueError):
        ChainResolver(DictSourceProvider({}), max_depth=0)


def test_time_budget_exceeded():
    ticks = itertools.count(0, 10)
    resolver = ChainResolver(
        DictSourceProvider(CHAIN), time_budget=15, clock=lambda: float(next(ticks))
    )
    with pytest.raises(RenderTimeout) as exc:
        resolver.render("leaf")
    assert exc.value.budget == 15


def test_time_budget_not_exceeded():
    resolver = ChainResolver(DictSourceProvider(CHAIN), time_budget=60, clock=lambda: 0.0)
    assert resolver.render("leaf") == "<rml|L>"


def test_capture_is_unwound_on_error(monkeypatch):
    aborted = []
    original = TemplateBuilder.abort

    def spy(self):
        aborted.append((self.unit.name, self.depth))
        original(self)

    monkeypatch.setattr(TemplateBuilder, "abort", spy)
    resolver = ChainResolver(DictSourceProvider({"t": "{% block a %}{% block b %}x"}))

    with pytest.raises(UnclosedBlock):
        resolver.render("t")
    assert aborted == [("t", 3)]


def test_missing_template_creates_no_capture_state(monkeypatch):
    created = []
    original_init = TemplateBuilder.__init__

    def spy(self, unit):
        created.append(unit.name)
        original_init(self, unit)

    monkeypatch.setattr(TemplateBuilder, "__init__", spy)
    resolver = ChainResolver(DictSourceProvider({"leaf": "{% extends ghost %}"}))

    with pytest.raises(TemplateNotFound):
        resolver.render("leaf")
    assert created == ["leaf"]
